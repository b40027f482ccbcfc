"""
Demo catalog: small classic sample tables bundled as CSV under data/.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pandas as pd

DATA_DIR = Path(__file__).resolve().parent / "data"

# Catalog order is fixed; it follows the case-insensitive listing of the names.
DEMO_DATASETS = ("airquality", "BOD", "cars", "iris", "mtcars", "PlantGrowth", "women")

CATEGORICAL_COLUMNS = {"iris": ["Species"], "PlantGrowth": ["group"]}


def load_demo(name: str) -> pd.DataFrame:
    path = DATA_DIR / f"{name}.csv"
    if not path.exists():
        raise FileNotFoundError(f"Demo dataset not found: {path}")
    df = pd.read_csv(path)
    for col in CATEGORICAL_COLUMNS.get(name, []):
        df[col] = df[col].astype("category")
    return df


def demo_catalog() -> List[Tuple[str, pd.DataFrame]]:
    """Every demo frame as (name, frame), in catalog order."""
    return [(name, load_demo(name)) for name in DEMO_DATASETS]
