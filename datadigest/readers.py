from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import pandas as pd

CSV_SUFFIXES = {".csv", ".txt"}
SAS_FORMATS = {".sas7bdat": "sas7bdat", ".xpt": "xport"}


def frame_name(filename: str) -> str:
    return Path(filename).stem


def read_table(source: Union[str, Path, bytes], filename: str = "") -> pd.DataFrame:
    """Read a CSV or SAS file from a path or from uploaded bytes."""
    label = filename or (str(source) if not isinstance(source, bytes) else "")
    suffix = Path(label).suffix.lower()
    handle = io.BytesIO(source) if isinstance(source, bytes) else source

    if suffix in SAS_FORMATS:
        df = pd.read_sas(handle, format=SAS_FORMATS[suffix], encoding="utf-8")
        return df
    if suffix and suffix not in CSV_SUFFIXES:
        raise ValueError(f"Unsupported file type: {suffix} ({label})")
    return pd.read_csv(handle, dtype=str, keep_default_na=True)
