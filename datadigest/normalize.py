"""
Frame normalization for the codebook explorer.

Every column is printed to text and every missing value becomes an empty
string, so the widget can treat all cells the same way. Shape never changes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Set

import numpy as np
import pandas as pd

CONTAINER_TYPES = (list, tuple, set, frozenset, dict, np.ndarray)


@dataclass(frozen=True)
class NormalizedFrame:
    row_count: int
    column_count: int
    frame: pd.DataFrame


def is_tabular(value: Any) -> bool:
    """True for DataFrames and for instances exposing the interchange protocol."""
    if isinstance(value, type):
        return False
    if isinstance(value, pd.DataFrame):
        return True
    return callable(getattr(value, "__dataframe__", None))


def as_frame(value: Any) -> pd.DataFrame:
    if isinstance(value, pd.DataFrame):
        return value
    if is_tabular(value):
        try:
            return pd.api.interchange.from_dataframe(value)
        except (TypeError, ValueError, NotImplementedError, RuntimeError):
            pass
        to_pandas = getattr(value, "to_pandas", None)
        if callable(to_pandas):
            return to_pandas()
    if isinstance(value, pd.Series):
        return value.to_frame(name=value.name if value.name is not None else "value")
    if isinstance(value, (dict, list, tuple, np.ndarray)):
        try:
            return pd.DataFrame(value)
        except (TypeError, ValueError):
            pass
    return pd.DataFrame({"value": [value]})


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, CONTAINER_TYPES):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _container_text(value: Any) -> str:
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)
    return json.dumps(value, default=str, ensure_ascii=False, separators=(",", ":"))


def to_text(value: Any) -> str:
    """Printed form of a single cell; missing values print as ''."""
    if isinstance(value, CONTAINER_TYPES):
        return _container_text(value)
    if _is_missing(value):
        return ""
    if isinstance(value, (bool, np.bool_)):
        return str(bool(value))
    if isinstance(value, (float, np.floating)):
        return format(float(value), ".15g")
    if isinstance(value, pd.Timestamp):
        if value == value.normalize() and value.tzinfo is None:
            return value.strftime("%Y-%m-%d")
        return value.isoformat(sep=" ")
    return str(value)


def _column_text(series: pd.Series) -> List[str]:
    if pd.api.types.is_datetime64_any_dtype(series.dtype):
        present = series.dropna()
        # date-only columns print without a time part
        if series.dt.tz is None and (present == present.dt.normalize()).all():
            return ["" if pd.isna(v) else v.strftime("%Y-%m-%d") for v in series.tolist()]
        return ["" if pd.isna(v) else v.isoformat(sep=" ") for v in series.tolist()]
    if isinstance(series.dtype, pd.CategoricalDtype):
        return [to_text(v) for v in series.astype(object).tolist()]
    return [to_text(v) for v in series.tolist()]


def _label_text(label: Any) -> str:
    if isinstance(label, tuple):
        return "_".join(to_text(part) for part in label if not _is_missing(part))
    return to_text(label)


def unique_labels(labels: List[str]) -> List[str]:
    """Make labels distinct with .1, .2 suffixes, keeping the first as-is."""
    seen = set(labels)
    counts: Dict[str, int] = {}
    out: List[str] = []
    used: Set[str] = set()
    for label in labels:
        if label not in used:
            out.append(label)
            used.add(label)
            continue
        n = counts.get(label, 0)
        while True:
            n += 1
            candidate = f"{label}.{n}"
            if candidate not in used and candidate not in seen:
                break
        counts[label] = n
        out.append(candidate)
        used.add(candidate)
    return out


def has_list_columns(frame: pd.DataFrame) -> bool:
    if isinstance(frame.columns, pd.MultiIndex):
        return True
    for col in range(frame.shape[1]):
        series = frame.iloc[:, col]
        if series.dtype != object:
            continue
        if series.map(lambda v: isinstance(v, CONTAINER_TYPES)).any():
            return True
    return False


def normalize_frame(frame: Any) -> NormalizedFrame:
    df = as_frame(frame)
    labels = unique_labels([_label_text(c) for c in df.columns])
    columns = {label: _column_text(df.iloc[:, i]) for i, label in enumerate(labels)}
    if labels:
        normalized = pd.DataFrame(columns, columns=labels, dtype=object)
    else:
        normalized = pd.DataFrame(index=range(len(df)))
    return NormalizedFrame(
        row_count=int(df.shape[0]),
        column_count=int(df.shape[1]),
        frame=normalized,
    )


def frame_to_json(frame: pd.DataFrame) -> str:
    """Row-major array of row objects, keys in column order, compact separators."""
    labels = [str(c) for c in frame.columns]
    if not labels:
        records: List[dict] = [{} for _ in range(len(frame))]
    else:
        cols = [frame.iloc[:, i].tolist() for i in range(len(labels))]
        records = [dict(zip(labels, row)) for row in zip(*cols)]
    return json.dumps(records, ensure_ascii=False, separators=(",", ":"))
