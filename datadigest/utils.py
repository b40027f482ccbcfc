from __future__ import annotations

import re
from typing import Optional, Union

CSS_UNIT_RE = re.compile(
    r"^-?\d*\.?\d+(px|%|em|rem|ex|ch|vw|vh|vmin|vmax|cm|mm|in|pt|pc)$", re.I
)
CSS_KEYWORDS = {"auto", "inherit", "initial", "fit-content"}
CALC_BODY_RE = re.compile(r"^[0-9.%a-z\s+\-*/()]+$", re.I)


def parse_bool(value: str | bool | None, default: bool = False) -> bool:
    """Parse common CLI truthy/falsey strings."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"1", "true", "t", "yes", "y"}:
        return True
    if normalized in {"0", "false", "f", "no", "n"}:
        return False
    return default


def validate_css_unit(value: Union[str, int, float, None]) -> Optional[str]:
    """Return a CSS size string; bare numbers get a px suffix."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid CSS size: {value!r}")
    if isinstance(value, (int, float)):
        return f"{value:g}px"
    text = str(value).strip()
    if text.lower() in CSS_KEYWORDS or CSS_UNIT_RE.match(text):
        return text
    if re.match(r"^-?\d*\.?\d+$", text):
        return f"{text}px"
    if _is_calc(text):
        return text
    raise ValueError(f"Invalid CSS size: {value!r}")


def _is_calc(text: str) -> bool:
    """calc(...) holding only numbers, units, operators and balanced parentheses."""
    if not (text.lower().startswith("calc(") and text.endswith(")")):
        return False
    body = text[5:-1]
    if not body.strip() or not CALC_BODY_RE.match(body):
        return False
    depth = 0
    for ch in body:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0
