"""
Source resolution for the codebook explorer.

Turns the caller's data argument into an ordered list of (name, frame) pairs.

Precedence
  1. demo=True: the demo catalog, nothing else.
  2. Explicit data: a mapping, a sequence of frames / (name, frame) pairs /
     identifiers, a single frame, or a single identifier.
  3. add_env=True: every tabular binding in the scope, appended after (2).

The scope is a read-only mapping of names to values. When none is given the
__main__ namespace is used, which is the interactive session's globals.
"""

from __future__ import annotations

import sys
import warnings
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from datadigest.demo import demo_catalog
from datadigest.errors import FrameNotFoundError, ListColumnWarning, NoScopeFramesWarning
from datadigest.normalize import as_frame, has_list_columns, is_tabular

Pair = Tuple[str, Any]

NO_SCOPE_FRAMES_MSG = (
    "No datasets to add from working environment; "
    "continuing with other user specified data sets."
)
LIST_COLUMN_MSG = "Explorer may not work as expected on frames that contain list-columns: {names}"


class FrameSource:
    """Explicitly named data for the explorer.

    Example: FrameSource().with_frame("Cars", cars).with_name("iris")
    """

    def __init__(self) -> None:
        self._items: List[Any] = []

    def with_frame(self, name: str, frame: Any) -> "FrameSource":
        self._items.append((name, frame))
        return self

    def with_name(self, identifier: str) -> "FrameSource":
        self._items.append(identifier)
        return self

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


def default_scope() -> Mapping[str, Any]:
    main = sys.modules.get("__main__")
    return vars(main) if main is not None else {}


def _scope_bindings(scope: Mapping[str, Any]) -> Iterable[Tuple[str, Any]]:
    for name, value in list(scope.items()):
        if not isinstance(name, str) or name.startswith("_"):
            continue
        yield name, value


def infer_name(frame: Any, scope: Optional[Mapping[str, Any]]) -> str:
    """Identifier bound to this exact object in scope, or '' when there is none."""
    if scope is None:
        return ""
    for name, value in _scope_bindings(scope):
        if value is frame:
            return name
    return ""


def _lookup(identifier: str, scope: Mapping[str, Any]) -> Pair:
    name = identifier.strip()
    if name not in scope:
        raise FrameNotFoundError(name)
    return name, as_frame(scope[name])


def _is_pair(item: Any) -> bool:
    return isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str) and not is_tabular(item)


def resolve_data(data: Any, scope: Optional[Mapping[str, Any]] = None) -> List[Pair]:
    """Resolve explicit data only."""
    if data is None:
        return []
    lookup_scope = scope if scope is not None else default_scope()

    if isinstance(data, str):
        return [_lookup(data, lookup_scope)]
    if is_tabular(data):
        return [(infer_name(data, lookup_scope), as_frame(data))]
    if isinstance(data, Mapping):
        pairs: List[Pair] = []
        for key, frame in data.items():
            name = str(key).strip() if key is not None else ""
            if not name:
                name = infer_name(frame, lookup_scope)
            pairs.append((name, as_frame(frame)))
        return pairs

    pairs = []
    for item in data:
        if isinstance(item, str):
            pairs.append(_lookup(item, lookup_scope))
        elif _is_pair(item):
            name, frame = item
            name = name.strip() or infer_name(frame, lookup_scope)
            pairs.append((name, as_frame(frame)))
        else:
            pairs.append((infer_name(item, lookup_scope), as_frame(item)))
    return pairs


def scan_scope(scope: Mapping[str, Any], stacklevel: int = 2) -> List[Pair]:
    """Every tabular binding in scope, in enumeration order, with advisory warnings.

    stacklevel is passed to warnings.warn; 2 points at the caller of scan_scope.
    """
    pairs = [(name, value) for name, value in _scope_bindings(scope) if is_tabular(value)]
    if not pairs:
        warnings.warn(NO_SCOPE_FRAMES_MSG, NoScopeFramesWarning, stacklevel=stacklevel)
        return []

    frames = [(name, as_frame(value)) for name, value in pairs]
    flagged = [name for name, frame in frames if has_list_columns(frame)]
    if flagged:
        warnings.warn(
            LIST_COLUMN_MSG.format(names=", ".join(flagged)),
            ListColumnWarning,
            stacklevel=stacklevel,
        )
    return frames


def resolve_sources(
    data: Any = None,
    add_env: bool = True,
    demo: bool = False,
    scope: Optional[Mapping[str, Any]] = None,
    stacklevel: int = 2,
) -> List[Pair]:
    if demo:
        return demo_catalog()

    pairs = resolve_data(data, scope)
    if add_env:
        pairs.extend(scan_scope(scope if scope is not None else default_scope(), stacklevel=stacklevel + 1))
    return pairs
