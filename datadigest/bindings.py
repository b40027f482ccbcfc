"""
Output/render bindings for hosting the explorer in a web app page.

explorer_output() reserves a sized container for an output id;
render_explorer() wraps an expression that builds an ExplorerWidget so the
host can evaluate it on demand.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from datadigest.explorer import DEFAULT_HEIGHT, DEFAULT_WIDTH, WIDGET_NAME, WIDGET_PACKAGE, ExplorerWidget
from datadigest.utils import validate_css_unit


@dataclass(frozen=True)
class OutputSlot:
    output_id: str
    width: str
    height: str
    widget: str = WIDGET_NAME
    package: str = WIDGET_PACKAGE

    def to_html(self) -> str:
        return (
            f'<div id="{html.escape(self.output_id)}" '
            f'class="{html.escape(self.widget)} html-widget html-widget-output" '
            f'style="width:{html.escape(self.width)};height:{html.escape(self.height)};"></div>'
        )


def explorer_output(
    output_id: str,
    width: Union[str, int, float] = DEFAULT_WIDTH,
    height: Union[str, int, float] = DEFAULT_HEIGHT,
) -> OutputSlot:
    if not output_id:
        raise ValueError("output_id must be a non-empty string")
    return OutputSlot(
        output_id=output_id,
        width=validate_css_unit(width),
        height=validate_css_unit(height),
    )


def render_explorer(
    expr: Callable[..., ExplorerWidget],
    env: Optional[Mapping[str, Any]] = None,
    quoted: bool = False,
) -> Callable[[], Dict[str, Any]]:
    """Bind an explorer expression for later evaluation.

    quoted=True means expr takes the env mapping as its only argument;
    otherwise expr is a zero-argument callable.
    """
    if not callable(expr):
        raise TypeError("expr must be callable")
    if quoted:
        bound_env = MappingProxyType(dict(env) if env is not None else {})

        def evaluate() -> Any:
            return expr(bound_env)

    else:
        evaluate = expr

    def render() -> Dict[str, Any]:
        widget = evaluate()
        if not isinstance(widget, ExplorerWidget):
            raise TypeError(f"expression returned {type(widget).__name__}, expected ExplorerWidget")
        return widget.to_dict()

    return render
