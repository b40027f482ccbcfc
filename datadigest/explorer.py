"""
Interactive codebook explorer payload.

Builds the settings object consumed by the explorer HTML/JS widget: one
codebook entry per frame (name, shape, row JSON) plus display settings.

How to use
  from datadigest.explorer import explorer
  explorer(data={"Cars": cars, "Plants": plants}, add_env=False)
  explorer(data=["cars", "plants"], scope=globals())
  explorer(demo=True).to_html()

Payload shape
  {"rParams": {"addEnv": bool},
   "settings": {"files": [{"File", "Rows", "Columns", "json"}, ...],
                "meta": {}, "labelCol": "File"}}
"""

from __future__ import annotations

import html
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from datadigest.models import LABEL_COL, CodebookEntry, Payload, RParams, Settings
from datadigest.normalize import frame_to_json, normalize_frame
from datadigest.resolve import resolve_sources
from datadigest.utils import validate_css_unit

WIDGET_NAME = "explorer"
WIDGET_PACKAGE = "datadigest"
DEFAULT_WIDTH = "100%"
DEFAULT_HEIGHT = "400px"


@dataclass(frozen=True)
class ExplorerConfig:
    add_env: bool = True
    demo: bool = False
    label_col: str = LABEL_COL
    viewer_fill: bool = False
    width: str = DEFAULT_WIDTH
    height: str = DEFAULT_HEIGHT


def build_entry(name: str, frame: Any) -> CodebookEntry:
    normalized = normalize_frame(frame)
    return CodebookEntry(
        file=name,
        rows=normalized.row_count,
        columns=normalized.column_count,
        json_rows=frame_to_json(normalized.frame),
    )


def assemble_codebook(pairs: Iterable[Tuple[str, Any]]) -> List[CodebookEntry]:
    """One entry per pair, same order, duplicates kept."""
    return [build_entry(name, frame) for name, frame in pairs]


def build_settings(entries: List[CodebookEntry], label_col: str = LABEL_COL) -> Settings:
    return Settings(files=list(entries), meta={}, label_col=label_col)


def build_payload(entries: List[CodebookEntry], add_env: bool, label_col: str = LABEL_COL) -> Payload:
    return Payload(
        r_params=RParams(add_env=add_env),
        settings=build_settings(entries, label_col),
    )


@dataclass
class ExplorerWidget:
    x: Payload
    name: str = WIDGET_NAME
    package: str = WIDGET_PACKAGE
    sizing_policy: Dict[str, Any] = field(default_factory=lambda: {"viewer_fill": False})
    width: Optional[str] = None
    height: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "package": self.package,
            "x": self.x.to_wire(),
            "sizingPolicy": dict(self.sizing_policy),
            "width": self.width,
            "height": self.height,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.x.to_wire(), ensure_ascii=False, indent=indent)

    def to_html(self, element_id: str = "explorer-1", script_src: Optional[str] = None) -> str:
        """Standalone page; the widget script reads the payload from the JSON block."""
        width = validate_css_unit(self.width or DEFAULT_WIDTH)
        height = validate_css_unit(self.height or DEFAULT_HEIGHT)
        # keep "</script>" inside cell text from closing the block
        payload = self.to_json().replace("</", "<\\/")
        script = f'<script src="{html.escape(script_src)}"></script>\n' if script_src else ""
        return (
            "<!DOCTYPE html>\n"
            "<html>\n<head>\n<meta charset=\"utf-8\"/>\n"
            f"<title>{html.escape(self.package)} {html.escape(self.name)}</title>\n"
            f"{script}"
            "</head>\n<body>\n"
            f'<div id="{html.escape(element_id)}" class="{html.escape(self.name)} html-widget" '
            f'style="width:{html.escape(width)};height:{html.escape(height)};"></div>\n'
            f'<script type="application/json" data-for="{html.escape(element_id)}">{payload}</script>\n'
            "</body>\n</html>\n"
        )


def explorer(
    data: Any = None,
    add_env: Optional[bool] = None,
    demo: Optional[bool] = None,
    scope: Optional[Mapping[str, Any]] = None,
    config: Optional[ExplorerConfig] = None,
) -> ExplorerWidget:
    """Create an interactive codebook explorer widget handle.

    data     frames to show: a mapping name -> frame, a list of frames,
             (name, frame) pairs or identifiers bound in scope, or a FrameSource.
    add_env  also add every frame bound in scope (default True).
    demo     show the bundled demo frames only; data and add_env are ignored.
    scope    read-only name -> value mapping used for identifiers and the
             scan; defaults to the __main__ namespace.
    """
    config = config or ExplorerConfig()
    add_env = config.add_env if add_env is None else add_env
    demo = config.demo if demo is None else demo

    # warnings point at the caller of explorer()
    pairs = resolve_sources(data, add_env=add_env, demo=demo, scope=scope, stacklevel=3)
    entries = assemble_codebook(pairs)
    # rParams carries the caller's value even when demo turns the scan off
    payload = build_payload(entries, add_env=add_env, label_col=config.label_col)
    return ExplorerWidget(
        x=payload,
        sizing_policy={"viewer_fill": config.viewer_fill},
        width=config.width,
        height=config.height,
    )
