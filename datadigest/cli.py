#!/usr/bin/env python3
"""
Build the codebook explorer payload from CSV/SAS files on disk.

Usage:
  python -m datadigest.cli data/a.csv data/b.sas7bdat [--out payload.json] [--html explorer.html]
  python -m datadigest.cli --demo true --html demo.html
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from datadigest.explorer import DEFAULT_HEIGHT, DEFAULT_WIDTH, ExplorerConfig, ExplorerWidget, explorer
from datadigest.readers import frame_name, read_table
from datadigest.utils import parse_bool


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the codebook explorer payload.")
    parser.add_argument("files", nargs="*", help="CSV or SAS (.sas7bdat/.xpt) files; name = file stem")
    parser.add_argument("--demo", default="false")
    parser.add_argument("--out", dest="out_path", default=None,
                        help="Path for the payload JSON (default: stdout)")
    parser.add_argument("--html", dest="html_path", default=None,
                        help="Optional path for a standalone HTML page")
    parser.add_argument("--script_src", default=None,
                        help="URL of the explorer widget script to reference from the HTML page")
    parser.add_argument("--width", default=DEFAULT_WIDTH)
    parser.add_argument("--height", default=DEFAULT_HEIGHT)
    return parser.parse_args(argv)


def build_widget(files: list[str], config: ExplorerConfig) -> ExplorerWidget:
    pairs = []
    for path in files:
        if not os.path.exists(path):
            sys.stderr.write(f"[ERROR] Input file not found: {path}\n")
            sys.exit(1)
        try:
            df = read_table(path)
        except Exception as e:
            sys.stderr.write(f"[ERROR] Could not read {path}: {e}\n")
            sys.exit(1)
        pairs.append((frame_name(path), df))
    return explorer(data=pairs, add_env=config.add_env, demo=config.demo, scope={}, config=config)


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    config = ExplorerConfig(
        add_env=False,
        demo=parse_bool(args.demo),
        width=args.width,
        height=args.height,
    )
    widget = build_widget(args.files, config)
    files = widget.x.settings.files

    if args.out_path:
        Path(args.out_path).write_text(widget.to_json(indent=2), encoding="utf-8")
        sys.stderr.write(f"[explorer] Wrote {args.out_path}\n")
    else:
        print(widget.to_json(indent=2))

    if args.html_path:
        Path(args.html_path).write_text(widget.to_html(script_src=args.script_src), encoding="utf-8")
        sys.stderr.write(f"[explorer] Wrote {args.html_path}\n")

    sys.stderr.write(f"[explorer] Files: {len(files)}\n")
    for entry in files:
        sys.stderr.write(f"  - {entry.file}: rows={entry.rows}, cols={entry.columns}\n")


if __name__ == "__main__":
    main()
