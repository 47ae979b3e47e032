"""
Command line entry point.

    branchtalk compile intro.dlg -o intro.json
    branchtalk play intro.dlg --choose 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from branchtalk.core.config import DialogueConfig
from branchtalk.core.errors import DialogueError
from branchtalk.runtime.engine import DialogueEngine
from branchtalk.script.export import compile_script_file, load_graph_json
from branchtalk.script.parser import compile_file

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="branchtalk",
        description="Compile and play tag-based dialogue scripts.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--encoding", default="utf-8", help="Script file encoding (default: utf-8).")
    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("compile", help="Compile a script to graph JSON.")
    c.add_argument("script", help="Path to the dialogue script.")
    c.add_argument("-o", "--output", default=None, help="Output path (default: script name with .json).")

    r = sub.add_parser("play", help="Print every step of a playthrough.")
    r.add_argument("script", help="Path to a dialogue script or compiled .json graph.")
    r.add_argument("--choose", type=int, default=0, help="Choice index selected at every prompt (default: 0).")
    return p


def _load_graph(path: Path, config: DialogueConfig):
    if path.suffix == ".json":
        return load_graph_json(path)
    return compile_file(path, config)


def main(argv: Optional[list[str]] = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = DialogueConfig(encoding=args.encoding)

    path = Path(args.script)
    if not path.is_file():
        print(f"branchtalk: file not found: {path}", file=sys.stderr)
        return 1

    try:
        if args.command == "compile":
            output = compile_script_file(path, args.output, config)
            print(f"Compiled {path} -> {output}")
            return 0

        engine = DialogueEngine(_load_graph(path, config), config)
        for step in engine.steps(lambda step: args.choose):
            print(step.describe())
        return 0
    except DialogueError as e:
        print(f"branchtalk: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
