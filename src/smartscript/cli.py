"""Command-line tester for SmartScript templates.

Parses a template file, regenerates its source from the AST and checks
that the regenerated source parses back to the same document.

Usage:
    smartscript template.txt
    smartscript template.txt --json
    python -m smartscript template.txt --max-depth 4 -v

Exit codes:
    0: parsed successfully
    1: the template could not be parsed
    2: usage or I/O error

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from smartscript import __version__, parse, to_text
from smartscript.config import ParseConfig
from smartscript.errors import ParserError
from smartscript.serialization import to_json

_SEPARATOR = "----------------------"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="smartscript",
        description="Parse a SmartScript template and verify that it round-trips.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("path", type=Path, help="path to the template file (UTF-8)")
    p.add_argument(
        "--json",
        action="store_true",
        help="print the parsed AST as JSON instead of the round-trip report",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        metavar="N",
        default=None,
        help="reject templates with more than N nested FOR blocks",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    return p


def _report(source: str, recreated: str, matches: bool) -> str:
    return (
        f"ORIGINAL:\n\n{source}\n\n{_SEPARATOR}\n"
        f"RECREATED:\n\n{recreated}\n\n{_SEPARATOR}\n"
        f"Documents match: {matches}\n"
    )


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ParseConfig(max_nesting_depth=ns.max_depth)
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    try:
        source = ns.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"Cannot read {ns.path}: {e}\n")
        return 2

    try:
        document = parse(source, source_file=str(ns.path), config=config)
    except ParserError as e:
        sys.stderr.write("Unable to parse document!\n")
        sys.stderr.write(f"Reason: {e}\n")
        return 1

    if ns.json:
        sys.stdout.write(to_json(document, indent=2) + "\n")
        return 0

    recreated = to_text(document)
    matches = parse(recreated, config=config) == document
    sys.stdout.write(_report(source, recreated, matches))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
