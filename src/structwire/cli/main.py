"""Command-line entry point for structwire."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..config import NATIVE_ORDER_ENV
from ..log import setup_logging
from .analyze import analyze_file

EPILOG = f"""
Each BaseRecord subclass found in FILE is listed with its encoded size and,
per field, its width on the wire, its kind and its directive.

  structwire --analyze records.py
  structwire -v --log-json --analyze records.py 2> schema.log

{NATIVE_ORDER_ENV}=little|big sets the byte order of "-" fields.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="structwire",
        description="structwire: directive-driven binary records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("--analyze", metavar="FILE", help="print the wire layout of the records defined in FILE")
    parser.add_argument("-v", "--verbose", action="store_true", help="log schema decisions to stderr")
    parser.add_argument("--log-json", action="store_true", help="write log events as JSON lines")
    parser.add_argument("--version", action="version", version=f"structwire {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the structwire CLI.

    Returns:
        Exit code (0 for success, 1 for a missing or unloadable file)
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(debug=args.verbose, json=args.log_json)

    if not args.analyze:
        parser.print_help()
        return 0

    file_path = Path(args.analyze)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    try:
        analyze_file(file_path)
    except Exception as e:
        print(f"Error analyzing file: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
