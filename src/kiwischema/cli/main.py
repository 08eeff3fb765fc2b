"""Main CLI entry point for kiwischema."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from ..codec import decode_schema
from ..exceptions import CompileError, KiwiError
from ..export import compile_python, format_schema, parse_extra_field
from .analyze import analyze_schema


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the kiwischema CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="kiwischema",
        description="kiwischema: Kiwi Binary Schema Decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kiwischema schema.bin -o messages.py       Generate Python decoders
  kiwischema schema.bin -e Point:tag:str     Add an extra attribute to Point
  kiwischema schema.bin --print              Show the schema as Kiwi text
  kiwischema schema.bin --analyze            Summarize definitions
        """,
    )

    parser.add_argument("schema", nargs="?", metavar="SCHEMA", help="Path to a binary Kiwi schema")

    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        help="Write generated source to FILE instead of stdout",
    )

    parser.add_argument(
        "-e",
        "--extra",
        action="append",
        default=[],
        metavar="STRUCT:FIELD:TYPE",
        help="Add an extra field to a struct or message (repeatable)",
    )

    parser.add_argument(
        "--print",
        dest="print_schema",
        action="store_true",
        help="Print the schema in Kiwi text syntax instead of generating code",
    )

    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Print a per-definition summary of the schema",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser.add_argument(
        "--version",
        action="version",
        version=f"kiwischema {__version__}",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    # If no schema given, show help
    if args.schema is None:
        parser.print_help()
        return 0

    try:
        extra_fields = [parse_extra_field(value) for value in args.extra]
    except CompileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    path = Path(args.schema)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    try:
        data = path.read_bytes()
    except OSError as e:
        print(f"Error: Could not read {path}: {e}", file=sys.stderr)
        return 1

    try:
        schema = decode_schema(data)
    except KiwiError as e:
        print(f"Error: Failed decoding schema: {e}", file=sys.stderr)
        return 1

    if args.analyze:
        analyze_schema(schema, source=path)
        return 0

    if args.print_schema:
        output = format_schema(schema)
    else:
        try:
            output = compile_python(schema, extra_fields=extra_fields)
        except CompileError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if args.output is None:
        sys.stdout.write(output)
        return 0

    try:
        Path(args.output).write_text(output, encoding="utf-8", errors="surrogatepass")
    except OSError as e:
        print(f"Error: Failed writing output: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
