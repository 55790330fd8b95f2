#!/usr/bin/env python3
"""
Alchemist CLI

Command-line interface for the universal converter.

Usage:
    python -m alchemist <input> [options]
    python -m alchemist '{"a": 1}'
    python -m alchemist '#FF6B35' 1700000000
    python -m alchemist --file page.html --file logo.png
    python -m alchemist 'SGVsbG8=' --type base64
    python -m alchemist --uuid --lorem 30

Options:
    -f, --file PATH      Convert a file (repeatable)
    -t, --type TYPE      Skip detection and treat inputs as TYPE
    --json               Print machine-readable JSON
    -q, --quiet          Suppress progress lines
    --types              Show all supported types
"""

import argparse
import dataclasses
import json
import sys
from datetime import datetime
from enum import Enum

from .core import Alchemist, Conversion
from .models import DetectedType


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="alchemist",
        description=(
            "Alchemist - Universal Converter\n\n"
            "Detects what a piece of text or a file is (JSON, HTML, colors,\n"
            "timestamps, JWTs, Base64, UUIDs, ...) and prints every useful\n"
            "representation of it."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m alchemist '#FF6B35'\n"
            "  python -m alchemist 1700000000 --json\n"
            "  python -m alchemist --file data.json --file photo.png\n"
            "  python -m alchemist 'aGVsbG8gd29ybGQ=' --type base64\n"
        ),
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Text values to convert",
    )
    parser.add_argument(
        "-f", "--file",
        action="append",
        default=[],
        dest="files",
        help="File to convert (may be given more than once)",
    )
    parser.add_argument(
        "-t", "--type",
        choices=[t.value for t in DetectedType],
        default=None,
        help="Treat text inputs as this type instead of detecting it",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print each result as a JSON document",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print progress lines",
    )
    parser.add_argument(
        "--types",
        action="store_true",
        help="Show all supported types and exit",
    )
    parser.add_argument(
        "--uuid",
        action="store_true",
        help="Print a random version 4 UUID",
    )
    parser.add_argument(
        "--lorem",
        type=int,
        metavar="N",
        default=None,
        help="Print N words of Lorem Ipsum",
    )

    args = parser.parse_args(argv)

    if args.types:
        _show_types()
        return 0

    engine = Alchemist(verbose=not (args.quiet or args.json))

    if args.uuid:
        print(engine.generate_uuid())
    if args.lorem is not None:
        print(engine.generate_lorem(args.lorem))

    if not args.inputs and not args.files:
        if args.uuid or args.lorem is not None:
            return 0
        parser.print_help()
        print("\nError: No inputs provided. Pass text values or --file paths.")
        return 1

    as_type = DetectedType(args.type) if args.type else None
    jobs = [(text, False) for text in args.inputs] + [(path, True) for path in args.files]

    success_count = 0
    error_count = 0

    for source, is_file in jobs:
        try:
            if is_file:
                conversion = engine.convert_file(source)
            else:
                conversion = engine.convert(source, as_type=as_type)
        except Exception as e:
            print(f"[ERROR] {source}: {e}", file=sys.stderr)
            error_count += 1
            continue

        if args.json:
            print(to_json(conversion))
        else:
            print(render(conversion))
        success_count += 1

    if not args.json and not args.quiet:
        print("-" * 60)
        print(f"  Done: {success_count} converted, {error_count} errors")
        print("-" * 60)

    return 1 if error_count else 0


def render(conversion: Conversion) -> str:
    """Format a conversion as an indented, human-readable report."""
    detection = conversion.detection
    lines = [f"Type: {detection.type.value} (confidence {detection.confidence:.2f})"]

    if conversion.formats is None:
        lines.append("  [No formats: input is not valid for this type]")
    else:
        lines.extend(_render_value(conversion.formats, indent=1))

    return "\n".join(lines)


def _render_value(value, indent: int) -> list[str]:
    pad = "  " * indent
    if dataclasses.is_dataclass(value):
        items = [(f.name, getattr(value, f.name)) for f in dataclasses.fields(value)]
    elif isinstance(value, dict):
        items = list(value.items())
    elif isinstance(value, list):
        items = [(str(i), item) for i, item in enumerate(value)]
    else:
        return [f"{pad}{_scalar(value)}"]

    lines = []
    for name, item in items:
        if dataclasses.is_dataclass(item) or (isinstance(item, (dict, list)) and item):
            lines.append(f"{pad}{name}:")
            lines.extend(_render_value(item, indent + 1))
            continue

        text = _scalar(item)
        if "\n" in text:
            lines.append(f"{pad}{name}:")
            lines.extend(f"{pad}  {line}" for line in text.split("\n"))
        else:
            lines.append(f"{pad}{name}: {text}")
    return lines


def _scalar(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if value is None:
        return "-"
    return str(value)


def to_json(conversion: Conversion) -> str:
    """Serialize a conversion; datetimes become ISO 8601 strings."""
    return json.dumps(
        dataclasses.asdict(conversion),
        indent=2,
        ensure_ascii=False,
        default=_json_default,
    )


def _json_default(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _show_types():
    """Display all supported types and the transformer for each."""
    types = Alchemist.supported_types()
    print("\nSupported Types:")
    print("-" * 40)
    for name, transformer in types.items():
        print(f"  {name:<12} {transformer.__name__}")
    print()


if __name__ == "__main__":
    sys.exit(main())
