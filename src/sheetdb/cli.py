"""Command-line interface for SheetDB."""

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import Any, Optional

from .backends import XlsxBackend
from .config import settings
from .errors import SheetDBError
from .table import TableStore, row_to_raw


def parse_value(raw: str) -> Any:
    """Interpret a command-line value: true/false, numbers, otherwise text.

    Wrap a value in double quotes to force text, e.g. ``code='"007"'``.
    """
    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        return raw[1:-1]
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        number = float(raw)
    except ValueError:
        return raw
    # "nan", "inf" and friends stay text
    return number if math.isfinite(number) else raw


def parse_pairs(pairs: Optional[list[str]]) -> dict[str, Any]:
    """Parse ``column=value`` arguments into a dict."""
    result = {}
    for pair in pairs or []:
        column, sep, value = pair.partition("=")
        if not sep or not column:
            raise argparse.ArgumentTypeError(f"Expected column=value, got '{pair}'")
        result[column] = parse_value(value)
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SheetDB - use a spreadsheet sheet as a simple table"
    )
    parser.add_argument(
        "--file", "-f", type=Path, default=settings.document_path,
        help=f"Workbook path (default: {settings.document_path})",
    )
    parser.add_argument(
        "--sheet", "-s", default=settings.default_sheet_name,
        help=f"Sheet name (default: {settings.default_sheet_name})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("init", help="Create a new workbook with one empty sheet")
    subparsers.add_parser("sheets", help="List sheet names")

    select_parser = subparsers.add_parser("select", help="Print rows matching column=value pairs")
    select_parser.add_argument("where", nargs="*", help="column=value filters (none: all rows)")

    get_parser = subparsers.add_parser("get", help="Print one column of the first matching row")
    get_parser.add_argument("where", help="column=value to search for")
    get_parser.add_argument("target", help="Column to print")

    insert_parser = subparsers.add_parser("insert", help="Append a row")
    insert_parser.add_argument("values", nargs="+", help="column=value pairs")

    update_parser = subparsers.add_parser("update", help="Update matching rows")
    update_parser.add_argument("--where", "-w", action="append", default=[], help="column=value filter")
    update_parser.add_argument("values", nargs="+", help="column=value pairs to set")

    delete_parser = subparsers.add_parser("delete", help="Delete matching rows")
    delete_parser.add_argument("where", nargs="+", help="column=value filters")

    add_sheet_parser = subparsers.add_parser("add-sheet", help="Create a sheet")
    add_sheet_parser.add_argument("name", help="New sheet name")

    add_column_parser = subparsers.add_parser("add-column", help="Add a column to every row")
    add_column_parser.add_argument("name", help="Column name")
    add_column_parser.add_argument("--default", "-d", help="Value for existing rows")

    remove_column_parser = subparsers.add_parser("remove-column", help="Remove a column")
    remove_column_parser.add_argument("name", help="Column name")

    count_parser = subparsers.add_parser("count", help="Count non-empty cells in a column")
    count_parser.add_argument("name", help="Column name")

    return parser


def run_command(args: argparse.Namespace) -> None:
    """Execute a parsed command, printing its result to stdout."""
    if args.command == "init":
        XlsxBackend.create_document(args.file, args.sheet)
        print(f"Created {args.file} with sheet '{args.sheet}'")
        return

    backend = XlsxBackend(args.file)
    if args.command == "sheets":
        for name in backend.list_sheets():
            print(name)
        return

    store = TableStore(backend, args.sheet)
    if args.command == "select":
        rows = store.select(parse_pairs(args.where))
        print(json.dumps([row_to_raw(row) for row in rows], indent=2, ensure_ascii=False))
    elif args.command == "get":
        ((column, value),) = parse_pairs([args.where]).items()
        result = store.get_column_value(column, value, args.target)
        if result is None:
            print("No matching value found.")
        else:
            print(result)
    elif args.command == "insert":
        store.insert(parse_pairs(args.values))
        print("Inserted 1 row.")
    elif args.command == "update":
        updated = store.update(parse_pairs(args.where), parse_pairs(args.values))
        print(f"Updated {updated} rows.")
    elif args.command == "delete":
        removed = store.delete(parse_pairs(args.where))
        print(f"Deleted {removed} rows.")
    elif args.command == "add-sheet":
        store.add_sheet(args.name)
        print(f"Added sheet '{args.name}'.")
    elif args.command == "add-column":
        default = None if args.default is None else parse_value(args.default)
        store.add_column(args.name, default)
        print(f"Added column '{args.name}'.")
    elif args.command == "remove-column":
        store.remove_column(args.name)
        print(f"Removed column '{args.name}'.")
    elif args.command == "count":
        print(store.get_column_datas_number(args.name))


def main(argv: Optional[list[str]] = None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        run_command(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except SheetDBError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
