"""Tabstore CLI entry points.
This module exposes container commands for delimited files.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from cli.append_command import add_append_command, run_append_command
from cli.convert_command import add_convert_command, run_convert_command
from cli.filter_arguments import parse_filter_expressions
from core.config import TabstoreConfig
from core.constants import HEADER_LIST_SEPARATOR
from core.errors import TabstoreError
from core.runtime_options import supported_options
from core.types import Orientation
from store.container_sdk import TabstoreClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="tabstore", description="Tabstore container CLI")
    parser.add_argument("--delimiter", help="Override TABSTORE_DELIMITER for this command")
    parser.add_argument(
        "--orientation",
        choices=[member.value for member in Orientation],
        help="Override TABSTORE_ORIENTATION for this command",
    )
    parser.add_argument(
        "--header-index",
        type=int,
        help="Override TABSTORE_HEADER_INDEX for this command",
    )
    parser.add_argument("--profile", help="YAML container profile")
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help=f"Option override; keys: {', '.join(supported_options())}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_show_command(subparsers)
    _add_value_command(subparsers)
    _add_indexes_command(subparsers)
    add_convert_command(subparsers)
    add_append_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Tabstore CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args)
        if args.command == "show":
            return _run_show_command(client, args)
        if args.command == "value":
            return _run_value_command(client, args)
        if args.command == "indexes":
            return _run_indexes_command(client, args)
        if args.command == "convert":
            return run_convert_command(client, args)
        if args.command == "append":
            return run_append_command(client, args)
    except TabstoreError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(args: argparse.Namespace) -> TabstoreClient:
    """Build SDK client from env, optional profile, and CLI overrides.

    Args:
        args: Parsed CLI args.

    Returns:
        Configured SDK client.
    """
    config = TabstoreConfig.from_env()
    if args.profile:
        client = TabstoreClient.from_profile_file(args.profile, config)
    else:
        client = TabstoreClient(config)
    assignments = list(args.assignments)
    if args.delimiter is not None:
        assignments.append(f"delimiter={args.delimiter}")
    if args.orientation is not None:
        assignments.append(f"orientation={args.orientation}")
    if args.header_index is not None:
        assignments.append(f"header_index={args.header_index}")
    return client.with_options(assignments) if assignments else client


def _run_show_command(client: TabstoreClient, args: argparse.Namespace) -> int:
    """Handle show command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    container = client.open(args.source)
    row_filter = parse_filter_expressions(args.where)
    delimiter = container.delimiter
    if args.columns:
        header_names = [name for name in args.columns.split(HEADER_LIST_SEPARATOR) if name]
    else:
        header_names = container.header_names
    print(delimiter.join(header_names))
    for row in container.get_rows(columns=args.columns, row_filter=row_filter):
        print(delimiter.join("" if value is None else value for value in row))
    return 0


def _run_value_command(client: TabstoreClient, args: argparse.Namespace) -> int:
    """Handle value command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code; 1 when no value matches.
    """
    container = client.open(args.source)
    row_filter = parse_filter_expressions(args.where)
    value = container.get_value(args.header, args.row, row_filter)
    if value is None:
        print("value=-")
        return 1
    print(value)
    return 0


def _run_indexes_command(client: TabstoreClient, args: argparse.Namespace) -> int:
    """Handle indexes command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    container = client.open(args.source)
    row_filter = parse_filter_expressions(args.where)
    for row_index in container.get_rows_indexes(row_filter):
        print(row_index)
    return 0


def _add_where_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--where",
        action="append",
        default=[],
        metavar="EXPR",
        help="Filter rule such as name=Alice, age>=30, city~Mun%%; repeat to AND rules",
    )


def _add_show_command(subparsers: Any) -> None:
    """Register show subcommand."""
    parser = subparsers.add_parser("show", help="Print matching rows of a file")
    parser.add_argument("source", help="Delimited source file")
    parser.add_argument("--columns", help="Semicolon-separated header projection")
    _add_where_argument(parser)


def _add_value_command(subparsers: Any) -> None:
    """Register value subcommand."""
    parser = subparsers.add_parser("value", help="Print the first matching value of a column")
    parser.add_argument("source", help="Delimited source file")
    parser.add_argument("header", help="Header name")
    parser.add_argument("--row", type=int, help="Row index; first matching row when omitted")
    _add_where_argument(parser)


def _add_indexes_command(subparsers: Any) -> None:
    """Register indexes subcommand."""
    parser = subparsers.add_parser("indexes", help="Print indexes of matching rows")
    parser.add_argument("source", help="Delimited source file")
    _add_where_argument(parser)
