"""Append command wiring for Tabstore CLI."""

from __future__ import annotations

import argparse
from typing import Any

from store.container_sdk import TabstoreClient


def add_append_command(subparsers: Any) -> None:
    """Register append subcommand."""
    parser = subparsers.add_parser(
        "append",
        help="Append the rows of source files to a target file",
    )
    parser.add_argument("target", help="File that receives the rows; created when missing")
    parser.add_argument("sources", nargs="+", help="Files whose rows are appended")


def run_append_command(client: TabstoreClient, args: argparse.Namespace) -> int:
    """Append every source container and write the target once."""
    target = client.open(args.target)
    for source_path in args.sources:
        added = target.append_data_container(client.open(source_path))
        print(f"{source_path}\t{added}")
    target.write_data()
    print(f"rows={target.row_count}")
    return 0
