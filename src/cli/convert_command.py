"""Convert command wiring for Tabstore CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.types import Orientation
from store.container_sdk import TabstoreClient


def add_convert_command(subparsers: Any) -> None:
    """Register convert subcommand."""
    parser = subparsers.add_parser(
        "convert",
        help="Re-export a file in row or column layout",
    )
    parser.add_argument("source", help="Delimited source file")
    parser.add_argument("target", help="Output file")
    parser.add_argument(
        "--to",
        dest="target_orientation",
        required=True,
        choices=[member.value for member in Orientation],
        help="Layout of the output file",
    )


def run_convert_command(client: TabstoreClient, args: argparse.Namespace) -> int:
    """Read the source in the client layout and write it in the target layout."""
    source = client.open(args.source)
    target_client = client.with_orientation(Orientation(args.target_orientation))
    target = target_client.new_container()
    target.append_data_container(source)
    target.export_container(args.target)
    print(f"target={args.target}")
    print(f"rows={target.row_count}")
    return 0
