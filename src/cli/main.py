"""Halte CLI entry points.

This module exposes commands to fetch and convert CHB exports.
It maps argparse commands onto client calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Any, Sequence

from core.config import HalteConfig
from core.errors import HalteError
from store.export_sdk import HalteClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="halte",
        description="Convert CHB stop place exports into locality JSON documents",
    )
    parser.add_argument("--data-root", help="Override HALTE_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_convert_command(subparsers)
    _add_fetch_command(subparsers)
    _add_update_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Halte CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.data_root)
        if args.command == "convert":
            return _run_convert_command(client, args)
        if args.command == "fetch":
            return _run_fetch_command(client)
        if args.command == "update":
            return _run_update_command(client, args)
    except HalteError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> HalteClient:
    """Build client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured client.
    """
    config = HalteConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return HalteClient(config)


def _run_convert_command(client: HalteClient, args: argparse.Namespace) -> int:
    """Handle convert command."""
    output_dir = Path(args.output_dir).expanduser() if args.output_dir else None
    written_paths = client.convert(
        Path(args.source).expanduser(),
        locality=args.locality,
        output_dir=output_dir,
    )
    for path in written_paths:
        print(path)
    return 0


def _run_fetch_command(client: HalteClient) -> int:
    """Handle fetch command."""
    print(client.fetch())
    return 0


def _run_update_command(client: HalteClient, args: argparse.Namespace) -> int:
    """Handle update command."""
    for path in client.update(locality=args.locality):
        print(path)
    return 0


def _add_convert_command(subparsers: Any) -> None:
    """Register convert subcommand."""
    parser = subparsers.add_parser("convert", help="Convert a local export into JSON documents")
    parser.add_argument("source", help="Export .xml/.xml.gz file, or directory of exports")
    parser.add_argument("--locality", help="Town to keep; defaults to HALTE_LOCALITY")
    parser.add_argument("--output-dir", help="Output directory; defaults to <data-root>/output")


def _add_fetch_command(subparsers: Any) -> None:
    """Register fetch subcommand."""
    subparsers.add_parser("fetch", help="Download the newest published export")


def _add_update_command(subparsers: Any) -> None:
    """Register update subcommand."""
    parser = subparsers.add_parser("update", help="Download the newest export and convert it")
    parser.add_argument("--locality", help="Town to keep; defaults to HALTE_LOCALITY")
