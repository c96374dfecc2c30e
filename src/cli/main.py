"""Mirror CLI entry points.
This module exposes the sync command for mirroring a binary cache.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from cli.sync_command import add_sync_command, run_sync_command
from core.config import MirrorConfig
from core.errors import MirrorConfigError
from mirror.mirror_sdk import MirrorClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="nix-mirror",
        description="Synchronize a Nix binary cache onto local storage",
    )
    parser.add_argument("--mirror-root", help="Override NIX_MIRROR_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_sync_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the mirror CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.mirror_root)
    except MirrorConfigError as error:
        print(f"mirror_error={error}")
        return 1
    if args.command == "sync":
        return run_sync_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(mirror_root: str | None) -> MirrorClient:
    """Build SDK client with optional mirror-root override.

    Args:
        mirror_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = MirrorConfig.from_env()
    if mirror_root:
        config = replace(config, mirror_root=Path(mirror_root).expanduser().resolve())
    return MirrorClient(config)
