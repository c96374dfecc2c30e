"""Sync command wiring for the mirror CLI."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any

from core.config import normalize_cache_url, parse_parallelism
from core.errors import MirrorError
from mirror.mirror_sdk import MirrorClient


def add_sync_command(subparsers: Any) -> None:
    """Register sync subcommand."""
    parser = subparsers.add_parser(
        "sync",
        help="Mirror every package reachable from a store paths file",
    )
    parser.add_argument(
        "store_paths",
        help="Store paths file (plain or .xz), e.g. a channel's store-paths.xz",
    )
    parser.add_argument("--cache-url", help="Override NIX_MIRROR_CACHE_URL for this run")
    parser.add_argument(
        "--parallelism",
        help="Override NIX_MIRROR_PARALLELISM: maximum concurrent downloads",
    )


def run_sync_command(client: MirrorClient, args: argparse.Namespace) -> int:
    """Execute a mirror run and print its summary."""
    try:
        options = client.options_from_store_paths(Path(args.store_paths).expanduser())
        if args.cache_url:
            options = replace(options, cache_url=normalize_cache_url(args.cache_url))
        if args.parallelism is not None:
            options = replace(options, parallelism=parse_parallelism(args.parallelism))
        result = client.sync(options)
    except MirrorError as error:
        print(f"mirror_error={error}")
        return 1
    print(f"seen={len(result.seen)}")
    print(f"waves={result.wave_count}")
    print(f"resolved={result.resolved_count}")
    return 0
