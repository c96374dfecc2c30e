"""Unit tests for store path identifier extraction."""

from __future__ import annotations

import pytest

from core.errors import MirrorInputError
from core.store_paths import filename_to_package_id, store_path_to_package_id


def test_store_path_to_package_id_takes_hash_segment() -> None:
    """Package id should be the text before the first dash of the file name."""
    assert store_path_to_package_id("/store/0001xyz-pkg-1.0.drv") == "0001xyz"


def test_store_path_to_package_id_handles_nix_store_paths() -> None:
    """Full /nix/store paths should map to their hash part."""
    store_path = "/nix/store/0001w2k3pgl0pkrn827dxiibvc2sibnd-singleton-bool-0.1.5.tar.gz.drv\n"

    assert store_path_to_package_id(store_path) == "0001w2k3pgl0pkrn827dxiibvc2sibnd"


def test_filename_to_package_id_without_dash_keeps_name() -> None:
    """A name without separator is its own package id."""
    assert filename_to_package_id("abc123") == "abc123"


def test_store_path_to_package_id_rejects_empty_hash() -> None:
    """A name starting with a dash has no hash segment."""
    with pytest.raises(MirrorInputError):
        store_path_to_package_id("/nix/store/-broken")
