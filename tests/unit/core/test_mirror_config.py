"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import MirrorConfig, normalize_cache_url, parse_parallelism
from core.errors import MirrorConfigError


def test_from_env_reads_mirror_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve mirror root from environment."""
    monkeypatch.setenv("NIX_MIRROR_ROOT", "./.tmp-mirror")

    config = MirrorConfig.from_env()

    assert config.mirror_root.name == ".tmp-mirror"


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the public cache and eight downloads."""
    monkeypatch.delenv("NIX_MIRROR_CACHE_URL", raising=False)
    monkeypatch.delenv("NIX_MIRROR_PARALLELISM", raising=False)

    config = MirrorConfig.from_env()

    assert config.cache_url == "https://cache.nixos.org" and config.parallelism == 8


def test_from_env_raises_for_invalid_parallelism(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric parallelism."""
    monkeypatch.setenv("NIX_MIRROR_PARALLELISM", "not-a-number")

    with pytest.raises(MirrorConfigError):
        MirrorConfig.from_env()

    assert os.getenv("NIX_MIRROR_PARALLELISM") == "not-a-number"


def test_parse_parallelism_rejects_zero() -> None:
    """Parallelism must allow at least one resolution in flight."""
    with pytest.raises(MirrorConfigError):
        parse_parallelism("0")


def test_normalize_cache_url_strips_trailing_slash() -> None:
    """Cache URL should be joined without doubled separators."""
    assert normalize_cache_url("https://cache.example.org/") == "https://cache.example.org"


def test_normalize_cache_url_rejects_non_http() -> None:
    """Only http and https caches are supported."""
    with pytest.raises(MirrorConfigError):
        normalize_cache_url("file:///srv/cache")


def test_parse_parallelism_error_names_env_and_flag() -> None:
    """The error should point at both the variable and the CLI flag."""
    with pytest.raises(MirrorConfigError) as error_info:
        parse_parallelism("many")

    assert "NIX_MIRROR_PARALLELISM" in str(error_info.value)
    assert "--parallelism" in str(error_info.value)
