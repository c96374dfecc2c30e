"""Unit tests for narinfo parsing."""

from __future__ import annotations

import pytest

from core.errors import MirrorParseError
from narinfo.parser import parse_narinfo, parse_references


def test_parse_narinfo_reads_url_references_and_digest() -> None:
    """The three recognised keys should populate the document."""
    text = "URL: nar/abc.nar.xz\nReferences: aaaa-foo bbbb-bar\nFileHash: sha256:deadbeef\n"

    narinfo = parse_narinfo(text, "abc.narinfo")

    assert narinfo.url == "nar/abc.nar.xz"
    assert narinfo.references == frozenset({"aaaa", "bbbb"})
    assert narinfo.file_hash == "deadbeef"


def test_parse_narinfo_ignores_unknown_keys() -> None:
    """Keys other than URL, References and FileHash are skipped."""
    text = (
        "StorePath: /nix/store/abc-hello\n"
        "URL: nar/abc.nar.xz\n"
        "Compression: xz\n"
        "FileHash: sha256:deadbeef\n"
        "Sig: cache.nixos.org-1:c2lnbmF0dXJl\n"
    )

    narinfo = parse_narinfo(text, "abc.narinfo")

    assert narinfo.url == "nar/abc.nar.xz" and narinfo.references == frozenset()


def test_parse_narinfo_last_occurrence_wins() -> None:
    """Repeated keys keep their final value."""
    text = "URL: nar/old.nar\nFileHash: sha256:aaa\nURL: nar/new.nar\nFileHash: sha256:bbb\n"

    narinfo = parse_narinfo(text, "abc.narinfo")

    assert (narinfo.url, narinfo.file_hash) == ("nar/new.nar", "bbb")


def test_parse_narinfo_requires_url() -> None:
    """A document without URL cannot be mirrored."""
    with pytest.raises(MirrorParseError, match="URL"):
        parse_narinfo("FileHash: sha256:deadbeef\n", "abc.narinfo")


def test_parse_narinfo_requires_file_hash() -> None:
    """A document without FileHash cannot be verified."""
    with pytest.raises(MirrorParseError, match="FileHash"):
        parse_narinfo("URL: nar/abc.nar.xz\n", "abc.narinfo")


def test_parse_narinfo_rejects_malformed_line() -> None:
    """Lines without the key separator are parse errors."""
    with pytest.raises(MirrorParseError):
        parse_narinfo("URL: nar/abc.nar.xz\ngarbage\nFileHash: sha256:x\n", "abc.narinfo")


def test_parse_narinfo_rejects_untagged_file_hash() -> None:
    """FileHash must carry an algorithm prefix."""
    with pytest.raises(MirrorParseError):
        parse_narinfo("URL: nar/abc.nar.xz\nFileHash: deadbeef\n", "abc.narinfo")


def test_parse_references_keeps_hash_of_each_token() -> None:
    """Each store name is reduced to its hash segment and deduplicated."""
    references = parse_references("aaaa-foo-1.0  bbbb-bar aaaa-foo-1.0 cccc")

    assert references == frozenset({"aaaa", "bbbb", "cccc"})
