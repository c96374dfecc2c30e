"""Narinfo document parsing.

This module turns ``key: value`` narinfo text into a typed NarInfo.
Only URL, References, and FileHash are read; other keys are ignored.
"""

from __future__ import annotations

from core.constants import (
    NARINFO_FILE_HASH_KEY,
    NARINFO_KEY_SEPARATOR,
    NARINFO_REFERENCES_KEY,
    NARINFO_URL_KEY,
    STORE_PATH_HASH_SEPARATOR,
)
from core.errors import MirrorParseError
from core.types import NarInfo, PackageId


def parse_narinfo(text: str, source: str) -> NarInfo:
    """Parse narinfo text into its URL, digest, and references.

    The last occurrence of a repeated key wins.

    Args:
        text: Narinfo document text.
        source: Path or URL of the document, used in error messages.

    Returns:
        Parsed narinfo document.

    Raises:
        MirrorParseError: If a line is malformed or URL/FileHash is missing.
    """
    url: str | None = None
    file_hash: str | None = None
    references: frozenset[PackageId] = frozenset()
    for line_number, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        key, value = _split_record(line, source, line_number)
        if key == NARINFO_URL_KEY:
            url = value
        elif key == NARINFO_REFERENCES_KEY:
            references = parse_references(value)
        elif key == NARINFO_FILE_HASH_KEY:
            file_hash = _parse_file_hash(value, source, line_number)
    if url is None:
        raise MirrorParseError(
            f"Failed to parse narinfo {source}: missing {NARINFO_URL_KEY} field. "
            "Delete the local narinfo file and rerun to fetch a fresh copy."
        )
    if file_hash is None:
        raise MirrorParseError(
            f"Failed to parse narinfo {source}: missing {NARINFO_FILE_HASH_KEY} field. "
            "Delete the local narinfo file and rerun to fetch a fresh copy."
        )
    return NarInfo(url=url, file_hash=file_hash, references=references)


def parse_references(value: str) -> frozenset[PackageId]:
    """Reduce whitespace-separated store names to package ids."""
    package_ids = (
        token.split(STORE_PATH_HASH_SEPARATOR, 1)[0] for token in value.split()
    )
    return frozenset(PackageId(package_id) for package_id in package_ids if package_id)


def _split_record(line: str, source: str, line_number: int) -> tuple[str, str]:
    """Split one ``key: value`` record."""
    key, separator, value = line.partition(NARINFO_KEY_SEPARATOR)
    if not separator:
        raise MirrorParseError(
            f"Failed to parse narinfo {source}:{line_number}: "
            f"expected 'key: value', got '{line}'. "
            "Delete the local narinfo file and rerun to fetch a fresh copy."
        )
    return key, value


def _parse_file_hash(value: str, source: str, line_number: int) -> str:
    """Return the digest part of an ``algorithm:digest`` pair."""
    _, separator, digest = value.partition(":")
    if not separator:
        raise MirrorParseError(
            f"Failed to parse narinfo {source}:{line_number}: "
            f"invalid {NARINFO_FILE_HASH_KEY} '{value}', expected algorithm:digest."
        )
    return digest
