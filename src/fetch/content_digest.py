"""Content digest helpers.

This module computes SHA-256 digests in the nix-base32 encoding
used by the ``FileHash`` field of narinfo documents.
"""

from __future__ import annotations

import hashlib

from core.constants import HASH_ALGORITHM, NIX_BASE32_ALPHABET


def nix_base32_encode(digest: bytes) -> str:
    """Encode raw digest bytes with the Nix base32 alphabet.

    Nix reads the digest as a little-endian bit string and emits
    5-bit groups from the most significant end.

    Args:
        digest: Raw digest bytes.

    Returns:
        Encoded digest text.
    """
    if not digest:
        return ""
    length = (len(digest) * 8 - 1) // 5 + 1
    characters: list[str] = []
    for position in range(length - 1, -1, -1):
        byte_index, bit_offset = divmod(position * 5, 8)
        value = digest[byte_index] >> bit_offset
        if byte_index < len(digest) - 1:
            value |= digest[byte_index + 1] << (8 - bit_offset)
        characters.append(NIX_BASE32_ALPHABET[value & 0x1F])
    return "".join(characters)


class ContentHasher:
    """Running digest accumulator fed one chunk at a time."""

    def __init__(self) -> None:
        self._hash = hashlib.new(HASH_ALGORITHM)
        self._byte_count = 0

    @property
    def byte_count(self) -> int:
        """Number of bytes folded into the digest so far."""
        return self._byte_count

    def update(self, chunk: bytes) -> None:
        """Fold one chunk into the running digest."""
        self._hash.update(chunk)
        self._byte_count += len(chunk)

    def nix_base32_digest(self) -> str:
        """Return the canonical nix-base32 encoding of the digest."""
        return nix_base32_encode(self._hash.digest())


def nix_base32_sha256(payload: bytes) -> str:
    """Return the nix-base32 SHA-256 digest of an in-memory payload."""
    hasher = ContentHasher()
    hasher.update(payload)
    return hasher.nix_base32_digest()
