"""Nix mirror exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each failure kind raises a specific error type for debuggability.
"""

from __future__ import annotations


class MirrorError(Exception):
    """Base exception for all mirror failures."""


class MirrorConfigError(MirrorError):
    """Raised for invalid runtime configuration."""


class MirrorInputError(MirrorError):
    """Raised for unreadable root lists and malformed store paths."""


class MirrorTransportError(MirrorError):
    """Raised for non-2xx responses and connection failures."""


class MirrorIntegrityError(MirrorError):
    """Raised when a downloaded content blob fails digest verification."""


class MirrorParseError(MirrorError):
    """Raised for malformed narinfo documents and unsafe mirror paths."""


class MirrorFilesystemError(MirrorError):
    """Raised for I/O failures while creating, reading, or renaming files."""
