"""Exceptions raised by blenodoc.

Comment content problems are never raised: they are reported as
``ErrorEntry`` values on the parsed record. These exceptions cover the
surrounding tooling (reading sources, loading settings).
"""

from __future__ import annotations

from pathlib import Path


class BlenodocError(Exception):
    """Base exception for blenodoc operations."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = path


class ExtractionError(BlenodocError):
    """Raised when a source file cannot be read or decoded."""

    pass


class ConfigError(BlenodocError):
    """Raised when settings fail validation."""

    pass
