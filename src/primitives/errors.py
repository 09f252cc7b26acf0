"""Exception types for the ledger primitives.

Both are ``ValueError`` subclasses so callers that already guard numeric
parsing with ``except ValueError`` keep working.
"""

from __future__ import annotations


class RangeError(ValueError):
    """Raised when a value is negative, non-integral or above ``2**256 - 1``."""


class DecodeError(ValueError):
    """Raised when a byte buffer is not a canonical encoding."""


class VectorFileError(ValueError):
    """Raised when a canonical vector registry file is malformed."""
