"""Exception types raised by tableflow."""

from __future__ import annotations


class TableflowError(Exception):
    """Base class for all tableflow errors."""


class NotFoundError(TableflowError, LookupError):
    """Raised when a named column (or other named item) does not exist."""


class DataPathNotFoundError(NotFoundError):
    """Raised when an input file does not exist."""


class OutOfRangeError(TableflowError, IndexError):
    """Raised when row indices fall outside a table's bounds."""


class InvalidArgumentError(TableflowError, ValueError):
    """Raised for bad batch sizes, ratios, lengths or formats."""


class DecodeError(TableflowError, ValueError):
    """Raised when bytes cannot be decoded into a table."""


class EncodeError(TableflowError, ValueError):
    """Raised when a table cannot be encoded to bytes."""
