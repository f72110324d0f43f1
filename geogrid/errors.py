"""Error types raised by the grid core."""

from __future__ import annotations


class GeoGridError(Exception):
    """Base class for all grid errors."""


class InvalidGridError(GeoGridError, ValueError):
    """Grid geometry or data violates the grid contract.

    Raised at construction time (or at first load for lazily backed grids),
    never deferred to the first use of a bad grid.
    """


class DivisionByZeroError(GeoGridError, ZeroDivisionError):
    """Normalization magnitude is zero (e.g. all-zero data)."""
