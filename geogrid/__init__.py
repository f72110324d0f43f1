"""Evenly spaced geographic grids: pixel mapping, crop alignment and normalization."""

from geogrid.errors import DivisionByZeroError, GeoGridError, InvalidGridError

__all__ = ["DivisionByZeroError", "GeoGridError", "InvalidGridError"]
