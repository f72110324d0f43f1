"""Rescale grid data into a symmetric bounded range.

Without an explicit magnitude the data is divided by its largest absolute
value, giving values in `[-1, 1]` with signs preserved (this is not min-max
rescaling). NaN cells are ignored when computing the magnitude and stay NaN.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from geogrid.core.grid import Grid
from geogrid.errors import DivisionByZeroError
from geogrid.logging_utils import log_event

LOGGER = logging.getLogger(__name__)


def data_magnitude(grid: Grid) -> float:
    """Return `max(|max(data)|, |min(data)|)`, ignoring NaN cells.

    Raises `ValueError` when the data is all NaN or contains infinite values.
    """
    data = np.asarray(grid.data(), dtype=np.float64)
    n_inf = int(np.isinf(data).sum())
    if n_inf:
        raise ValueError(f"Cannot compute magnitude: grid data contains {n_inf} infinite value(s)")
    valid = data[~np.isnan(data)]
    if valid.size == 0:
        raise ValueError("Cannot compute magnitude: grid data is all NaN")
    return max(abs(float(valid.max())), abs(float(valid.min())))


def normalize(grid: Grid, magnitude: float | None = None) -> np.ndarray:
    """Return the grid data divided by `magnitude`.

    Parameters
    - **grid**: any `Grid`.
    - **magnitude**: divisor; defaults to `data_magnitude(grid)`.

    Raises
    - `DivisionByZeroError` when the magnitude is zero (e.g. all-zero data).
    - `ValueError` when the magnitude is not finite.
    """
    if magnitude is None:
        magnitude = data_magnitude(grid)
        log_event(
            LOGGER,
            "geogrid.normalize.magnitude",
            "Computed normalization magnitude",
            level="debug",
            magnitude=magnitude,
        )
        return normalize(grid, magnitude)

    magnitude = float(magnitude)
    if not math.isfinite(magnitude):
        raise ValueError(f"Normalization magnitude must be finite (got {magnitude})")
    if magnitude == 0.0:
        raise DivisionByZeroError("Normalization magnitude is zero (grid data is all zero?)")

    return np.asarray(grid.data(), dtype=np.float64) / magnitude
