"""Pytest configuration for geogrid tests.

This configuration file:
1. Adds the workspace root to sys.path so tests run without an install
2. Registers custom pytest marks to eliminate warnings
3. Provides small grid fixtures shared across test modules
"""
import sys
from pathlib import Path

import numpy as np
import pytest

workspace_root = Path(__file__).parent.parent.parent
if str(workspace_root) not in sys.path:
    sys.path.insert(0, str(workspace_root))

from geogrid.core import DenseGrid, GeoPoint  # noqa: E402


def pytest_configure(config):
    """Register custom pytest marks."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as an integration test (runs full pipeline, may be slower)",
    )


@pytest.fixture
def rain_grid() -> DenseGrid:
    """100x100 one-degree grid with its northwest corner at 25N 120E."""
    values = np.arange(100 * 100, dtype=float) - 5000.0
    return DenseGrid(
        width=100,
        height=100,
        east_res=1.0,
        south_res=1.0,
        origin=GeoPoint.from_latlon(25, 120),
        values=values,
    )


@pytest.fixture
def small_grid() -> DenseGrid:
    """4x3 grid with non-square pixels and easily identifiable values."""
    array = np.array(
        [
            [0.0, 1.0, 2.0, 3.0],
            [10.0, 11.0, 12.0, 13.0],
            [20.0, 21.0, 22.0, 23.0],
        ]
    )
    return DenseGrid.from_array(array, resolution=(0.5, 0.25), corner=GeoPoint(east=10.0, south=-50.0))
