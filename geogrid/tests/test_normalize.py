import numpy as np
import pytest

from geogrid.core.geoprim import GeoPoint
from geogrid.core.grid import DenseGrid
from geogrid.core.normalize import data_magnitude, normalize
from geogrid.errors import DivisionByZeroError


def _grid(values):
    return DenseGrid(
        width=len(values),
        height=1,
        east_res=1.0,
        south_res=1.0,
        origin=GeoPoint(0.0, 0.0),
        values=values,
    )


def test_normalize_is_symmetric_not_min_max():
    out = normalize(_grid([-4.0, 2.0, 1.0, 0.0]))
    assert np.allclose(out, [-1.0, 0.5, 0.25, 0.0])


def test_normalize_range_and_unit_peak(rain_grid):
    out = normalize(rain_grid)
    assert out.shape == (100 * 100,)
    assert np.all(out >= -1.0)
    assert np.all(out <= 1.0)
    assert np.max(np.abs(out)) == 1.0


def test_normalize_with_explicit_magnitude():
    out = normalize(_grid([2.0, -6.0]), 4.0)
    assert np.allclose(out, [0.5, -1.5])


def test_normalize_is_linear_in_magnitude(rain_grid):
    m = data_magnitude(rain_grid)
    assert m == 5000.0
    assert np.allclose(normalize(rain_grid, 2 * m), normalize(rain_grid, m) / 2)


def test_normalize_does_not_touch_grid_data():
    grid = _grid([1.0, -3.0])
    normalize(grid)
    assert list(grid.data()) == [1.0, -3.0]


def test_all_zero_grid_raises_division_by_zero():
    grid = _grid([0.0, 0.0, 0.0])
    with pytest.raises(DivisionByZeroError):
        normalize(grid)
    with pytest.raises(ZeroDivisionError):
        normalize(_grid([1.0, 2.0]), 0.0)


def test_nan_cells_are_ignored_for_magnitude_and_preserved():
    out = normalize(_grid([np.nan, 2.0, -1.0]))
    assert np.isnan(out[0])
    assert np.allclose(out[1:], [1.0, -0.5])


def test_non_finite_magnitude_is_rejected():
    with pytest.raises(ValueError, match="all NaN"):
        normalize(_grid([np.nan, np.nan]))
    with pytest.raises(ValueError, match="must be finite"):
        normalize(_grid([1.0]), float("inf"))


def test_infinite_data_is_reported_explicitly():
    with pytest.raises(ValueError, match="infinite value"):
        normalize(_grid([1.0, np.inf, -2.0]))
