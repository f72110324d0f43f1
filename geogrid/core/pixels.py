"""Map between geographic points and fractional pixel coordinates of a grid."""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from geogrid.core.geoprim import GeoPoint

if TYPE_CHECKING:  # pragma: no cover
    from geogrid.core.grid import Grid


def point_to_pixel(point: GeoPoint, grid: Grid) -> Tuple[float, float]:
    """Return the fractional pixel `(x, y)` within which `point` lies.

    Notes
    - pixel coordinates are zero indexed and may be negative
    - the first negative pixel position is `-1`
    - no rounding is applied
    """
    corner = grid.corner()
    east_res, south_res = grid.resolution()
    x = (point.east - corner.east) / east_res
    y = (point.south - corner.south) / south_res
    return (x, y)


def pixel_to_point(x: float, y: float, grid: Grid) -> GeoPoint:
    """Inverse of `point_to_pixel`: map fractional pixel coordinates to a point."""
    corner = grid.corner()
    east_res, south_res = grid.resolution()
    return GeoPoint(east=corner.east + x * east_res, south=corner.south + y * south_res)
