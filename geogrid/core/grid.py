"""Grid capability, concrete grid backings and geometry helpers.

Conventions
- **Axes**: `x` counts pixels eastward, `y` counts pixels southward, both
  zero-indexed from the grid's northwest `corner`.
- **Data order**: row-major, `data()[y * width + x]` (east-major within
  south-major rows). `as_array()` views the same values as `(height, width)`.
- **Pixel coordinates** are fractional and may be negative; the pixel spanning
  `[-1, 0)` is pixel `-1`.
- **Extent** is half-open: the southeast edge of the covered region is the
  first coordinate *outside* the grid.
"""

from __future__ import annotations

import logging
import math
import operator
import threading
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence, Tuple, Union, runtime_checkable

import numpy as np

from geogrid.config import settings
from geogrid.core.crop import align_crop_region, crop_window
from geogrid.core.geoprim import GeoPoint, Region
from geogrid.core.pixels import pixel_to_point
from geogrid.errors import InvalidGridError
from geogrid.logging_utils import log_event

LOGGER = logging.getLogger(__name__)

Resolution = Union[float, Tuple[float, float]]


@runtime_checkable
class Grid(Protocol):
    """A grid of geographic data, evenly spaced along the east/south axes."""

    def dimension(self) -> Tuple[int, int]:
        """Return the `(width, height)` of the grid in pixels."""
        ...

    def resolution(self) -> Tuple[float, float]:
        """Return `(east_res, south_res)`, geographic units per pixel."""
        ...

    def corner(self) -> GeoPoint:
        """Return the grid's northwest origin."""
        ...

    def data(self) -> Sequence[float]:
        """Return the `width * height` values in row-major order."""
        ...

    def subregion(self, region: Region) -> "Grid":
        """Return a new grid covering the pixel-aligned superset of `region`."""
        ...


def _validate_geometry(width: int, height: int, east_res: float, south_res: float, corner: GeoPoint) -> None:
    msgs: list[str] = []
    if width < 1:
        msgs.append(f"width must be >= 1 (got {width})")
    if height < 1:
        msgs.append(f"height must be >= 1 (got {height})")
    if not (math.isfinite(east_res) and east_res > 0):
        msgs.append(f"east_res must be a positive finite number (got {east_res})")
    if not (math.isfinite(south_res) and south_res > 0):
        msgs.append(f"south_res must be a positive finite number (got {south_res})")
    if not isinstance(corner, GeoPoint):
        msgs.append(f"corner must be a GeoPoint (got {type(corner).__name__})")
    elif not (math.isfinite(corner.east) and math.isfinite(corner.south)):
        msgs.append(f"corner must be finite (got {corner})")
    if msgs:
        raise InvalidGridError("; ".join(msgs))


def _as_index(value: object, name: str) -> int:
    try:
        return operator.index(value)  # type: ignore[arg-type]
    except TypeError:
        raise InvalidGridError(f"{name} must be an integer (got {value!r})") from None


def _as_float(value: object, name: str) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise InvalidGridError(f"{name} must be a number (got {value!r})") from None


def _as_grid_values(values: object, width: int, height: int) -> np.ndarray:
    """Copy `values` into a read-only 1D float64 array of length `width * height`."""
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidGridError(f"data must be a flat sequence of numbers ({exc})") from None
    if arr.ndim != 1:
        raise InvalidGridError(f"data must be 1D (got shape {arr.shape})")
    expected = width * height
    if arr.shape[0] != expected:
        raise InvalidGridError(
            f"data length mismatch (got {arr.shape[0]}, expected {width}x{height}={expected})"
        )
    arr.flags.writeable = False
    return arr


def _split_resolution(resolution: Resolution) -> Tuple[float, float]:
    if isinstance(resolution, tuple):
        east_res, south_res = resolution
        return _as_float(east_res, "east_res"), _as_float(south_res, "south_res")
    res = _as_float(resolution, "resolution")
    return res, res


@dataclass(frozen=True, slots=True, eq=False)
class DenseGrid:
    """Grid backed by an in-memory numpy array.

    All invariants are checked on construction; `values` is stored as a
    read-only copy so a published grid can be shared freely.
    """

    width: int
    height: int
    east_res: float
    south_res: float
    origin: GeoPoint
    values: np.ndarray

    def __post_init__(self) -> None:
        width = _as_index(self.width, "width")
        height = _as_index(self.height, "height")
        east_res = _as_float(self.east_res, "east_res")
        south_res = _as_float(self.south_res, "south_res")
        _validate_geometry(width, height, east_res, south_res, self.origin)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "east_res", east_res)
        object.__setattr__(self, "south_res", south_res)
        object.__setattr__(self, "values", _as_grid_values(self.values, width, height))

    @classmethod
    def from_array(cls, array: np.ndarray, resolution: Resolution, corner: GeoPoint) -> "DenseGrid":
        """Build a grid from a `(height, width)` array (row 0 is the northern row)."""
        try:
            arr = np.asarray(array, dtype=np.float64)
        except (TypeError, ValueError) as exc:
            raise InvalidGridError(f"array must be numeric (height, width) ({exc})") from None
        if arr.ndim != 2:
            raise InvalidGridError(f"array must be 2D (height, width) (got shape {arr.shape})")
        east_res, south_res = _split_resolution(resolution)
        height, width = arr.shape
        return cls(
            width=width,
            height=height,
            east_res=east_res,
            south_res=south_res,
            origin=corner,
            values=arr.ravel(),
        )

    @classmethod
    def from_region(
        cls,
        region: Region,
        resolution: Resolution | None = None,
        *,
        fill_value: float | None = None,
    ) -> "DenseGrid":
        """Construct a grid snapped outward to the resolution from a region.

        The corner is snapped down to a whole multiple of the resolution and the
        extent is rounded up, so the grid always covers `region`.
        """
        if resolution is None:
            resolution = settings.default_resolution
        east_res, south_res = _split_resolution(resolution)
        if not (east_res > 0 and south_res > 0):
            raise InvalidGridError(f"resolution must be positive (got {(east_res, south_res)})")
        fill = settings.fill_value if fill_value is None else float(fill_value)

        origin_east = math.floor(region.norwes.east / east_res) * east_res
        origin_south = math.floor(region.norwes.south / south_res) * south_res
        width = max(1, int(math.ceil((region.soueas.east - origin_east) / east_res)))
        height = max(1, int(math.ceil((region.soueas.south - origin_south) / south_res)))
        return cls(
            width=width,
            height=height,
            east_res=east_res,
            south_res=south_res,
            origin=GeoPoint(east=origin_east, south=origin_south),
            values=np.full(width * height, fill, dtype=np.float64),
        )

    def dimension(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def resolution(self) -> Tuple[float, float]:
        return (self.east_res, self.south_res)

    def corner(self) -> GeoPoint:
        return self.origin

    def data(self) -> np.ndarray:
        return self.values

    def as_array(self) -> np.ndarray:
        """Return a read-only `(height, width)` view of the data."""
        return self.values.reshape(self.height, self.width)

    def subregion(self, region: Region) -> "DenseGrid":
        return extract_subregion(self, region)


class LazyGrid:
    """Grid whose geometry is fixed up front and whose data is loaded on demand.

    `loader` is called at most once, on the first `data()` call. The loaded
    values are validated and only published after they are complete, so
    concurrent readers never see a partially built grid.
    """

    __slots__ = ("_width", "_height", "_east_res", "_south_res", "_corner", "_loader", "_lock", "_values")

    def __init__(
        self,
        width: int,
        height: int,
        resolution: Resolution,
        corner: GeoPoint,
        loader: Callable[[], Sequence[float]],
    ) -> None:
        width = _as_index(width, "width")
        height = _as_index(height, "height")
        east_res, south_res = _split_resolution(resolution)
        _validate_geometry(width, height, east_res, south_res, corner)
        self._width = width
        self._height = height
        self._east_res = east_res
        self._south_res = south_res
        self._corner = corner
        self._loader = loader
        self._lock = threading.Lock()
        self._values: np.ndarray | None = None

    @property
    def loaded(self) -> bool:
        return self._values is not None

    def dimension(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def resolution(self) -> Tuple[float, float]:
        return (self._east_res, self._south_res)

    def corner(self) -> GeoPoint:
        return self._corner

    def data(self) -> np.ndarray:
        values = self._values
        if values is not None:
            return values
        with self._lock:
            if self._values is None:
                loaded = _as_grid_values(self._loader(), self._width, self._height)
                log_event(
                    LOGGER,
                    "geogrid.grid.lazy_load",
                    "Loaded lazy grid data",
                    level="debug",
                    width=self._width,
                    height=self._height,
                )
                self._values = loaded
            return self._values

    def materialize(self) -> DenseGrid:
        """Load the data (if needed) and return it as a `DenseGrid`."""
        return DenseGrid(
            width=self._width,
            height=self._height,
            east_res=self._east_res,
            south_res=self._south_res,
            origin=self._corner,
            values=self.data(),
        )

    def subregion(self, region: Region) -> DenseGrid:
        return extract_subregion(self, region)


def params(grid: Grid) -> Tuple[int, int, float, float, GeoPoint]:
    """Extract `(width, height, east_res, south_res, corner)` from a grid.

    Used to initialize a new grid with the same geometry.
    """
    width, height = grid.dimension()
    east_res, south_res = grid.resolution()
    return (width, height, east_res, south_res, grid.corner())


def covered_region(grid: Grid) -> Region:
    """Return the geographic region spanned by the grid."""
    corner = grid.corner()
    width, height = grid.dimension()
    east_res, south_res = grid.resolution()
    soueas = GeoPoint(
        east=corner.east + width * east_res,
        south=corner.south + height * south_res,
    )
    return Region(norwes=corner, soueas=soueas)


def cell_centers(grid: Grid) -> Tuple[np.ndarray, np.ndarray]:
    """Return 1D arrays of east/south cell centers for the grid."""
    corner = grid.corner()
    width, height = grid.dimension()
    east_res, south_res = grid.resolution()
    east = corner.east + (np.arange(width) + 0.5) * east_res
    south = corner.south + (np.arange(height) + 0.5) * south_res
    return east, south


def grid_array(grid: Grid) -> np.ndarray:
    """Return the grid data as a `(height, width)` float array."""
    width, height = grid.dimension()
    return np.asarray(grid.data(), dtype=np.float64).reshape(height, width)


def extract_subregion(grid: Grid, region: Region) -> DenseGrid:
    """Cut the pixel-aligned superset of `region` out of `grid`.

    Alignment uses `align_crop_region`, so the result always covers `region`.
    Pixels of the aligned range outside the source grid are set to
    `settings.fill_value`.
    """
    alignment = align_crop_region(region, grid)
    out_width, out_height = alignment.width, alignment.height
    if out_width < 1 or out_height < 1:
        raise InvalidGridError(
            f"Aligned crop range is empty (offsets={alignment.offsets}); region has no area"
        )

    src = grid_array(grid)
    out = np.full((out_height, out_width), settings.fill_value, dtype=np.float64)
    i0, i1, j0, j1 = crop_window(alignment, grid.dimension(), clip=True)
    if i1 > i0 and j1 > j0:
        off_i = i0 - alignment.offsets.start_y
        off_j = j0 - alignment.offsets.start_x
        out[off_i : off_i + (i1 - i0), off_j : off_j + (j1 - j0)] = src[i0:i1, j0:j1]

    east_res, south_res = grid.resolution()
    log_event(
        LOGGER,
        "geogrid.grid.subregion",
        "Extracted subregion",
        level="debug",
        start_x=alignment.offsets.start_x,
        start_y=alignment.offsets.start_y,
        width=out_width,
        height=out_height,
    )
    return DenseGrid(
        width=out_width,
        height=out_height,
        east_res=east_res,
        south_res=south_res,
        origin=pixel_to_point(alignment.offsets.start_x, alignment.offsets.start_y, grid),
        values=out.ravel(),
    )
