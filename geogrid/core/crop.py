"""Align arbitrary crop regions to a grid's pixel boundaries.

Adjustment always makes the crop region a bit larger, at most by a fraction
of a pixel per side (unless it already fits), and always includes the full
requested area.

Edge behavior
- The start (northwest) corner uses `floor` so a region starting inside a pixel
  includes it.
- The end (southeast) corner uses `ceil(pix) - 1`, the smallest inclusive
  pixel index `i` with `i + 1 >= pix`.
- Overruns are in units of pixels and always in `[0, 1)`; an overrun is `0`
  only when the corner already falls on a pixel boundary.

Regions outside the grid still align numerically (negative or out-of-range
offsets). Callers needing in-bounds offsets check `CropAlignment.within` or
clamp with `crop_window(..., clip=True)`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Tuple

from geogrid.config import settings
from geogrid.core.geoprim import Region
from geogrid.core.pixels import point_to_pixel
from geogrid.logging_utils import log_event

if TYPE_CHECKING:  # pragma: no cover
    from geogrid.core.grid import Grid

LOGGER = logging.getLogger(__name__)

# Largest double below 1.0; overruns are clamped to it when rounding reaches 1.0.
_MAX_OVERRUN = math.nextafter(1.0, 0.0)


def _overrun(value: float) -> float:
    return min(value, _MAX_OVERRUN)


@dataclass(frozen=True, slots=True)
class PixelOffsets:
    """Inclusive pixel index range of an aligned crop region."""

    start_x: int
    start_y: int
    ended_x: int
    ended_y: int


@dataclass(frozen=True, slots=True)
class Overruns:
    """How far (in fractions of a pixel) each side overruns the requested area."""

    top: float
    bottom: float
    left: float
    right: float


@dataclass(frozen=True, slots=True)
class CropAlignment:
    offsets: PixelOffsets
    overruns: Overruns

    @property
    def width(self) -> int:
        return self.offsets.ended_x - self.offsets.start_x + 1

    @property
    def height(self) -> int:
        return self.offsets.ended_y - self.offsets.start_y + 1

    def within(self, dimension: Tuple[int, int]) -> bool:
        """Return True if the whole pixel range lies inside a `(width, height)` grid."""
        width, height = dimension
        o = self.offsets
        return 0 <= o.start_x and o.ended_x < width and 0 <= o.start_y and o.ended_y < height

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        o = self.offsets
        r = self.overruns
        return {
            "crop_region_pixel_offsets": {
                "start_x": o.start_x,
                "ended_x": o.ended_x,
                "start_y": o.start_y,
                "ended_y": o.ended_y,
            },
            "overruns": {
                "top": r.top,
                "bottom": r.bottom,
                "right": r.right,
                "left": r.left,
            },
        }


def align_crop_region(region: Region, grid: Grid) -> CropAlignment:
    """Adjust `region` so that it is aligned with the pixels of `grid`.

    Returns the inclusive pixel offsets of the adjusted region and the
    fractional overrun on each side.
    """
    norwes, _noreas, soueas, _souwes = region.four_corners()

    norwes_x, norwes_y = point_to_pixel(norwes, grid)
    start_x = int(math.floor(norwes_x))
    start_y = int(math.floor(norwes_y))
    left = _overrun(norwes_x - start_x)
    top = _overrun(norwes_y - start_y)

    soueas_x, soueas_y = point_to_pixel(soueas, grid)
    ended_x = int(math.ceil(soueas_x)) - 1
    ended_y = int(math.ceil(soueas_y)) - 1
    right = _overrun((ended_x + 1) - soueas_x)
    bottom = _overrun((ended_y + 1) - soueas_y)

    alignment = CropAlignment(
        offsets=PixelOffsets(start_x=start_x, start_y=start_y, ended_x=ended_x, ended_y=ended_y),
        overruns=Overruns(top=top, bottom=bottom, left=left, right=right),
    )

    if settings.warn_out_of_bounds and not alignment.within(grid.dimension()):
        width, height = grid.dimension()
        log_event(
            LOGGER,
            "geogrid.crop.out_of_bounds",
            "Aligned crop region extends outside the grid",
            level="warning",
            start_x=start_x,
            start_y=start_y,
            ended_x=ended_x,
            ended_y=ended_y,
            width=width,
            height=height,
        )
    return alignment


def crop_window(
    alignment: CropAlignment,
    dimension: Tuple[int, int],
    *,
    clip: bool = True,
) -> Tuple[int, int, int, int]:
    """Convert an alignment to a half-open `(i0, i1, j0, j1)` slicing window.

    - `i0:i1` spans rows (`y`, north → south)
    - `j0:j1` spans columns (`x`, west → east)

    If `clip=True`, indices are clamped to `[0, height]` / `[0, width]`. If the
    alignment lies completely outside, the window is empty (e.g. `i0 == i1`).
    """
    width, height = dimension
    o = alignment.offsets
    i0, i1 = o.start_y, o.ended_y + 1
    j0, j1 = o.start_x, o.ended_x + 1

    if clip:
        i0 = max(0, min(height, i0))
        i1 = max(0, min(height, i1))
        j0 = max(0, min(width, j0))
        j1 = max(0, min(width, j1))

    return i0, i1, j0, j1
