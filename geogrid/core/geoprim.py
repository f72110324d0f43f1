"""Geographic primitives: points and axis-aligned regions.

Conventions
- **Axes**: `east` increases eastward (longitude), `south` increases southward
  (negated latitude). A point built with `GeoPoint.from_latlon(lat, lon)` has
  `east == lon` and `south == -lat`.
- **Regions** are defined by their northwest (`norwes`) and southeast (`soueas`)
  corners, so `norwes.east <= soueas.east` and `norwes.south <= soueas.south`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Immutable point on the east/south axis pair."""

    east: float
    south: float

    @classmethod
    def from_latlon(cls, lat: float, lon: float) -> "GeoPoint":
        return cls(east=float(lon), south=-float(lat))

    @property
    def latlon(self) -> Tuple[float, float]:
        return (-self.south, self.east)

    def as_eassou(self) -> Tuple[float, float]:
        return (self.east, self.south)


@dataclass(frozen=True, slots=True)
class Region:
    """Axis-aligned bounding region between a northwest and a southeast corner."""

    norwes: GeoPoint
    soueas: GeoPoint

    def __post_init__(self) -> None:
        if self.norwes.east > self.soueas.east:
            raise ValueError(
                f"Region northwest corner lies east of southeast corner "
                f"(norwes.east={self.norwes.east}, soueas.east={self.soueas.east})"
            )
        if self.norwes.south > self.soueas.south:
            raise ValueError(
                f"Region northwest corner lies south of southeast corner "
                f"(norwes.south={self.norwes.south}, soueas.south={self.soueas.south})"
            )

    @classmethod
    def from_bounds(
        cls,
        min_lon: float,
        min_lat: float,
        max_lon: float,
        max_lat: float,
    ) -> "Region":
        """Build a region from a (min_lon, min_lat, max_lon, max_lat) bbox."""
        return cls(
            norwes=GeoPoint.from_latlon(max_lat, min_lon),
            soueas=GeoPoint.from_latlon(min_lat, max_lon),
        )

    @property
    def noreas(self) -> GeoPoint:
        return GeoPoint(east=self.soueas.east, south=self.norwes.south)

    @property
    def souwes(self) -> GeoPoint:
        return GeoPoint(east=self.norwes.east, south=self.soueas.south)

    def four_corners(self) -> Tuple[GeoPoint, GeoPoint, GeoPoint, GeoPoint]:
        """Return `(norwes, noreas, soueas, souwes)`."""
        return (self.norwes, self.noreas, self.soueas, self.souwes)
