"""Smoke check for crop alignment, subregion extraction and normalization on a synthetic grid."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(REPO_ROOT))

from geogrid.core import (  # noqa: E402
    DenseGrid,
    GeoPoint,
    Region,
    align_crop_region,
    covered_region,
    normalize,
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Smoke test crop alignment on a synthetic grid.")
    parser.add_argument(
        "--crop",
        type=float,
        nargs=4,
        metavar=("MIN_LON", "MIN_LAT", "MAX_LON", "MAX_LAT"),
        default=[116.47, 21.7, 125.0, 26.23],
        help="Crop bbox (lon/lat, unsnapped is fine).",
    )
    parser.add_argument(
        "--corner",
        type=float,
        nargs=2,
        metavar=("LAT", "LON"),
        default=[25.0, 120.0],
        help="Northwest corner of the synthetic grid.",
    )
    parser.add_argument("--size", type=int, default=100, help="Grid width and height in pixels.")
    parser.add_argument("--res", type=float, default=1.0, help="Grid resolution in degrees.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args()


def _print_header(title: str) -> None:
    print("\n" + "=" * 8 + f" {title} " + "=" * 8)


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    lat, lon = args.corner
    rng = np.random.default_rng(0)
    grid = DenseGrid.from_array(
        rng.normal(size=(args.size, args.size)),
        resolution=args.res,
        corner=GeoPoint.from_latlon(lat, lon),
    )
    crop = Region.from_bounds(*args.crop)

    _print_header("Grid")
    print(f"dimension={grid.dimension()} resolution={grid.resolution()} corner={grid.corner()}")
    print(f"covered_region={covered_region(grid)}")

    _print_header("Alignment")
    alignment = align_crop_region(crop, grid)
    print(alignment.to_dict())
    print(f"within grid: {alignment.within(grid.dimension())}")

    _print_header("Subregion")
    sub = grid.subregion(crop)
    values = sub.data()
    print(f"dimension={sub.dimension()} corner={sub.corner()} nan_cells={int(np.isnan(values).sum())}")

    _print_header("Normalize")
    normed = normalize(grid)
    print(f"min={float(normed.min()):.4f} max={float(normed.max()):.4f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
