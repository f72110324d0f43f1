"""Core grid model and numeric helpers."""

from .crop import CropAlignment, Overruns, PixelOffsets, align_crop_region, crop_window
from .export import to_dataarray
from .geoprim import GeoPoint, Region
from .grid import (
    DenseGrid,
    Grid,
    LazyGrid,
    cell_centers,
    covered_region,
    extract_subregion,
    params,
)
from .normalize import data_magnitude, normalize
from .pixels import pixel_to_point, point_to_pixel

__all__ = [
    "CropAlignment",
    "DenseGrid",
    "GeoPoint",
    "Grid",
    "LazyGrid",
    "Overruns",
    "PixelOffsets",
    "Region",
    "align_crop_region",
    "cell_centers",
    "covered_region",
    "crop_window",
    "data_magnitude",
    "extract_subregion",
    "normalize",
    "params",
    "pixel_to_point",
    "point_to_pixel",
    "to_dataarray",
]
