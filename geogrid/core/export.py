"""Hand grid data to rendering collaborators as a labelled xarray object.

The returned array is read-only input for visualization layers: dims are
`("south", "east")` with cell-center coordinates, rows ordered north → south
exactly as stored in the grid.
"""

from __future__ import annotations

import xarray as xr

from geogrid.core.grid import Grid, cell_centers, grid_array


def to_dataarray(grid: Grid, name: str = "values") -> xr.DataArray:
    east, south = cell_centers(grid)
    east_res, south_res = grid.resolution()
    corner = grid.corner()
    return xr.DataArray(
        grid_array(grid),
        coords={"south": south, "east": east},
        dims=("south", "east"),
        name=name,
        attrs={
            "east_res": east_res,
            "south_res": south_res,
            "corner_east": corner.east,
            "corner_south": corner.south,
        },
    )
