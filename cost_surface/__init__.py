from cost_surface._version import __version__  # noqa
from cost_surface.exceptions import (
    CostSurfaceError,
    DimensionsError,
    GridDataError,
)
from cost_surface.frontier import Candidate, Frontier, generate_frontier
from cost_surface.grid import Grid, get_grid
from cost_surface.nodata import NODATA, is_data, is_passable
from cost_surface.wavefront import (
    compute_cost_surface,
    cost_distance,
    nop,
    relax,
)

__all__ = [
    "Candidate",
    "CostSurfaceError",
    "DimensionsError",
    "Frontier",
    "Grid",
    "GridDataError",
    "NODATA",
    "compute_cost_surface",
    "cost_distance",
    "generate_frontier",
    "get_grid",
    "is_data",
    "is_passable",
    "nop",
    "relax",
]
