import warnings

import numpy as np
import xarray as xr

from cost_surface._core import MOVES, cost_surface_numpy, get_move_lengths
from cost_surface._utils import is_xarray
from cost_surface.dtypes import I64
from cost_surface.exceptions import DimensionsError
from cost_surface.frontier import Candidate, generate_frontier
from cost_surface.grid import Grid, get_grid
from cost_surface.nodata import NODATA, is_passable

__all__ = ["compute_cost_surface", "cost_distance", "nop", "relax"]


def nop(candidate):
    """A boundary callback that does nothing."""


def _expand(friction, frontier, candidate, move_lengths):
    # Queue a candidate for every passable neighbor of an accepted cell
    col, row, friction1, cost = candidate
    null_value = friction.null_value
    for (dcol, drow), length in zip(MOVES, move_lengths):
        ncol = col + int(dcol)
        nrow = row + int(drow)
        if not friction.in_bounds(ncol, nrow):
            continue
        friction2 = friction.get_value(ncol, nrow)
        if not is_passable(friction2, null_value):
            continue
        frontier.insert(
            Candidate(
                ncol,
                nrow,
                friction2,
                cost + length * (friction1 + friction2) / 2.0,
            )
        )


def relax(
    friction,
    cost,
    max_cost=np.inf,
    frontier=None,
    left_callback=nop,
    right_callback=nop,
    top_callback=nop,
    bottom_callback=nop,
    scaling=1.0,
):
    """Drain a frontier of candidates into a cost grid.

    This is the radial wave propagation algorithm from [1]_. The cheapest
    candidate is repeatedly taken from `frontier`. If it improves on the cost
    already stored for its cell (or the cell has no cost yet) and does not
    exceed `max_cost`, it is written to `cost` and candidates for its 8
    neighbors are queued. The cost of moving between neighbors is
    ``length * (friction1 + friction2) / 2`` where ``length`` is 1 for
    horizontal and vertical moves and ``sqrt(2)`` for diagonal moves, scaled
    by the cell size.

    Candidates that land outside of the grid, carry a barrier friction, or
    do not improve on the stored cost are discarded. Barrier cells (friction
    that is negative or null) are never written and never expanded. A
    seed placed on a barrier is discarded as well, rather than being written
    with a cost of 0 and left unexpanded, so re-seeding across a tile edge
    onto a barrier leaves that cell unset.

    Whenever a candidate is written to a cell on the edge of the grid, the
    callback for that edge is called with the candidate. A corner cell
    triggers two callbacks. Callers can use these to seed the frontier of an
    adjacent tile.

    Parameters
    ----------
    friction : Grid
        The friction grid. It is not modified.
    cost : Grid
        The cost grid to update in place. Must have the same dimensions as
        `friction`. Cells that have no data are treated as unreached.
    max_cost : scalar, optional
        The maximum cost of any path. Default is unbounded.
    frontier : Frontier
        The pending candidates. It is empty when this function returns.
        Required.
    left_callback, right_callback, top_callback, bottom_callback : callable
        Called with the accepted :class:`Candidate` when a cell on the
        corresponding edge is written. Default is :func:`nop`.
    scaling : scalar or 2-item sequence, optional
        The ``(y, x)`` cell size. Default is 1.

    Returns
    -------
    cost : Grid
        The updated cost grid.

    References
    ----------
    .. [1] Tomlin, Dana. "Propagating radial waves of travel cost in a grid."
       International Journal of Geographical Information Science 24.9
       (2010): 1391-1413.

    """
    if frontier is None:
        raise TypeError("relax() requires a frontier")
    if friction.dimensions != cost.dimensions:
        raise DimensionsError(
            "Friction and cost grids must have the same dimensions: "
            f"{friction.dimensions} != {cost.dimensions}"
        )
    move_lengths = get_move_lengths(scaling)
    last_col = friction.cols - 1
    last_row = friction.rows - 1

    while not frontier.is_empty():
        candidate = frontier.extract_min()
        col, row, friction1, candidate_cost = candidate
        if not friction.in_bounds(col, row):
            continue
        if not is_passable(friction1, friction.null_value):
            continue
        if candidate_cost > max_cost:
            continue
        current = cost.get_value(col, row)
        has_value = cost.is_data(current)
        if has_value and candidate_cost > current:
            continue

        cost.set_value(col, row, candidate_cost)

        # Register changes on the boundary
        if col == 0:
            left_callback(candidate)
        if col == last_col:
            right_callback(candidate)
        if row == 0:
            top_callback(candidate)
        if row == last_row:
            bottom_callback(candidate)

        # An equal cost was already expanded when it was first written
        if has_value and candidate_cost == current:
            continue
        _expand(friction, frontier, candidate, move_lengths)

    return cost


def _validate_sources(sources, cols, rows):
    try:
        sources = np.asarray(sources).astype(I64)
    except (TypeError, ValueError) as err:
        raise ValueError("Could not understand sources argument") from err
    if sources.size == 0:
        return sources.reshape((0, 2))
    if len(sources.shape) != 2 or sources.shape[1] != 2:
        raise ValueError("Sources must be an (M, 2) shaped array")
    in_bounds = (
        (sources[:, 0] >= 0)
        & (sources[:, 0] < cols)
        & (sources[:, 1] >= 0)
        & (sources[:, 1] < rows)
    )
    if not in_bounds.all():
        bad = [tuple(s) for s in sources[~in_bounds].tolist()]
        raise ValueError(
            f"Sources must be inside the {cols}x{rows} grid. Got: {bad}"
        )
    return sources


def _drop_barrier_sources(friction, sources):
    passable = np.array(
        [
            is_passable(friction.get_value(col, row), friction.null_value)
            for col, row in sources.tolist()
        ],
        dtype=bool,
    )
    if not passable.all():
        warnings.warn(
            "Ignoring sources that lie on barrier cells: "
            f"{[tuple(s) for s in sources[~passable].tolist()]}",
            stacklevel=3,
        )
    return sources[passable]


def compute_cost_surface(friction, sources, max_cost=np.inf, scaling=1.0):
    """Generate a cost surface from a friction grid and source cells.

    Each source cell starts with a cost of 0 and the costs are propagated
    outward with :func:`relax`. No boundary callbacks are used.

    Parameters
    ----------
    friction : Grid or array-like
        The friction grid. Anything understood by
        :func:`cost_surface.grid.get_grid` is accepted. Negative and null
        values are barriers.
    sources : sequence of (col, row)
        The source cells. Sources outside of the grid raise an error.
        Sources on barrier cells are ignored with a warning.
    max_cost : scalar, optional
        Cells whose minimum cost exceeds this value are left unset. Default
        is unbounded.
    scaling : scalar or 2-item sequence, optional
        The ``(y, x)`` cell size. Default is 1.

    Returns
    -------
    cost : Grid
        The accumulated cost grid. Unreached cells have no data.

    """
    friction = get_grid(friction)
    sources = _validate_sources(sources, friction.cols, friction.rows)
    sources = _drop_barrier_sources(friction, sources)

    cost = Grid.empty(friction.cols, friction.rows)
    frontier = generate_frontier(friction, sources.tolist())
    return relax(
        friction, cost, max_cost, frontier, nop, nop, nop, nop, scaling
    )


def _get_coord_resolution(xdata, dim):
    if dim not in xdata.coords or xdata[dim].size < 2:
        return None
    return abs(float(xdata[dim][1] - xdata[dim][0]))


def _get_scaling(xdata, y="y", x="x"):
    ry = _get_coord_resolution(xdata, y)
    rx = _get_coord_resolution(xdata, x)
    if ry is None and rx is None:
        return 1.0
    if ry is None:
        ry = rx
    if rx is None:
        rx = ry
    return (ry, rx)


def cost_distance(friction, sources, max_cost=np.inf, scaling=None):
    """Calculate an accumulated cost surface for array or xarray data.

    This computes the same values as :func:`compute_cost_surface` using a
    compiled kernel.

    Parameters
    ----------
    friction : Grid, ndarray, dask array, or xarray.DataArray
        A 2D friction surface. Negative, non-finite, and null values are
        barriers. Dask data is computed.
    sources : sequence of (col, row)
        The source cells. Must have shape (M, 2) and lie inside `friction`.
        Sources on barrier cells are ignored with a warning.
    max_cost : scalar, optional
        Cells whose minimum cost exceeds this value are left null. Default is
        unbounded.
    scaling : scalar or 2-item sequence, optional
        The ``(y, x)`` cell size. If not provided, it is taken from the
        spacing of the ``y`` and ``x`` coordinates of a DataArray input and
        defaults to 1 otherwise.

    Returns
    -------
    xarray.DataArray
        The accumulated cost surface. If `friction` is a DataArray, its
        dims and coords are kept. Unreached cells are ``nan`` and the
        ``_FillValue`` attribute is set to ``nan``.

    """
    coords = None
    dims = ("y", "x")
    if is_xarray(friction):
        xdata = friction
        if xdata.ndim == 3 and xdata.shape[0] == 1:
            xdata = xdata.isel({xdata.dims[0]: 0}, drop=True)
        if xdata.ndim != 2:
            raise DimensionsError("Friction DataArray must be 2D")
        dims = xdata.dims
        coords = xdata.coords
        if scaling is None:
            scaling = _get_scaling(xdata, *dims)
    if scaling is None:
        scaling = 1.0

    grid = get_grid(friction)
    sources = _validate_sources(sources, grid.cols, grid.rows)
    sources = _drop_barrier_sources(grid, sources)

    result = cost_surface_numpy(
        grid.to_numpy(),
        sources,
        max_cost=max_cost,
        scaling=scaling,
        friction_null_value=grid.null_value,
    )
    return xr.DataArray(
        result, coords=coords, dims=dims, attrs={"_FillValue": NODATA}
    )
