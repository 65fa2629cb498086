import numpy as np

from cost_surface._utils import ngjit
from cost_surface.dtypes import F64, I64, I8, is_scalar
from cost_surface.nodata import NODATA, _is_data, _is_passable

__all__ = [
    "MOVES",
    "cost_surface_numpy",
    "get_frontier_capacity",
    "get_move_lengths",
]

# Neighbor offsets as (col, row) steps. The orthogonal moves come first,
# followed by the diagonals.
#
# +-------+-------------+
# | Index |    Move     |
# +-------+-------------+
# |     0 | Left        |
# |     1 | Right       |
# |     2 | Up          |
# |     3 | Down        |
# |     4 | Upper-Left  |
# |     5 | Lower-Left  |
# |     6 | Upper-Right |
# |     7 | Lower-Right |
# +-------+-------------+
MOVES = np.array(
    [
        [-1, 0],
        [1, 0],
        [0, -1],
        [0, 1],
        [-1, -1],
        [-1, 1],
        [1, -1],
        [1, 1],
    ],
    dtype=I8,
)


def get_move_lengths(scaling=1.0):
    """Return the euclidean length of each move in :data:`MOVES`.

    Parameters
    ----------
    scaling : scalar or 2-item sequence, optional
        The cell size. A scalar is used for both directions. A sequence is
        interpreted as ``(y, x)``, matching numpy axis order. Default is 1.

    Returns
    -------
    ndarray
        A float64 array with one length per move. With the default scaling
        orthogonal moves have length 1 and diagonal moves ``sqrt(2)``.

    """
    if is_scalar(scaling):
        scaling = np.array([scaling, scaling], dtype=F64)
    elif isinstance(scaling, (np.ndarray, list, tuple)):
        scaling = np.asarray(scaling).astype(F64)
        if scaling.shape != (2,):
            raise ValueError(f"Invalid scaling shape: {scaling.shape}")
    else:
        raise TypeError(f"Could not understand scaling: {scaling!r}")
    if any(~np.isfinite(scaling)) or any(scaling <= 0):
        raise ValueError("Scaling values must be finite and greater than 0")

    sy, sx = scaling
    # Columns move along x, rows along y
    steps = MOVES.astype(F64) * np.array([sx, sy])
    return np.sqrt(np.sum(steps**2, axis=1))


def get_frontier_capacity(cols, rows):
    # The live wavefront is bounded by the propagating edge rather than the
    # grid area.
    return 16 * (cols + rows)


@ngjit
def _heap_push(keys, cols, rows, frictions, size, key, col, row, friction):
    if size == keys.size:
        # Grow all of the heap arrays together
        n = keys.size * 2
        new_keys = np.empty(n, dtype=F64)
        new_cols = np.empty(n, dtype=I64)
        new_rows = np.empty(n, dtype=I64)
        new_frictions = np.empty(n, dtype=F64)
        new_keys[:size] = keys
        new_cols[:size] = cols
        new_rows[:size] = rows
        new_frictions[:size] = frictions
        keys = new_keys
        cols = new_cols
        rows = new_rows
        frictions = new_frictions

    i = size
    keys[i] = key
    cols[i] = col
    rows[i] = row
    frictions[i] = friction
    size += 1
    # Sift up
    while i > 0:
        parent = (i - 1) >> 1
        if keys[parent] <= keys[i]:
            break
        keys[parent], keys[i] = keys[i], keys[parent]
        cols[parent], cols[i] = cols[i], cols[parent]
        rows[parent], rows[i] = rows[i], rows[parent]
        frictions[parent], frictions[i] = frictions[i], frictions[parent]
        i = parent
    return keys, cols, rows, frictions, size


@ngjit
def _heap_pop(keys, cols, rows, frictions, size):
    key = keys[0]
    col = cols[0]
    row = rows[0]
    friction = frictions[0]
    size -= 1
    keys[0] = keys[size]
    cols[0] = cols[size]
    rows[0] = rows[size]
    frictions[0] = frictions[size]
    # Sift down
    i = 0
    while True:
        child = 2 * i + 1
        if child >= size:
            break
        if child + 1 < size and keys[child + 1] < keys[child]:
            child += 1
        if keys[i] <= keys[child]:
            break
        keys[i], keys[child] = keys[child], keys[i]
        cols[i], cols[child] = cols[child], cols[i]
        rows[i], rows[child] = rows[child], rows[i]
        frictions[i], frictions[child] = frictions[child], frictions[i]
        i = child
    return col, row, friction, key, size


@ngjit
def _cost_surface_core(
    friction,
    friction_null_value,
    cost,
    source_cols,
    source_rows,
    max_cost,
    moves,
    move_lengths,
    capacity,
):
    nrows, ncols = friction.shape
    # The cost array starts out filled with nan which is its null value
    cost_null_value = np.nan

    keys = np.empty(capacity, dtype=F64)
    heap_cols = np.empty(capacity, dtype=I64)
    heap_rows = np.empty(capacity, dtype=I64)
    heap_frictions = np.empty(capacity, dtype=F64)
    size = 0

    for i in range(source_cols.size):
        col = source_cols[i]
        row = source_rows[i]
        if not (0 <= col < ncols and 0 <= row < nrows):
            continue
        keys, heap_cols, heap_rows, heap_frictions, size = _heap_push(
            keys,
            heap_cols,
            heap_rows,
            heap_frictions,
            size,
            0.0,
            col,
            row,
            friction[row, col],
        )

    while size > 0:
        col, row, f1, candidate, size = _heap_pop(
            keys, heap_cols, heap_rows, heap_frictions, size
        )
        if not (0 <= col < ncols and 0 <= row < nrows):
            continue
        if not _is_passable(f1, friction_null_value):
            continue
        if candidate > max_cost:
            continue
        current = cost[row, col]
        has_value = _is_data(current, cost_null_value)
        if has_value and candidate > current:
            continue

        cost[row, col] = candidate
        # Equal cost means this cell was already expanded from this value
        if has_value and candidate == current:
            continue

        for i in range(moves.shape[0]):
            ncol = col + moves[i, 0]
            nrow = row + moves[i, 1]
            if not (0 <= ncol < ncols and 0 <= nrow < nrows):
                continue
            f2 = friction[nrow, ncol]
            if not _is_passable(f2, friction_null_value):
                continue
            new_cost = candidate + move_lengths[i] * (f1 + f2) / 2.0
            keys, heap_cols, heap_rows, heap_frictions, size = _heap_push(
                keys,
                heap_cols,
                heap_rows,
                heap_frictions,
                size,
                new_cost,
                ncol,
                nrow,
                f2,
            )
    return cost


def cost_surface_numpy(
    friction,
    sources,
    max_cost=np.inf,
    scaling=1.0,
    friction_null_value=NODATA,
):
    """Compute an accumulated cost surface with the compiled kernel.

    This produces the same values as
    :func:`cost_surface.wavefront.compute_cost_surface` but runs entirely in
    compiled code and does not support boundary callbacks.

    Parameters
    ----------
    friction : 2D ndarray
        The friction values in ``(row, col)`` order.
    sources : (M, 2) int array
        The ``(col, row)`` source cells. Must be inside `friction`.
    max_cost : scalar, optional
        Costs above this value are not recorded. Default is unbounded.
    scaling : scalar or 2-item sequence, optional
        The ``(y, x)`` cell size. Default is 1.
    friction_null_value : scalar, optional
        The null value of `friction`. Default is ``nan``.

    Returns
    -------
    ndarray
        A float64 array with the same shape as `friction`. Cells that were not
        reached are ``nan``.

    """
    friction = np.asarray(friction).astype(F64)
    if friction.ndim != 2:
        raise ValueError("Friction array must be 2D")
    sources = np.asarray(sources, dtype=I64).reshape((-1, 2))
    move_lengths = get_move_lengths(scaling)
    nrows, ncols = friction.shape

    cost = np.full(friction.shape, np.nan, dtype=F64)
    return _cost_surface_core(
        friction,
        float(friction_null_value),
        cost,
        np.ascontiguousarray(sources[:, 0]),
        np.ascontiguousarray(sources[:, 1]),
        float(max_cost),
        MOVES.astype(I64),
        move_lengths,
        get_frontier_capacity(ncols, nrows),
    )
