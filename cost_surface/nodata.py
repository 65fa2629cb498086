"""
No-data handling for friction and cost values.

Cells are never compared against the sentinel directly. All checks go
through :func:`is_data` and :func:`is_passable` so that a ``nan`` sentinel
and a numeric sentinel (e.g. ``-9999``) behave the same way.
"""
import numpy as np

from cost_surface._utils import ngjit

__all__ = ["NODATA", "is_data", "is_passable"]

# The sentinel written to cost cells that were never reached
NODATA = np.nan


@ngjit
def _is_data(value, null_value):
    if not np.isfinite(value):
        return False
    return np.isnan(null_value) or value != null_value


@ngjit
def _is_passable(value, null_value):
    return _is_data(value, null_value) and value >= 0


def is_data(value, null_value=NODATA):
    """Return ``True`` if `value` is a finite value other than `null_value`."""
    return bool(_is_data(float(value), float(null_value)))


def is_passable(friction, null_value=NODATA):
    """Return ``True`` if a cell with the given friction can be crossed.

    Frictions that are not data, or are negative, mark barrier cells.
    """
    return bool(_is_passable(float(friction), float(null_value)))
