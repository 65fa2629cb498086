import numpy as np
import xarray as xr

from cost_surface._utils import (
    is_dask,
    is_numpy,
    is_numpy_masked,
    is_xarray,
)
from cost_surface.dtypes import F64, is_numeric, is_scalar
from cost_surface.exceptions import DimensionsError, GridDataError
from cost_surface.nodata import NODATA, _is_data

__all__ = ["Grid", "get_grid"]


class Grid:
    """A dimensioned 2D grid of float64 cell values.

    Cells are addressed by ``(col, row)``. Column 0 is the left edge and row 0
    is the top edge. The underlying array is stored in ``(row, col)`` order.

    Parameters
    ----------
    data : array-like
        A 2D array of cell values. The data is copied.
    null_value : scalar, optional
        The value that marks cells without data. Default is ``nan``.

    """

    __slots__ = ("_data", "_null_value")

    def __init__(self, data, null_value=NODATA):
        data = np.asarray(data)
        if data.ndim != 2:
            raise DimensionsError(
                f"Grid data must be 2D. Got {data.ndim} dimensions."
            )
        if not is_numeric(data.dtype):
            raise GridDataError(f"Grid data must be numeric: {data.dtype}")
        if not is_scalar(null_value):
            raise TypeError(f"Null value must be a scalar: {null_value!r}")
        # Copy to take ownership
        self._data = np.array(data, dtype=F64)
        self._null_value = float(null_value)

    @classmethod
    def empty(cls, cols, rows, null_value=NODATA):
        """Create a grid of the given dimensions filled with `null_value`."""
        if cols < 1 or rows < 1:
            raise DimensionsError(
                f"Grid dimensions must be positive. Got ({cols}, {rows})"
            )
        return cls(np.full((rows, cols), null_value, dtype=F64), null_value)

    @property
    def cols(self):
        return self._data.shape[1]

    @property
    def rows(self):
        return self._data.shape[0]

    @property
    def dimensions(self):
        """The ``(cols, rows)`` dimensions of the grid."""
        return (self.cols, self.rows)

    @property
    def shape(self):
        """The ``(rows, cols)`` shape of the underlying array."""
        return self._data.shape

    @property
    def null_value(self):
        return self._null_value

    @property
    def mask(self):
        """A boolean array that is ``True`` where cells have no data."""
        data = self._data
        mask = ~np.isfinite(data)
        if not np.isnan(self._null_value):
            mask |= data == self._null_value
        return mask

    def in_bounds(self, col, row):
        return 0 <= col < self.cols and 0 <= row < self.rows

    def is_data(self, value):
        return bool(_is_data(float(value), self._null_value))

    def get_value(self, col, row):
        return float(self._data[row, col])

    def set_value(self, col, row, value):
        self._data[row, col] = value

    def to_numpy(self):
        """Return a copy of the cell values in ``(row, col)`` order."""
        return self._data.copy()

    def to_xarray(self, coords=None, dims=("y", "x")):
        """Return the cell values as an :class:`xarray.DataArray`.

        The null value is recorded in the ``_FillValue`` attribute.
        """
        return xr.DataArray(
            self.to_numpy(),
            coords=coords,
            dims=dims,
            attrs={"_FillValue": self._null_value},
        )

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(
            np.where(self.mask, np.nan, self._data),
            np.where(other.mask, np.nan, other._data),
            equal_nan=True,
        )

    def __repr__(self):
        return (
            f"Grid(cols={self.cols}, rows={self.rows}, "
            f"null_value={self._null_value})"
        )


def _squeeze_band_dim(data):
    # Single band rasters are often stored as (1, y, x)
    if data.ndim == 3 and data.shape[0] == 1:
        return data[0]
    return data


def get_grid(src, null_value=None):
    """Resolve `src` to a :class:`Grid`.

    Parameters
    ----------
    src : Grid, ndarray, dask array, or xarray.DataArray
        The grid source. Dask backed data is computed. Masked numpy arrays
        have their masked cells set to the null value. A single band of a
        ``(band, y, x)`` array is accepted.
    null_value : scalar, optional
        The null value of the data. If not provided, the ``_FillValue``
        attribute of a DataArray is used, falling back to ``nan``.

    Returns
    -------
    Grid

    """
    if isinstance(src, Grid):
        if null_value is None or null_value == src.null_value:
            return src
        return Grid(src.to_numpy(), null_value)

    if is_xarray(src):
        if isinstance(src, xr.Dataset):
            raise TypeError("Datasets are not supported. Use a DataArray.")
        if null_value is None:
            null_value = src.attrs.get("_FillValue", NODATA)
        data = src.data
    elif is_numpy(src) or is_dask(src):
        data = src
    else:
        raise TypeError(f"Could not resolve input to a grid: {src!r}")

    if null_value is None:
        null_value = NODATA
    if is_dask(data):
        data = data.compute()
    if is_numpy_masked(data):
        data = data.astype(F64).filled(null_value)
    return Grid(_squeeze_band_dim(np.asarray(data)), null_value)
