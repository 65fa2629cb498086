import dask.array as da
import numba as nb
import numpy as np
import xarray as xr

JIT_KWARGS = {"nopython": True, "nogil": True}
ngjit = nb.jit(**JIT_KWARGS)


def is_xarray(src):
    return isinstance(src, (xr.DataArray, xr.Dataset))


def is_numpy(src):
    return isinstance(src, np.ndarray) or is_numpy_masked(src)


def is_numpy_masked(src):
    return isinstance(src, np.ma.MaskedArray)


def is_dask(src):
    return isinstance(src, da.Array)
