from numbers import Integral, Number

import numpy as np

I8 = np.dtype(np.int8)
I64 = np.dtype(np.int64)
F64 = np.dtype(np.float64)


def is_int(value_or_dtype):
    if isinstance(value_or_dtype, np.dtype):
        return value_or_dtype.kind in ("u", "i")
    return isinstance(value_or_dtype, Integral)


def is_float(value_or_dtype):
    if isinstance(value_or_dtype, np.dtype):
        return value_or_dtype.kind == "f"
    return is_scalar(value_or_dtype) and not is_int(value_or_dtype)


def is_bool(value_or_dtype):
    if isinstance(value_or_dtype, np.dtype):
        return value_or_dtype.kind == "b"
    return isinstance(value_or_dtype, (bool, np.bool_))


def is_scalar(value_or_dtype):
    if not isinstance(value_or_dtype, np.dtype):
        return isinstance(value_or_dtype, Number)
    return is_int(value_or_dtype) or is_float(value_or_dtype)


def is_numeric(dtype):
    """Returns ``True`` if `dtype` can be safely viewed as float64 data."""
    return is_int(dtype) or is_float(dtype) or is_bool(dtype)
