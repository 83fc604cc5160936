from typing import Any

import numpy as np
from array_api_compat import array_namespace, is_array_api_obj, is_numpy_array
from numpy.typing import DTypeLike, NDArray

from .array import StridedArray, allocate_array
from .backend.memory import numpy_window
from .diagnostics import ErrorCode, ValidationError
from .tensor_types import MemoryOrder


def _materialize(obj: object) -> NDArray[Any]:
    """Return host numpy data for numpy arrays, array-API arrays, or sequences."""
    if isinstance(obj, StridedArray):
        return obj.to_numpy()
    if is_numpy_array(obj):
        return obj  # type: ignore[return-value]
    if is_array_api_obj(obj):
        namespace = array_namespace(obj)
        try:
            return np.asarray(obj)
        except (TypeError, ValueError, RuntimeError) as error:
            raise ValidationError(
                code=ErrorCode.INVALID_ARGUMENT,
                message=(
                    "invalid argument: array from namespace "
                    f"{getattr(namespace, '__name__', '?')!r} cannot be read on the host"
                ),
                help="move the array to host memory before converting",
                related=("asarray",),
                data={"operation": "asarray"},
            ) from error
    return np.asarray(obj)


def asarray(
    obj: object,
    *,
    dtype: DTypeLike | None = None,
    order: MemoryOrder = "C",
) -> StridedArray:
    """Copy `obj` into a new owning array laid out in `order`."""
    source = _materialize(obj)
    if dtype is not None:
        source = source.astype(dtype, copy=False)
    array = allocate_array(source.shape, source.dtype, order=order)
    window = numpy_window(
        array.memory,
        array.offset,
        array.shape,
        array.strides,
        array.dtype,
        writeable=True,
    )
    np.copyto(window, source)
    return array


def to_numpy(array: StridedArray) -> NDArray[Any]:
    """Return a numpy array aliasing `array`'s bytes (read-only unless writeable)."""
    return array.to_numpy()


__all__ = ["asarray", "to_numpy"]
