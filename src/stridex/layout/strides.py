from math import prod

from ..tensor_types import MemoryOrder


def fill_strides(
    shape: tuple[int, ...], itemsize: int, order: MemoryOrder = "C"
) -> tuple[int, ...]:
    """Return contiguous byte strides for `shape` in one memory order."""
    strides = [0] * len(shape)
    stride = itemsize
    if order == "F":
        for index, dim in enumerate(shape):
            strides[index] = stride
            stride *= dim if dim else 1
    else:
        for index in range(len(shape) - 1, -1, -1):
            strides[index] = stride
            dim = shape[index]
            stride *= dim if dim else 1
    return tuple(strides)


def fix_unit_axis_strides(
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    itemsize: int,
    order: MemoryOrder,
) -> tuple[int, ...]:
    """Rewrite strides of size-one axes so they continue their neighbours.

    Placeholder strides left by unit-axis insertion become the stride a
    contiguous layout in `order` would give those axes.
    """
    ndim = len(shape)
    if ndim == 0:
        return strides
    fixed = list(strides)
    if order == "F":
        if shape[0] == 1:
            fixed[0] = itemsize
        for index in range(1, ndim):
            if shape[index] == 1:
                fixed[index] = fixed[index - 1] * shape[index - 1]
    else:
        if shape[-1] == 1:
            fixed[-1] = itemsize
        for index in range(ndim - 2, -1, -1):
            if shape[index] == 1:
                fixed[index] = fixed[index + 1] * shape[index + 1]
    return tuple(fixed)


def element_count(shape: tuple[int, ...]) -> int:
    """Return number of elements described by `shape`."""
    return prod(shape, start=1)


def byte_extent(
    shape: tuple[int, ...], strides: tuple[int, ...], itemsize: int
) -> tuple[int, int]:
    """Return the lowest and one-past-highest byte offsets touched by a layout."""
    if 0 in shape:
        return 0, 0
    low = 0
    high = 0
    for dim, stride in zip(shape, strides):
        span = (dim - 1) * stride
        if span < 0:
            low += span
        else:
            high += span
    return low, high + itemsize


__all__ = [
    "byte_extent",
    "element_count",
    "fill_strides",
    "fix_unit_axis_strides",
]
