import logging

from ..array import StridedArray, make_view
from ..backend.copy import new_copy
from ..layout import (
    as_dims,
    attempt_nocopy_reshape,
    check_ones,
    fill_strides,
    fix_unit_axis_strides,
    fix_unknown_dimension,
)
from ..tensor_types import MemoryOrder, Order, ShapeLike
from .order import resolve_memory_order, validate_order

logger = logging.getLogger(__name__)


def _needs_planner(array: StridedArray, order: MemoryOrder) -> bool:
    """Return whether the buffer cannot simply be reread in `order`."""
    if not array.is_one_segment:
        return True
    if array.ndim <= 1:
        return False
    return (array.is_c_contiguous and order == "F") or (
        array.is_f_contiguous and order == "C"
    )


def newshape(
    array: StridedArray,
    dims: tuple[int, ...],
    order: Order = "C",
) -> StridedArray:
    """Return `array` reshaped to validated `dims`, copying only when needed.

    The result is always a view: either of `array` itself, or of a fresh copy
    laid out in `order` when no stride assignment can describe the reshape.
    """
    memory_order = resolve_memory_order(array, validate_order(order, operation="reshape"))

    if dims == array.shape:
        return array.view()

    itemsize = array.itemsize
    strides = check_ones(array.shape, array.strides, dims)
    if strides is not None:
        strides = fix_unit_axis_strides(dims, strides, itemsize, memory_order)
        return make_view(array, dims, strides)

    dims = fix_unknown_dimension(dims, array.size)
    source = array
    if _needs_planner(array, memory_order):
        strides = attempt_nocopy_reshape(
            array.shape,
            array.strides,
            dims,
            is_f_order=memory_order == "F",
            itemsize=itemsize,
        )
        if strides is None:
            logger.debug(
                "no-copy reshape of %s to %s in order %s failed; copying",
                array.shape,
                dims,
                memory_order,
            )
            source = new_copy(array, memory_order)
    if strides is None:
        strides = fill_strides(dims, itemsize, memory_order)
    return make_view(source, dims, strides)


def reshape(
    array: StridedArray,
    shape: ShapeLike,
    *,
    order: Order = "C",
) -> StridedArray:
    """Give `array` a new shape without changing its data."""
    return newshape(array, as_dims(shape, operation="reshape"), order)


__all__ = ["newshape", "reshape"]
