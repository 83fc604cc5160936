import logging

from ..array import StridedArray, allocate_array, make_view
from ..backend.copy import copy_as_flat
from ..layout import create_sorted_stride_perm
from ..tensor_types import Order
from .order import validate_order
from .reshape import newshape

logger = logging.getLogger(__name__)


def _uniform_stride(array: StridedArray) -> int | None:
    """Return the stride of a 1-D view covering `array` in memory order, if any.

    Walks axes from the smallest stride up; size-one axes are skipped, every
    other axis must continue the run started by the innermost one.
    """
    stride: int | None = None
    expected = 0
    for item in reversed(create_sorted_stride_perm(array.shape, array.strides)):
        dim = array.shape[item.perm]
        if dim == 1:
            continue
        if stride is None:
            stride = item.stride
            expected = stride * dim
            continue
        if item.stride != expected:
            return None
        expected *= dim
    return array.itemsize if stride is None else stride


def ravel(array: StridedArray, *, order: Order = "C") -> StridedArray:
    """Return a flattened array, as a view whenever the layout allows it."""
    order = validate_order(order, operation="ravel")
    if order == "A":
        order = "F" if array.is_fortran else "C"
    elif order == "K":
        if array.is_c_contiguous:
            order = "C"
        elif array.is_f_contiguous:
            order = "F"

    if order == "C" and array.is_c_contiguous:
        return newshape(array, (-1,), "C")
    if order == "F" and array.is_f_contiguous:
        return newshape(array, (-1,), "F")
    if order == "K":
        stride = _uniform_stride(array)
        if stride is not None:
            return make_view(array, (array.size,), (stride,))

    logger.debug("ravel of %s in order %s needs a copy", array.shape, order)
    return flatten(array, order=order)


def flatten(array: StridedArray, *, order: Order = "C") -> StridedArray:
    """Return a new owning 1-D copy of `array` read in `order`."""
    order = validate_order(order, operation="flatten")
    if order == "A":
        order = "F" if array.is_fortran else "C"
    flat = allocate_array((array.size,), array.descr, subtype=type(array))
    copy_as_flat(flat, array, order)
    return flat


__all__ = ["flatten", "ravel"]
