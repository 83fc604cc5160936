"""In-place resize of an array owning its buffer.

Every precondition is checked before the header or the buffer is touched,
so a failing resize leaves the array exactly as it was.
"""

import logging
import weakref

from ..array import StridedArray
from ..backend.memory import reallocate_buffer
from ..diagnostics import ErrorCode, ValidationError
from ..layout import as_dims, checked_element_count, fill_strides
from ..tensor_types import Order, ShapeLike
from .order import resolve_memory_order, validate_order

logger = logging.getLogger(__name__)


def _aliasing_violation(message: str, **data: str | int | bool) -> ValidationError:
    return ValidationError(
        code=ErrorCode.ALIASING_VIOLATION,
        message=message,
        help="use reshape or an explicit copy instead of resizing in place",
        related=("resize ownership",),
        data={"operation": "resize", **data},
    )


def _check_exclusive_ownership(array: StridedArray, refcheck: bool) -> None:
    if not array.owns_data:
        raise _aliasing_violation(
            "cannot resize this array: it does not own its data"
        )
    borrowers = array.borrower_count if refcheck else 0
    exports = array.export_count if refcheck else 0
    weak_references = weakref.getweakrefcount(array)
    if borrowers or exports or array.base is not None or weak_references:
        raise _aliasing_violation(
            "cannot resize an array that references or is referenced by another "
            "array in this way; use the reshape function",
            borrowers=borrowers,
            exports=exports,
            weak_references=weak_references,
        )


def _zero_fill(array: StridedArray, old_size: int, new_size: int) -> None:
    descr = array.descr
    itemsize = descr.itemsize
    memory = array.memory
    start = array.offset + old_size * itemsize
    if descr.has_references:
        for position in range(start, start + (new_size - old_size) * itemsize, itemsize):
            descr.zero_element(memory, position)
    else:
        memory[start : array.offset + new_size * itemsize] = 0


def resize(
    array: StridedArray,
    new_shape: ShapeLike,
    *,
    refcheck: bool = True,
    order: Order = "C",
) -> None:
    """Change `array`'s shape and size in place, reallocating its buffer.

    Growing zero-fills the new elements of writeable arrays. When the element
    count changes the array must own its data and, with `refcheck`, must have
    no live views, exported numpy windows, weak references, or base.
    """
    memory_order = resolve_memory_order(array, validate_order(order, operation="resize"))
    if not array.is_one_segment:
        raise ValidationError(
            code=ErrorCode.LAYOUT_UNSUPPORTED,
            message="resize only works on single-segment arrays",
            help="copy the array into contiguous storage first",
            related=("resize layout",),
            data={"operation": "resize"},
        )
    dims = as_dims(new_shape, operation="resize")
    itemsize = array.itemsize
    new_size = checked_element_count(dims, itemsize, operation="resize")
    old_size = array.size

    if old_size != new_size:
        _check_exclusive_ownership(array, refcheck)
        logger.debug(
            "reallocating buffer from %d to %d elements", old_size, new_size
        )
        memory = reallocate_buffer(
            array.memory,
            array.offset,
            max(old_size, 1) * itemsize,
            max(new_size, 1) * itemsize,
        )
        array._set_memory(memory, 0)

    if new_size > old_size and array.writeable:
        _zero_fill(array, old_size, new_size)

    array._set_layout(dims, fill_strides(dims, itemsize, memory_order))


__all__ = ["resize"]
