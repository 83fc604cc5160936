from typing import TYPE_CHECKING

import numpy as np

from ..diagnostics import invalid_argument
from ..tensor_types import MemoryOrder, Order

if TYPE_CHECKING:
    from ..array import StridedArray

_VALID_ORDERS = ("C", "F", "A", "K")


def _writeable_window(array: "StridedArray") -> np.ndarray:
    from .memory import numpy_window

    return numpy_window(
        array.memory,
        array.offset,
        array.shape,
        array.strides,
        array.dtype,
        writeable=True,
    )


def copy_as_flat(dest: "StridedArray", src: "StridedArray", order: Order) -> None:
    """Copy `src` read in `order` into `dest` read in C order.

    Both arrays must hold the same number of elements; `"K"` reads `src` in
    its memory order.
    """
    if order not in _VALID_ORDERS:
        raise invalid_argument(
            f"order must be one of 'C', 'F', 'A', or 'K' (got {order!r})",
            operation="copy",
        )
    if dest.size != src.size:
        raise invalid_argument(
            "cannot copy between arrays with different numbers of elements",
            operation="copy",
            dest_size=dest.size,
            src_size=src.size,
        )
    window = _writeable_window(dest)
    window.flat[:] = src.to_numpy().ravel(order=order)


def new_copy(src: "StridedArray", order: MemoryOrder = "C") -> "StridedArray":
    """Return a new owning array with `src`'s elements laid out in `order`."""
    from ..array import allocate_array

    copied = allocate_array(src.shape, src.descr, order=order, subtype=type(src))
    np.copyto(_writeable_window(copied), src.to_numpy())
    return copied


__all__ = ["copy_as_flat", "new_copy"]
