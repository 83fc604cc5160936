from typing import TYPE_CHECKING

from ..diagnostics import invalid_argument
from ..tensor_types import MemoryOrder, Order

if TYPE_CHECKING:
    from ..array import StridedArray

_ORDERS = frozenset(("C", "F", "A", "K"))


def validate_order(order: object, *, operation: str) -> Order:
    """Validate one order argument."""
    if not isinstance(order, str) or order.upper() not in _ORDERS:
        raise invalid_argument(
            f"order must be one of 'C', 'F', 'A', or 'K' (got {order!r})",
            operation=operation,
        )
    return order.upper()  # type: ignore[return-value]


def resolve_memory_order(array: "StridedArray", order: Order) -> MemoryOrder:
    """Map `"A"`/`"K"` to `"F"` for Fortran arrays and to `"C"` otherwise."""
    if order in ("A", "K"):
        return "F" if array.is_fortran else "C"
    return order  # type: ignore[return-value]


__all__ = ["resolve_memory_order", "validate_order"]
