from dataclasses import dataclass

import numpy as np
from numpy.typing import DTypeLike

from .diagnostics import ErrorCode, ValidationError
from .tensor_types import ByteBuffer, Descriptor


@dataclass(frozen=True, slots=True)
class DTypeDescriptor:
    """Descriptor backed by one numpy dtype."""

    dtype: np.dtype

    @property
    def itemsize(self) -> int:
        return int(self.dtype.itemsize)

    @property
    def has_references(self) -> bool:
        return bool(self.dtype.hasobject)

    def zero_element(self, memory: ByteBuffer, offset: int, /) -> None:
        """Zero the bytes of one element at `offset`."""
        memory[offset : offset + self.itemsize] = 0


def as_descriptor(dtype: DTypeLike | Descriptor | None, /) -> Descriptor:
    """Resolve a dtype-like value into a storage descriptor."""
    if isinstance(dtype, Descriptor):
        descriptor = dtype
    else:
        descriptor = DTypeDescriptor(np.dtype(np.float64 if dtype is None else dtype))

    if descriptor.dtype.hasobject:
        raise ValidationError(
            code=ErrorCode.LAYOUT_UNSUPPORTED,
            message=(
                "layout unsupported: object elements cannot be stored in raw byte buffers"
            ),
            help="use a fixed-size numeric, boolean, or structured dtype",
            related=("descriptor",),
            data={"dtype": str(descriptor.dtype)},
        )
    return descriptor


__all__ = ["DTypeDescriptor", "as_descriptor"]
