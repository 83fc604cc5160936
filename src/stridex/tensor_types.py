from typing import Literal, Protocol, TypeAlias, runtime_checkable

import numpy as np
from numpy.typing import NDArray

Order: TypeAlias = Literal["C", "F", "A", "K"]
MemoryOrder: TypeAlias = Literal["C", "F"]
ByteBuffer: TypeAlias = NDArray[np.uint8]
ShapeLike: TypeAlias = int | tuple[int, ...] | list[int]


@runtime_checkable
class Descriptor(Protocol):
    """Element descriptor consumed by the layout engine."""

    @property
    def itemsize(self) -> int:
        """Bytes per element."""
        ...

    @property
    def has_references(self) -> bool:
        """Whether elements carry owned sub-references needing per-element zeroing."""
        ...

    @property
    def dtype(self) -> np.dtype:
        """numpy dtype used to expose elements."""
        ...

    def zero_element(self, memory: ByteBuffer, offset: int, /) -> None: ...


@runtime_checkable
class StridedLike(Protocol):
    """Shape/stride pair accepted by the stride-order helpers."""

    @property
    def shape(self) -> tuple[int, ...]:
        """Array shape."""
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """Byte strides."""
        ...


__all__ = [
    "ByteBuffer",
    "Descriptor",
    "MemoryOrder",
    "Order",
    "ShapeLike",
    "StridedLike",
]
