"""Strided array headers and the view constructor.

A `StridedArray` is a header (shape, strides, flags, descriptor) over a shared
byte buffer. The array that allocated the buffer owns it (`OWNDATA`, no
base); every other header is a view whose `base` keeps the source alive and
which is registered with the source as a borrower.
"""

import weakref
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray

from .backend.memory import WindowExport, allocate_buffer, export_window, numpy_window
from .descriptors import as_descriptor
from .diagnostics import ErrorCode, ExecutionError, ValidationError
from .layout import (
    ArrayFlags,
    as_dims,
    build_shape_string,
    byte_extent,
    checked_element_count,
    element_count,
    fill_strides,
    update_contiguity,
)
from .tensor_types import ByteBuffer, Descriptor, MemoryOrder, Order, ShapeLike


class StridedArray:
    """Dense strided multi-dimensional array header."""

    __slots__ = (
        "_descr",
        "_shape",
        "_strides",
        "_memory",
        "_offset",
        "_flags",
        "_base",
        "_borrowers",
        "_exports",
        "__weakref__",
    )

    def __init__(
        self,
        descr: Descriptor,
        shape: tuple[int, ...],
        strides: tuple[int, ...],
        memory: ByteBuffer,
        offset: int = 0,
        flags: ArrayFlags = ArrayFlags.OWNDATA | ArrayFlags.WRITEABLE,
        base: "StridedArray | None" = None,
    ) -> None:
        if len(shape) != len(strides):
            raise ValueError("shape and strides must have the same length")
        if base is None and not flags & ArrayFlags.OWNDATA:
            raise ValueError("an array without OWNDATA requires a base")
        if base is not None and flags & ArrayFlags.OWNDATA:
            raise ValueError("an array owning its data cannot have a base")
        self._descr = descr
        self._shape = tuple(shape)
        self._strides = tuple(strides)
        self._memory = memory
        self._offset = offset
        self._flags = update_contiguity(flags, self._shape, self._strides, descr.itemsize)
        self._base = base
        self._borrowers: weakref.WeakSet[StridedArray] = weakref.WeakSet()
        self._exports: weakref.WeakSet[WindowExport] = weakref.WeakSet()

    @property
    def descr(self) -> Descriptor:
        return self._descr

    @property
    def dtype(self) -> np.dtype:
        return self._descr.dtype

    @property
    def itemsize(self) -> int:
        return self._descr.itemsize

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def strides(self) -> tuple[int, ...]:
        return self._strides

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def size(self) -> int:
        return element_count(self._shape)

    @property
    def nbytes(self) -> int:
        return self.size * self.itemsize

    @property
    def offset(self) -> int:
        """Byte offset of the first element inside the shared buffer."""
        return self._offset

    @property
    def memory(self) -> ByteBuffer:
        """Shared byte buffer this header addresses."""
        return self._memory

    @property
    def flags(self) -> ArrayFlags:
        return self._flags

    @property
    def base(self) -> "StridedArray | None":
        return self._base

    @property
    def owns_data(self) -> bool:
        return bool(self._flags & ArrayFlags.OWNDATA)

    @property
    def writeable(self) -> bool:
        return bool(self._flags & ArrayFlags.WRITEABLE)

    @property
    def is_c_contiguous(self) -> bool:
        return bool(self._flags & ArrayFlags.C_CONTIGUOUS)

    @property
    def is_f_contiguous(self) -> bool:
        return bool(self._flags & ArrayFlags.F_CONTIGUOUS)

    @property
    def is_one_segment(self) -> bool:
        return bool(self._flags & ArrayFlags.CONTIGUOUS)

    @property
    def is_fortran(self) -> bool:
        """F-contiguous and not C-contiguous."""
        return self.is_f_contiguous and not self.is_c_contiguous

    @property
    def borrower_count(self) -> int:
        """Number of live views created directly from this array."""
        return len(self._borrowers)

    @property
    def export_count(self) -> int:
        """Number of live numpy windows aliasing the buffer this array owns."""
        return len(self._exports)

    @property
    def T(self) -> "StridedArray":
        return self.transpose()

    def set_writeable(self, writeable: bool) -> None:
        """Toggle `WRITEABLE`; a view cannot become writeable over a read-only base."""
        if writeable and self._base is not None and not self._base.writeable:
            raise ValidationError(
                code=ErrorCode.INVALID_ARGUMENT,
                message="cannot set WRITEABLE flag to True of this array",
                help="the base array is read-only",
                related=("array flags",),
                data={"operation": "set_writeable"},
            )
        if writeable:
            self._flags |= ArrayFlags.WRITEABLE
        else:
            self._flags &= ~ArrayFlags.WRITEABLE

    def view(self) -> "StridedArray":
        """Return a plain aliasing view with the same shape and strides."""
        return make_view(self, self._shape, self._strides)

    def copy(self, order: MemoryOrder = "C") -> "StridedArray":
        from .backend.copy import new_copy

        return new_copy(self, order)

    def reshape(self, *shape: Any, order: Order = "C") -> "StridedArray":
        from .ops.reshape import reshape

        return reshape(self, _varargs_shape(shape), order=order)

    def ravel(self, order: Order = "C") -> "StridedArray":
        from .ops.ravel import ravel

        return ravel(self, order=order)

    def flatten(self, order: Order = "C") -> "StridedArray":
        from .ops.ravel import flatten

        return flatten(self, order=order)

    def transpose(self, *axes: Any) -> "StridedArray":
        from .ops.permute import transpose

        if not axes or (len(axes) == 1 and axes[0] is None):
            return transpose(self)
        return transpose(self, _varargs_shape(axes))

    def swapaxes(self, axis1: int, axis2: int) -> "StridedArray":
        from .ops.permute import swapaxes

        return swapaxes(self, axis1, axis2)

    def squeeze(
        self, axis: int | Sequence[int] | Sequence[bool] | None = None
    ) -> "StridedArray":
        from .ops.squeeze import squeeze

        return squeeze(self, axis=axis)

    def resize(
        self, *new_shape: Any, refcheck: bool = True, order: Order = "C"
    ) -> None:
        from .ops.resize import resize

        resize(self, _varargs_shape(new_shape), refcheck=refcheck, order=order)

    def __wrap_view__(self, view: "StridedArray") -> "StridedArray":
        """Post-process a base-class view derived from this array.

        Subclasses override this to rewrap results such as squeezed views.
        """
        return view

    def to_numpy(self) -> NDArray[np.generic]:
        """Return a numpy array aliasing this array's bytes.

        The window, and every numpy array derived from it, counts as a live
        alias of the buffer for `resize` until it is released.
        """
        window, export = export_window(
            self._memory,
            self._offset,
            self._shape,
            self._strides,
            self.dtype,
            writeable=self.writeable,
        )
        self._buffer_owner()._exports.add(export)
        return window

    def tolist(self) -> Any:
        return numpy_window(
            self._memory,
            self._offset,
            self._shape,
            self._strides,
            self.dtype,
            writeable=False,
        ).tolist()

    def __array__(self, dtype: DTypeLike | None = None, copy: bool | None = None) -> NDArray[Any]:
        window = self.to_numpy()
        if dtype is not None and np.dtype(dtype) != window.dtype:
            return window.astype(dtype)
        if copy:
            return window.copy()
        return window

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(shape={build_shape_string(self._shape)}, "
            f"strides={self._strides}, dtype={self.dtype}, "
            f"owndata={self.owns_data})"
        )

    def _set_layout(self, shape: tuple[int, ...], strides: tuple[int, ...]) -> None:
        """Overwrite shape and strides in place and recompute contiguity."""
        self._shape = tuple(shape)
        self._strides = tuple(strides)
        self._flags = update_contiguity(
            self._flags, self._shape, self._strides, self.itemsize
        )

    def _set_memory(self, memory: ByteBuffer, offset: int = 0) -> None:
        self._memory = memory
        self._offset = offset

    def _buffer_owner(self) -> "StridedArray":
        """Return the header at the end of the base chain if it still owns this buffer."""
        array = self
        while array._base is not None:
            array = array._base
        return array if array._memory is self._memory else self


def _varargs_shape(values: tuple[Any, ...]) -> Any:
    if len(values) == 1:
        return values[0]
    return values


def make_view(
    source: StridedArray,
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    *,
    offset: int | None = None,
    subtype: type[StridedArray] | None = None,
) -> StridedArray:
    """Build a header aliasing `source`'s buffer under a new shape/strides.

    The view's base is `source`, which also records the view as a live
    borrower. `OWNDATA` is cleared, `WRITEABLE` is inherited and the
    contiguity flags are recomputed from `shape` and `strides`.
    """
    cls = type(source) if subtype is None else subtype
    start = source.offset if offset is None else offset
    low, high = byte_extent(tuple(shape), tuple(strides), source.itemsize)
    if start + low < 0 or start + high > source.memory.nbytes:
        raise ValidationError(
            code=ErrorCode.INVALID_ARGUMENT,
            message="view extends beyond the memory of its source array",
            help="check the requested shape, strides and offset",
            related=("view construction",),
            data={"operation": "view", "offset": start},
        )
    flags = source.flags & ArrayFlags.WRITEABLE
    try:
        view = cls(
            source.descr,
            shape,
            strides,
            source.memory,
            start,
            ArrayFlags(flags),
            source,
        )
    except MemoryError as error:
        raise ExecutionError(
            code=ErrorCode.ALLOCATION_FAILURE,
            message="allocation failure: cannot allocate array header",
            related=("view construction",),
            data={"operation": "view"},
        ) from error
    source._borrowers.add(view)
    return view


def allocate_array(
    shape: ShapeLike,
    dtype: DTypeLike | Descriptor | None = None,
    *,
    order: MemoryOrder = "C",
    subtype: type[StridedArray] = StridedArray,
) -> StridedArray:
    """Allocate one zero-filled array owning a fresh buffer."""
    descr = as_descriptor(dtype)
    dims = as_dims(shape, operation="allocate")
    count = checked_element_count(dims, descr.itemsize, operation="allocate")
    nbytes = max(count, 1) * descr.itemsize
    memory = allocate_buffer(nbytes, operation="allocate")
    return subtype(
        descr,
        dims,
        fill_strides(dims, descr.itemsize, order),
        memory,
    )


def zeros(
    shape: ShapeLike,
    dtype: DTypeLike | Descriptor | None = None,
    *,
    order: MemoryOrder = "C",
) -> StridedArray:
    """Return a new owning array of zeros."""
    return allocate_array(shape, dtype, order=order)


empty = zeros


__all__ = [
    "StridedArray",
    "allocate_array",
    "empty",
    "make_view",
    "zeros",
]
