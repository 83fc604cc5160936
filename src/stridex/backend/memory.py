from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..diagnostics import ErrorCode, ExecutionError
from ..tensor_types import ByteBuffer


def _allocation_failure(nbytes: int, operation: str) -> ExecutionError:
    return ExecutionError(
        code=ErrorCode.ALLOCATION_FAILURE,
        message="allocation failure: cannot allocate memory for array",
        help="request a smaller array or free memory",
        related=("buffer allocation",),
        data={"operation": operation, "nbytes": nbytes},
    )


def allocate_buffer(nbytes: int, *, operation: str = "allocate") -> ByteBuffer:
    """Allocate one zeroed byte buffer of `nbytes` bytes."""
    try:
        return np.zeros(nbytes, dtype=np.uint8)
    except MemoryError as error:
        raise _allocation_failure(nbytes, operation) from error


def reallocate_buffer(
    memory: ByteBuffer,
    offset: int,
    old_nbytes: int,
    new_nbytes: int,
    *,
    operation: str = "resize",
) -> ByteBuffer:
    """Return a new buffer of `new_nbytes` holding the leading bytes of the old one.

    Bytes past the preserved prefix are left zero; the old buffer is not
    modified.
    """
    new_memory = allocate_buffer(new_nbytes, operation=operation)
    keep = min(old_nbytes, new_nbytes)
    new_memory[:keep] = memory[offset : offset + keep]
    return new_memory


def numpy_window(
    memory: ByteBuffer,
    offset: int,
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    dtype: np.dtype,
    *,
    writeable: bool,
) -> NDArray[np.generic]:
    """Return a numpy array aliasing `memory` under one strided layout."""
    window = np.ndarray(
        shape=shape,
        dtype=dtype,
        buffer=memory,
        offset=offset,
        strides=strides,
    )
    if not writeable:
        window.flags.writeable = False
    return window


class WindowExport:
    """Array-interface holder standing between exported windows and a buffer.

    numpy records this object as the base of the exported window and of every
    array later derived from it, so the holder stays alive exactly as long as
    some numpy array still aliases the buffer through this export.
    """

    def __init__(self, interface: dict[str, Any], base: ByteBuffer) -> None:
        self.__array_interface__ = interface
        self.base = base


def export_window(
    memory: ByteBuffer,
    offset: int,
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    dtype: np.dtype,
    *,
    writeable: bool,
) -> tuple[NDArray[np.generic], WindowExport]:
    """Return a window for callers outside the package and its export holder."""
    window = numpy_window(memory, offset, shape, strides, dtype, writeable=writeable)
    export = WindowExport(dict(window.__array_interface__), memory)
    exported = np.asarray(export)
    if exported.dtype != dtype:
        exported = exported.view(dtype)
    return exported, export


__all__ = [
    "WindowExport",
    "allocate_buffer",
    "export_window",
    "numpy_window",
    "reallocate_buffer",
]
