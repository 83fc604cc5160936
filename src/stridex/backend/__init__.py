from .copy import copy_as_flat, new_copy
from .memory import (
    WindowExport,
    allocate_buffer,
    export_window,
    numpy_window,
    reallocate_buffer,
)

__all__ = [
    "WindowExport",
    "allocate_buffer",
    "copy_as_flat",
    "export_window",
    "new_copy",
    "numpy_window",
    "reallocate_buffer",
]
