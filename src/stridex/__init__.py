import logging

from .array import StridedArray, empty, make_view, zeros
from .backend import copy_as_flat, new_copy
from .config import LayoutConfig, get_layout_config, layout_config, set_layout_config
from .descriptors import DTypeDescriptor
from .diagnostics import ErrorCode, ExecutionError, LayoutError, ValidationError
from .interop import asarray, to_numpy
from .layout import ArrayFlags, StrideSortItem, build_shape_string
from .ops import (
    flatten,
    multi_sorted_stride_permutation,
    newshape,
    ravel,
    remove_axes_in_place,
    reshape,
    resize,
    sorted_stride_permutation,
    squeeze,
    swapaxes,
    transpose,
)
from .tensor_types import Descriptor, Order

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ArrayFlags",
    "DTypeDescriptor",
    "Descriptor",
    "ErrorCode",
    "ExecutionError",
    "LayoutConfig",
    "LayoutError",
    "Order",
    "StrideSortItem",
    "StridedArray",
    "ValidationError",
    "asarray",
    "build_shape_string",
    "copy_as_flat",
    "empty",
    "flatten",
    "get_layout_config",
    "layout_config",
    "make_view",
    "multi_sorted_stride_permutation",
    "new_copy",
    "newshape",
    "ravel",
    "remove_axes_in_place",
    "reshape",
    "resize",
    "set_layout_config",
    "sorted_stride_permutation",
    "squeeze",
    "swapaxes",
    "to_numpy",
    "transpose",
    "zeros",
]
