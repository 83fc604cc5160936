from .axes import (
    axis_selection_mask,
    build_transpose_permutation,
    inverse_permutation,
    normalize_axis,
    permute,
    remove_axes,
    swap_permutation,
    unit_axes_mask,
)
from .dims import (
    as_dims,
    build_shape_string,
    checked_element_count,
    fix_unknown_dimension,
)
from .flags import ArrayFlags, is_c_contiguous, is_f_contiguous, update_contiguity
from .nocopy import attempt_nocopy_reshape, check_ones
from .stride_sort import (
    StrideSortItem,
    create_multi_sorted_stride_perm,
    create_sorted_stride_perm,
)
from .strides import byte_extent, element_count, fill_strides, fix_unit_axis_strides

__all__ = [
    "ArrayFlags",
    "StrideSortItem",
    "as_dims",
    "attempt_nocopy_reshape",
    "axis_selection_mask",
    "build_shape_string",
    "build_transpose_permutation",
    "byte_extent",
    "check_ones",
    "checked_element_count",
    "create_multi_sorted_stride_perm",
    "create_sorted_stride_perm",
    "element_count",
    "fill_strides",
    "fix_unit_axis_strides",
    "fix_unknown_dimension",
    "inverse_permutation",
    "is_c_contiguous",
    "is_f_contiguous",
    "normalize_axis",
    "permute",
    "remove_axes",
    "swap_permutation",
    "unit_axes_mask",
    "update_contiguity",
]
