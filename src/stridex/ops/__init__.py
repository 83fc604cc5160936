from .permute import swapaxes, transpose
from .ravel import flatten, ravel
from .reshape import newshape, reshape
from .resize import resize
from .squeeze import remove_axes_in_place, squeeze
from .stride_order import multi_sorted_stride_permutation, sorted_stride_permutation

__all__ = [
    "flatten",
    "multi_sorted_stride_permutation",
    "newshape",
    "ravel",
    "remove_axes_in_place",
    "reshape",
    "resize",
    "sorted_stride_permutation",
    "squeeze",
    "swapaxes",
    "transpose",
]
