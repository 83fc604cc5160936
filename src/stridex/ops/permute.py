from collections.abc import Iterable

from ..array import StridedArray, make_view
from ..layout import build_transpose_permutation, permute, swap_permutation


def transpose(
    array: StridedArray, axes: Iterable[int] | int | None = None
) -> StridedArray:
    """Return a view with axes permuted; `axes=None` reverses them."""
    permutation = build_transpose_permutation(array.ndim, axes)
    return make_view(
        array,
        permute(array.shape, permutation),
        permute(array.strides, permutation),
    )


def swapaxes(array: StridedArray, axis1: int, axis2: int) -> StridedArray:
    """Return a view with `axis1` and `axis2` interchanged."""
    if axis1 == axis2 or array.ndim <= 1:
        return array.view()
    return transpose(array, swap_permutation(array.ndim, axis1, axis2))


__all__ = ["swapaxes", "transpose"]
