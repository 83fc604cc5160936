from collections.abc import Sequence

from ..layout import (
    StrideSortItem,
    create_multi_sorted_stride_perm,
    create_sorted_stride_perm,
)
from ..tensor_types import StridedLike


def sorted_stride_permutation(array: StridedLike) -> tuple[StrideSortItem, ...]:
    """Return `array`'s axes sorted by descending absolute stride."""
    return create_sorted_stride_perm(array.shape, array.strides)


def multi_sorted_stride_permutation(
    arrays: Sequence[StridedLike],
) -> tuple[int, ...]:
    """Return one C-biased axis order for iterating several same-rank arrays."""
    return create_multi_sorted_stride_perm(
        [array.shape for array in arrays],
        [array.strides for array in arrays],
    )


__all__ = ["multi_sorted_stride_permutation", "sorted_stride_permutation"]
