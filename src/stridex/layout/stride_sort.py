from collections.abc import Sequence
from dataclasses import dataclass

from ..diagnostics import invalid_argument


@dataclass(frozen=True, slots=True)
class StrideSortItem:
    """One axis with its effective stride (0 for axes of size one)."""

    perm: int
    stride: int


def _stride_sort_key(item: StrideSortItem) -> tuple[int, int]:
    return (-abs(item.stride), item.perm)


def create_sorted_stride_perm(
    shape: Sequence[int], strides: Sequence[int]
) -> tuple[StrideSortItem, ...]:
    """Sort axes by descending absolute stride.

    C order is the default in the face of ambiguity: equal strides keep axis
    order and size-one axes sort last. For example the strides
    `(4, -2, 12)` become `[(2, 12), (0, 4), (1, -2)]`.
    """
    if len(shape) != len(strides):
        raise invalid_argument(
            "shape and strides must have the same length",
            operation="sorted_stride_permutation",
        )
    items = [
        StrideSortItem(perm=axis, stride=0 if dim == 1 else stride)
        for axis, (dim, stride) in enumerate(zip(shape, strides))
    ]
    return tuple(sorted(items, key=_stride_sort_key))


def create_multi_sorted_stride_perm(
    shapes: Sequence[Sequence[int]],
    strides: Sequence[Sequence[int]],
) -> tuple[int, ...]:
    """Return one axis order, biggest stride first, agreed across arrays.

    This is a stable insertion sort where each pairwise comparison is voted
    on by every array having both axes of size other than one. A "keep" vote
    overrides "swap" votes from other arrays, so C order wins conflicts, and
    pairs nobody can vote on keep their relative position.
    """
    if len(shapes) != len(strides):
        raise invalid_argument(
            "shapes and strides must describe the same number of arrays",
            operation="multi_sorted_stride_permutation",
        )
    if not shapes:
        return ()
    ndim = len(shapes[0])
    for shape, array_strides in zip(shapes, strides):
        if len(shape) != ndim or len(array_strides) != ndim:
            raise invalid_argument(
                "all arrays must have the same number of dimensions",
                operation="multi_sorted_stride_permutation",
                ndim=ndim,
            )

    order = list(range(ndim))
    for i0 in range(1, ndim):
        ipos = i0
        ax_j0 = order[i0]
        for i1 in range(i0 - 1, -1, -1):
            ambiguous = True
            should_swap = False
            ax_j1 = order[i1]
            for shape, array_strides in zip(shapes, strides):
                if shape[ax_j0] == 1 or shape[ax_j1] == 1:
                    continue
                if abs(array_strides[ax_j0]) <= abs(array_strides[ax_j1]):
                    should_swap = False
                elif ambiguous:
                    should_swap = True
                ambiguous = False

            if not ambiguous:
                if should_swap:
                    ipos = i1
                else:
                    break

        if ipos != i0:
            del order[i0]
            order.insert(ipos, ax_j0)
    return tuple(order)


__all__ = [
    "StrideSortItem",
    "create_multi_sorted_stride_perm",
    "create_sorted_stride_perm",
]
