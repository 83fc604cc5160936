from collections.abc import Iterable, Sequence
from operator import index

from ..diagnostics import invalid_argument


def normalize_axis(axis: int, ndim: int, *, operation: str, message: str) -> int:
    """Normalize one possibly negative axis index into `[0, ndim)`."""
    if isinstance(axis, bool):
        raise invalid_argument(message, operation=operation)
    try:
        value = index(axis)
    except TypeError as error:
        raise invalid_argument(message, operation=operation) from error
    if value < 0:
        value += ndim
    if value < 0 or value >= ndim:
        raise invalid_argument(message, operation=operation, axis=int(axis), ndim=ndim)
    return value


def _as_axes_tuple(axes: object) -> tuple[object, ...]:
    try:
        index(axes)  # type: ignore[arg-type]
    except TypeError:
        if isinstance(axes, Iterable) and not isinstance(axes, str | bytes):
            return tuple(axes)
    else:
        return (axes,)
    raise invalid_argument(
        "axes must be an integer or a sequence of integers",
        operation="transpose",
    )


def build_transpose_permutation(
    ndim: int, axes: Iterable[int] | int | None
) -> tuple[int, ...]:
    """Validate `axes` as a bijection on `[0, ndim)`; None means full reversal.

    A single integer stands for a one-element sequence.
    """
    if axes is None:
        return tuple(range(ndim - 1, -1, -1))
    axes = _as_axes_tuple(axes)
    if len(axes) != ndim:
        raise invalid_argument(
            "axes don't match array",
            operation="transpose",
            help="pass exactly one axis per array dimension",
            ndim=ndim,
            got=len(axes),
        )
    seen = [False] * ndim
    permutation: list[int] = []
    for axis in axes:
        normalized = normalize_axis(
            axis, ndim, operation="transpose", message="invalid axis for this array"
        )
        if seen[normalized]:
            raise invalid_argument(
                "repeated axis in transpose",
                operation="transpose",
                help="use every axis exactly once",
                axis=normalized,
            )
        seen[normalized] = True
        permutation.append(normalized)
    return tuple(permutation)


def inverse_permutation(permutation: Sequence[int]) -> tuple[int, ...]:
    """Return the permutation undoing `permutation`."""
    inverse = [0] * len(permutation)
    for position, axis in enumerate(permutation):
        inverse[axis] = position
    return tuple(inverse)


def swap_permutation(ndim: int, axis1: int, axis2: int) -> tuple[int, ...]:
    """Return the identity permutation with `axis1` and `axis2` exchanged."""
    first = normalize_axis(
        axis1, ndim, operation="swapaxes", message="bad axis1 argument to swapaxes"
    )
    second = normalize_axis(
        axis2, ndim, operation="swapaxes", message="bad axis2 argument to swapaxes"
    )
    permutation = list(range(ndim))
    permutation[first], permutation[second] = second, first
    return tuple(permutation)


def permute(values: tuple[int, ...], permutation: Sequence[int]) -> tuple[int, ...]:
    return tuple(values[axis] for axis in permutation)


def unit_axes_mask(shape: tuple[int, ...]) -> tuple[bool, ...]:
    return tuple(dim == 1 for dim in shape)


def axis_selection_mask(
    ndim: int, axis: int | Sequence[int] | Sequence[bool]
) -> tuple[bool, ...]:
    """Convert an axis selection (int, int sequence, or bool mask) into a mask."""
    if isinstance(axis, Sequence) and axis and all(
        isinstance(flag, bool) for flag in axis
    ):
        if len(axis) != ndim:
            raise invalid_argument(
                "axis mask must have one entry per dimension",
                operation="squeeze",
                ndim=ndim,
            )
        return tuple(axis)  # type: ignore[arg-type]

    selected = axis if isinstance(axis, Sequence) else (axis,)
    mask = [False] * ndim
    for entry in selected:
        normalized = normalize_axis(
            entry,  # type: ignore[arg-type]
            ndim,
            operation="squeeze",
            message="axis out of bounds for array",
        )
        if mask[normalized]:
            raise invalid_argument(
                "duplicate value in 'axis'",
                operation="squeeze",
                axis=normalized,
            )
        mask[normalized] = True
    return tuple(mask)


def remove_axes(
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    mask: Sequence[bool],
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Drop every axis flagged in `mask`, shifting the rest left.

    A flagged axis larger than one effectively selects its index zero. A
    flagged axis of length zero yields a layout addressing memory that does
    not exist; callers must rule that out.
    """
    kept = [position for position, flag in enumerate(mask) if not flag]
    return (
        tuple(shape[position] for position in kept),
        tuple(strides[position] for position in kept),
    )


__all__ = [
    "axis_selection_mask",
    "build_transpose_permutation",
    "inverse_permutation",
    "normalize_axis",
    "permute",
    "remove_axes",
    "swap_permutation",
    "unit_axes_mask",
]
