from collections.abc import Sequence

from ..array import StridedArray, make_view
from ..diagnostics import invalid_argument
from ..layout import axis_selection_mask, remove_axes, unit_axes_mask


def remove_axes_in_place(array: StridedArray, mask: Sequence[bool]) -> None:
    """Remove the axes flagged in `mask` from `array`'s header in place.

    A flagged axis longer than one effectively selects its index zero.

    WARNING: if a flagged axis has length zero the header ends up addressing
    memory outside the buffer. The caller must check for that first.
    """
    if len(mask) != array.ndim:
        raise invalid_argument(
            "axis mask must have one entry per dimension",
            operation="remove_axes",
            ndim=array.ndim,
            got=len(mask),
        )
    shape, strides = remove_axes(array.shape, array.strides, mask)
    array._set_layout(shape, strides)


def _squeeze_view(array: StridedArray, mask: tuple[bool, ...]) -> StridedArray:
    result = make_view(array, array.shape, array.strides, subtype=StridedArray)
    remove_axes_in_place(result, mask)
    if type(array) is not StridedArray:
        result = array.__wrap_view__(result)
    return result


def squeeze(
    array: StridedArray,
    axis: int | Sequence[int] | Sequence[bool] | None = None,
) -> StridedArray:
    """Remove size-one axes; all of them, or only the selected ones.

    Selecting an axis longer than one is an error. When nothing would be
    removed, `array` itself is returned.
    """
    if axis is None:
        mask = unit_axes_mask(array.shape)
    else:
        mask = axis_selection_mask(array.ndim, axis)
        for position, flagged in enumerate(mask):
            if flagged and array.shape[position] != 1:
                raise invalid_argument(
                    "cannot select an axis to squeeze out which has size "
                    "greater than one",
                    operation="squeeze",
                    axis=position,
                    size=array.shape[position],
                )

    if not any(mask):
        return array
    return _squeeze_view(array, mask)


__all__ = ["remove_axes_in_place", "squeeze"]
