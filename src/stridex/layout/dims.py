from collections.abc import Sequence
from operator import index

from ..config import get_layout_config
from ..diagnostics import ErrorCode, ValidationError, invalid_argument

_SIZE_UNCHANGED_MESSAGE = "total size of new array must be unchanged"


def as_dims(shape: object, /, *, operation: str = "reshape") -> tuple[int, ...]:
    """Convert one caller-facing shape argument into a validated dims tuple.

    Accepts a single integer or a sequence of integers; bools are rejected.
    The rank must not exceed the configured `max_ndim`.
    """
    if isinstance(shape, Sequence) and not isinstance(shape, str | bytes):
        items = tuple(shape)
    else:
        items = (shape,)

    dims: list[int] = []
    for item in items:
        if isinstance(item, bool):
            raise invalid_argument(
                "invalid shape: dimensions must be integers, not bool",
                operation=operation,
            )
        try:
            dims.append(index(item))  # type: ignore[arg-type]
        except TypeError as error:
            raise invalid_argument(
                f"invalid shape: {type(item).__name__!r} object cannot be "
                "interpreted as an integer",
                operation=operation,
            ) from error

    max_ndim = get_layout_config().max_ndim
    if len(dims) > max_ndim:
        raise invalid_argument(
            f"maximum supported dimension for an array is {max_ndim}, "
            f"found {len(dims)}",
            operation=operation,
            help="raise LayoutConfig.max_ndim or reduce the requested rank",
            ndim=len(dims),
        )
    return tuple(dims)


def fix_unknown_dimension(dims: tuple[int, ...], total: int) -> tuple[int, ...]:
    """Resolve at most one negative (unknown) entry of `dims` against `total`."""
    unknown_index: int | None = None
    known = 1
    for position, dim in enumerate(dims):
        if dim < 0:
            if unknown_index is not None:
                raise invalid_argument(
                    "can only specify one unknown dimension",
                    operation="reshape",
                    help="leave at most one dimension as -1",
                )
            unknown_index = position
        else:
            known *= dim

    if unknown_index is None:
        if known != total:
            raise invalid_argument(
                _SIZE_UNCHANGED_MESSAGE,
                operation="reshape",
                help=f"cannot reshape array of size {total} into shape {dims}",
                size=total,
            )
        return dims

    if known == 0 or total % known != 0:
        raise invalid_argument(
            _SIZE_UNCHANGED_MESSAGE,
            operation="reshape",
            help=f"cannot reshape array of size {total} into shape {dims}",
            size=total,
        )
    resolved = list(dims)
    resolved[unknown_index] = total // known
    return tuple(resolved)


def checked_element_count(
    dims: tuple[int, ...], itemsize: int, *, operation: str
) -> int:
    """Return the element count of non-negative `dims`, guarding index overflow."""
    if itemsize == 0:
        raise invalid_argument("bad data-type size", operation=operation)
    largest = get_layout_config().max_intp // itemsize
    count = 1
    for dim in dims:
        if dim < 0:
            raise invalid_argument(
                "negative dimensions not allowed",
                operation=operation,
                dim=dim,
            )
    if 0 in dims:
        return 0
    for dim in dims:
        count *= dim
        if count > largest:
            raise ValidationError(
                code=ErrorCode.SIZE_OVERFLOW,
                message=(
                    "size overflow: requested shape exceeds the addressable index range"
                ),
                help="request a smaller shape",
                related=(f"{operation} arguments",),
                data={"operation": operation, "itemsize": itemsize},
            )
    return count


def build_shape_string(vals: Sequence[int], /) -> str:
    """Render dims as `(a,b,...)`.

    Negative entries stand for new axes: leading ones are dropped and the
    remaining ones print as `newaxis`.
    """
    position = 0
    while position < len(vals) and vals[position] < 0:
        position += 1
    parts = [
        "newaxis" if value < 0 else str(value) for value in vals[position:]
    ]
    return "(" + ",".join(parts) + ")"


__all__ = [
    "as_dims",
    "build_shape_string",
    "checked_element_count",
    "fix_unknown_dimension",
]
