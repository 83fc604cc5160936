from enum import IntFlag


class ArrayFlags(IntFlag):
    """Header flags of one strided array."""

    C_CONTIGUOUS = 0x0001
    F_CONTIGUOUS = 0x0002
    OWNDATA = 0x0004
    WRITEABLE = 0x0400

    NONE = 0
    CONTIGUOUS = C_CONTIGUOUS | F_CONTIGUOUS


def is_c_contiguous(
    shape: tuple[int, ...], strides: tuple[int, ...], itemsize: int
) -> bool:
    """Return whether strides describe one C-order run.

    Axes of size one never affect the result and any zero-length axis makes
    the layout contiguous by definition.
    """
    if 0 in shape:
        return True
    expected = itemsize
    for dim, stride in zip(reversed(shape), reversed(strides)):
        if dim == 1:
            continue
        if stride != expected:
            return False
        expected *= dim
    return True


def is_f_contiguous(
    shape: tuple[int, ...], strides: tuple[int, ...], itemsize: int
) -> bool:
    """Return whether strides describe one Fortran-order run."""
    if 0 in shape:
        return True
    expected = itemsize
    for dim, stride in zip(shape, strides):
        if dim == 1:
            continue
        if stride != expected:
            return False
        expected *= dim
    return True


def update_contiguity(
    flags: ArrayFlags,
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    itemsize: int,
) -> ArrayFlags:
    """Return `flags` with both contiguity bits recomputed from the layout."""
    updated = flags & ~ArrayFlags.CONTIGUOUS
    if is_c_contiguous(shape, strides, itemsize):
        updated |= ArrayFlags.C_CONTIGUOUS
    if is_f_contiguous(shape, strides, itemsize):
        updated |= ArrayFlags.F_CONTIGUOUS
    return ArrayFlags(updated)


__all__ = [
    "ArrayFlags",
    "is_c_contiguous",
    "is_f_contiguous",
    "update_contiguity",
]
