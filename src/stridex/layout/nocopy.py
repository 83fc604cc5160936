from math import prod


def check_ones(
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    new_shape: tuple[int, ...],
) -> tuple[int, ...] | None:
    """Return strides when `new_shape` only inserts or removes size-one axes.

    Matching axes keep their stride and inserted unit axes get a placeholder
    stride of 0. Returns None when the reshape changes anything else.
    """
    ndim = len(shape)
    new_ndim = len(new_shape)
    new_strides = [0] * new_ndim
    j = 0
    k = 0
    while j < ndim or k < new_ndim:
        if j < ndim and k < new_ndim and new_shape[k] == shape[j]:
            new_strides[k] = strides[j]
            j += 1
            k += 1
        elif k < new_ndim and new_shape[k] == 1:
            new_strides[k] = 0
            k += 1
        elif j < ndim and shape[j] == 1:
            j += 1
        else:
            return None
    return tuple(new_strides)


def attempt_nocopy_reshape(
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    new_shape: tuple[int, ...],
    *,
    is_f_order: bool,
    itemsize: int,
) -> tuple[int, ...] | None:
    """Return strides viewing the same bytes under `new_shape`, or None.

    `is_f_order` describes how the array is read during the reshape, not how
    it is stored. Zero-sized arrays are not handled and always return None.
    Strides of size-one output axes are arbitrary; they are derived from the
    neighbouring axis.
    """
    old_dims: list[int] = []
    old_strides: list[int] = []
    # unit axes carry no layout information
    for dim, stride in zip(shape, strides):
        if dim != 1:
            old_dims.append(dim)
            old_strides.append(stride)
    old_ndim = len(old_dims)
    new_ndim = len(new_shape)

    new_total = prod(new_shape, start=1)
    if new_total != prod(old_dims, start=1) or new_total == 0:
        return None

    new_strides = [0] * new_ndim
    oi, oj = 0, 1
    ni, nj = 0, 1
    while ni < new_ndim and oi < old_ndim:
        np_ = new_shape[ni]
        op = old_dims[oi]
        while np_ != op:
            if np_ < op:
                np_ *= new_shape[nj]
                nj += 1
            else:
                op *= old_dims[oj]
                oj += 1

        for ok in range(oi, oj - 1):
            if is_f_order:
                if old_strides[ok + 1] != old_dims[ok] * old_strides[ok]:
                    return None
            elif old_strides[ok] != old_dims[ok + 1] * old_strides[ok + 1]:
                return None

        if is_f_order:
            new_strides[ni] = old_strides[oi]
            for nk in range(ni + 1, nj):
                new_strides[nk] = new_strides[nk - 1] * new_shape[nk - 1]
        else:
            new_strides[nj - 1] = old_strides[oj - 1]
            for nk in range(nj - 1, ni, -1):
                new_strides[nk - 1] = new_strides[nk] * new_shape[nk]

        ni = nj
        nj += 1
        oi = oj
        oj += 1

    # trailing unit axes of the new shape
    if ni >= 1:
        last_stride = new_strides[ni - 1]
        if is_f_order:
            last_stride *= new_shape[ni - 1]
    else:
        last_stride = itemsize
    for nk in range(ni, new_ndim):
        new_strides[nk] = last_stride
    return tuple(new_strides)


__all__ = ["attempt_nocopy_reshape", "check_ones"]
