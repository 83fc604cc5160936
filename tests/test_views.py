import gc

import numpy as np
import pytest

from stridex import (
    ArrayFlags,
    DTypeDescriptor,
    ErrorCode,
    StridedArray,
    ValidationError,
    asarray,
    make_view,
    zeros,
)


def test_view_clears_owndata_and_points_at_source() -> None:
    array = zeros((3, 4))

    view = array.view()

    assert array.owns_data
    assert not view.owns_data
    assert view.base is array
    assert view.memory is array.memory
    assert view.offset == array.offset
    assert array.borrower_count == 1


def test_view_of_view_chains_to_its_source() -> None:
    array = zeros((3, 4))
    first = array.view()
    second = first.view()

    assert second.base is first
    assert first.base is array
    assert array.base is None
    assert array.borrower_count == 1
    assert first.borrower_count == 1


def test_borrower_count_drops_when_view_is_released() -> None:
    array = zeros((2, 2))
    view = array.view()
    assert array.borrower_count == 1

    del view
    gc.collect()

    assert array.borrower_count == 0


def test_view_keeps_source_alive() -> None:
    view = zeros((2, 2)).view()
    gc.collect()

    assert view.base is not None
    assert view.base.owns_data
    assert view.tolist() == [[0.0, 0.0], [0.0, 0.0]]


def test_views_inherit_writeable_flag() -> None:
    array = zeros((2, 2))
    array.set_writeable(False)

    view = array.view()

    assert not view.writeable
    assert not view.to_numpy().flags.writeable
    with pytest.raises(ValidationError) as error:
        view.set_writeable(True)
    assert error.value.code == ErrorCode.INVALID_ARGUMENT.value


def test_view_can_drop_and_regain_writeable_over_writeable_base() -> None:
    array = zeros((2, 2))
    view = array.view()

    view.set_writeable(False)
    assert not view.writeable
    view.set_writeable(True)
    assert view.writeable


def test_make_view_recomputes_contiguity() -> None:
    array = asarray(np.arange(12, dtype=np.int64))

    c_view = make_view(array, (3, 4), (32, 8))
    f_view = make_view(array, (3, 4), (8, 24))
    strided = make_view(array, (3,), (32,))

    assert c_view.flags & ArrayFlags.C_CONTIGUOUS
    assert not c_view.flags & ArrayFlags.F_CONTIGUOUS
    assert f_view.is_fortran
    assert not strided.is_one_segment
    assert not c_view.flags & ArrayFlags.OWNDATA
    assert c_view.flags & ArrayFlags.WRITEABLE


def test_make_view_at_offset_addresses_later_elements() -> None:
    array = asarray(np.arange(6, dtype=np.int64))

    tail = make_view(array, (2,), (8,), offset=32)

    assert tail.tolist() == [4, 5]


def test_writes_through_views_are_visible_in_source() -> None:
    array = zeros((2, 3), "int64")
    transposed = array.T

    transposed.to_numpy()[2, 1] = 7

    assert array.tolist() == [[0, 0, 0], [0, 0, 7]]


def test_constructor_enforces_ownership_invariants() -> None:
    descr = DTypeDescriptor(np.dtype(np.float64))
    memory = np.zeros(8, dtype=np.uint8)
    owner = StridedArray(descr, (), (), memory)

    with pytest.raises(ValueError):
        StridedArray(descr, (1,), (8,), memory, flags=ArrayFlags.WRITEABLE)
    with pytest.raises(ValueError):
        StridedArray(descr, (1,), (8,), memory, base=owner)
    with pytest.raises(ValueError):
        StridedArray(descr, (1, 1), (8,), memory)


def test_array_properties() -> None:
    array = zeros((3, 4), "float32")

    assert array.ndim == 2
    assert array.size == 12
    assert array.itemsize == 4
    assert array.nbytes == 48
    assert array.dtype == np.dtype(np.float32)
    assert array.strides == (16, 4)
    assert array.is_c_contiguous
    assert array.is_one_segment
    assert not array.is_fortran


def test_fortran_allocation() -> None:
    array = zeros((3, 4), order="F")

    assert array.strides == (8, 24)
    assert array.is_fortran


def test_repr_uses_shape_string() -> None:
    text = repr(zeros((3, 4)))

    assert text.startswith("StridedArray(shape=(3,4),")
    assert "owndata=True" in text


def test_to_numpy_of_read_only_array_is_read_only() -> None:
    array = zeros((2,))
    array.set_writeable(False)

    window = array.to_numpy()

    assert not window.flags.writeable
    with pytest.raises(ValueError):
        window[0] = 1.0


def test_numpy_protocol_conversion() -> None:
    array = asarray(np.arange(4, dtype=np.int64))

    assert np.asarray(array).tolist() == [0, 1, 2, 3]
    assert np.asarray(array, dtype=np.float32).dtype == np.float32
    copied = np.array(array, copy=True)
    copied[0] = 9
    assert array.tolist() == [0, 1, 2, 3]


def test_object_dtype_is_rejected() -> None:
    with pytest.raises(ValidationError) as error:
        zeros((2,), object)

    assert error.value.code == ErrorCode.LAYOUT_UNSUPPORTED.value


def test_structured_dtype_element_bytes_are_zeroed() -> None:
    dtype = np.dtype([("a", np.int32), ("b", np.float64)])
    descr = DTypeDescriptor(dtype)
    memory = np.full(dtype.itemsize, 0xFF, dtype=np.uint8)

    descr.zero_element(memory, 0)

    assert not memory.any()
    assert not descr.has_references


def test_make_view_rejects_layouts_outside_the_buffer() -> None:
    array = asarray(np.arange(4, dtype=np.int64))

    with pytest.raises(ValidationError) as error:
        make_view(array, (5,), (8,))
    with pytest.raises(ValidationError):
        make_view(array, (2,), (-8,), offset=0)

    assert error.value.code == ErrorCode.INVALID_ARGUMENT.value
    assert array.borrower_count == 0
    assert make_view(array, (4,), (-8,), offset=24).tolist() == [3, 2, 1, 0]
