import gc
import weakref
from types import SimpleNamespace

import numpy as np
import pytest

import stridex.backend.memory as memory_module
from stridex import (
    ErrorCode,
    ExecutionError,
    ValidationError,
    asarray,
    make_view,
    resize,
    zeros,
)
from stridex.array import allocate_array


class RecordingDescriptor:
    """Descriptor whose elements need per-element zeroing."""

    def __init__(self) -> None:
        self.itemsize = 8
        self.has_references = True
        self.dtype = np.dtype(np.int64)
        self.zeroed: list[int] = []

    def zero_element(self, memory: np.ndarray, offset: int, /) -> None:
        self.zeroed.append(offset)
        memory[offset : offset + self.itemsize] = 0


def _arange_array(shape: tuple[int, ...]):
    return asarray(np.arange(int(np.prod(shape)), dtype=np.int64).reshape(shape))


def test_growing_keeps_leading_elements_and_zero_fills_the_rest() -> None:
    array = _arange_array((2, 3))

    resize(array, (3, 4))

    assert array.shape == (3, 4)
    assert array.strides == (32, 8)
    assert array.owns_data
    assert array.tolist() == [[0, 1, 2, 3], [4, 5, 0, 0], [0, 0, 0, 0]]


def test_shrinking_keeps_leading_elements() -> None:
    array = _arange_array((2, 3))
    old_memory = array.memory

    array.resize(4)

    assert array.shape == (4,)
    assert array.memory is not old_memory
    assert array.tolist() == [0, 1, 2, 3]


def test_live_view_blocks_resize_until_released() -> None:
    array = _arange_array((2, 3))
    view = array.view()

    with pytest.raises(ValidationError) as error:
        resize(array, (4, 4))

    assert error.value.code == ErrorCode.ALIASING_VIOLATION.value
    assert error.value.data["borrowers"] == 1
    assert array.shape == (2, 3)
    assert array.tolist() == [[0, 1, 2], [3, 4, 5]]

    del view
    gc.collect()
    resize(array, (4, 4))
    assert array.shape == (4, 4)


def test_refcheck_false_ignores_live_views() -> None:
    array = _arange_array((2, 3))
    view = array.view()

    resize(array, (8,), refcheck=False)

    assert array.tolist() == [0, 1, 2, 3, 4, 5, 0, 0]
    assert view.memory is not array.memory
    assert view.tolist() == [[0, 1, 2], [3, 4, 5]]


def test_weak_reference_blocks_resize() -> None:
    array = _arange_array((2, 3))
    reference = weakref.ref(array)

    with pytest.raises(ValidationError) as error:
        resize(array, (7,))

    assert error.value.code == ErrorCode.ALIASING_VIOLATION.value
    assert error.value.data["weak_references"] == 1
    assert reference() is array
    assert array.shape == (2, 3)


def test_view_cannot_change_its_size() -> None:
    array = _arange_array((2, 3))
    view = array.view()

    with pytest.raises(ValidationError) as error:
        resize(view, (10,), refcheck=False)

    assert error.value.code == ErrorCode.ALIASING_VIOLATION.value
    assert str(error.value) == "cannot resize this array: it does not own its data"
    assert view.shape == (2, 3)


def test_same_size_resize_of_view_only_relabels_shape() -> None:
    array = _arange_array((2, 3))
    view = array.view()

    resize(view, (3, 2))

    assert view.shape == (3, 2)
    assert view.strides == (16, 8)
    assert view.memory is array.memory
    assert view.tolist() == [[0, 1], [2, 3], [4, 5]]


def test_non_contiguous_arrays_cannot_be_resized() -> None:
    array = _arange_array((3, 3))
    gapped = make_view(array, (2, 2), (24, 8))

    with pytest.raises(ValidationError) as error:
        resize(gapped, (2, 2))

    assert error.value.code == ErrorCode.LAYOUT_UNSUPPORTED.value
    assert str(error.value) == "resize only works on single-segment arrays"


def test_invalid_shapes_leave_array_untouched() -> None:
    array = _arange_array((2, 3))

    with pytest.raises(ValidationError) as negative:
        resize(array, (-1, 3))
    with pytest.raises(ValidationError) as overflow:
        resize(array, (2**62, 4))

    assert negative.value.code == ErrorCode.INVALID_ARGUMENT.value
    assert str(negative.value) == "negative dimensions not allowed"
    assert overflow.value.code == ErrorCode.SIZE_OVERFLOW.value
    assert array.shape == (2, 3)
    assert array.tolist() == [[0, 1, 2], [3, 4, 5]]


def test_fortran_order_sets_fortran_strides() -> None:
    array = zeros((2, 2))

    resize(array, (2, 3), order="F")

    assert array.strides == (8, 16)
    assert array.is_f_contiguous
    assert not array.is_c_contiguous


def test_zero_size_then_regrow() -> None:
    array = _arange_array((3,))

    resize(array, (0,))
    assert array.shape == (0,)
    assert array.size == 0
    assert array.memory.nbytes == 8

    resize(array, (3,))
    assert array.tolist() == [0, 0, 0]


def test_descriptor_with_references_zeroes_each_new_element() -> None:
    descr = RecordingDescriptor()
    array = allocate_array((2,), descr)

    resize(array, (5,))

    assert descr.zeroed == [16, 24, 32]
    assert array.tolist() == [0, 0, 0, 0, 0]


def test_read_only_array_is_not_zero_filled_by_descriptor() -> None:
    descr = RecordingDescriptor()
    array = allocate_array((2,), descr)
    array.set_writeable(False)

    resize(array, (4,))

    assert descr.zeroed == []
    assert array.shape == (4,)


def test_allocation_failure_leaves_array_untouched(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    array = _arange_array((2, 3))
    old_memory = array.memory

    def _fail(*args: object, **kwargs: object) -> np.ndarray:
        raise MemoryError

    monkeypatch.setattr(
        memory_module, "np", SimpleNamespace(zeros=_fail, uint8=np.uint8)
    )

    with pytest.raises(ExecutionError) as error:
        resize(array, (100,))

    assert error.value.code == ErrorCode.ALLOCATION_FAILURE.value
    assert error.value.data["operation"] == "resize"
    assert array.shape == (2, 3)
    assert array.memory is old_memory


def test_live_numpy_window_blocks_resize() -> None:
    array = _arange_array((2, 3))
    window = array.to_numpy()

    with pytest.raises(ValidationError) as error:
        resize(array, (8,))

    assert error.value.code == ErrorCode.ALIASING_VIOLATION.value
    assert error.value.data["exports"] == 1
    assert array.shape == (2, 3)

    window[0, 0] = 99
    assert array.tolist()[0][0] == 99


def test_arrays_derived_from_a_window_keep_blocking_resize() -> None:
    array = _arange_array((2, 3))
    window = array.to_numpy()
    row = window[1]
    del window
    gc.collect()

    with pytest.raises(ValidationError):
        resize(array, (8,))
    assert array.export_count == 1

    del row
    gc.collect()
    resize(array, (8,))
    assert array.export_count == 0
    assert array.tolist() == [0, 1, 2, 3, 4, 5, 0, 0]


def test_window_of_released_view_still_blocks_owner_resize() -> None:
    array = _arange_array((2, 3))
    view = array.view()
    window = np.asarray(view)
    del view
    gc.collect()

    assert array.borrower_count == 0
    with pytest.raises(ValidationError) as error:
        resize(array, (8,))

    assert error.value.data["exports"] == 1
    assert window.tolist() == [[0, 1, 2], [3, 4, 5]]


def test_refcheck_false_ignores_live_windows() -> None:
    array = _arange_array((2, 3))
    window = array.to_numpy()

    resize(array, (8,), refcheck=False)

    assert window.tolist() == [[0, 1, 2], [3, 4, 5]]
    assert array.tolist() == [0, 1, 2, 3, 4, 5, 0, 0]
