import numpy as np
import pytest
from toyvec.utils.dynamicarray import DynamicArray, BorrowError


def make_array(values, dtype=object):
    array = DynamicArray.new(dtype=dtype)
    for x in values:
        array.push(x)
    return array


def test_cursor_yields_length_elements_then_exhausted():
    array = make_array(['A', 'B', 'C'])
    cursor = array.iter()
    assert next(cursor) == 'A'
    assert next(cursor) == 'B'
    assert next(cursor) == 'C'
    for _ in range(3):
        assert next(cursor, None) is None
    with pytest.raises(StopIteration):
        next(cursor)


def test_cursor_over_empty_array():
    cursor = DynamicArray.new().iter()
    assert cursor.remaining() == 0
    assert next(cursor, None) is None
    assert cursor.released


def test_cursor_reads_back_after_many_growths():
    values = list(range(1000))
    array = make_array(values, dtype=np.int64)
    assert list(array.iter()) == values


def test_cursor_composes_with_builtins():
    array = make_array(['A', 'B', 'C'])
    assert list(zip(array.iter(), range(10))) == [('A', 0), ('B', 1), ('C', 2)]
    assert sorted(array.iter(), reverse=True) == ['C', 'B', 'A']
    assert [x.lower() for x in array] == ['a', 'b', 'c']
    assert array.n_borrows == 0


def test_cursor_is_not_restartable():
    array = make_array(['A', 'B'])
    cursor = array.iter()
    assert list(cursor) == ['A', 'B']
    assert list(cursor) == []
    assert list(array.iter()) == ['A', 'B']


def test_cursor_remaining():
    cursor = make_array(['A', 'B']).iter()
    assert cursor.remaining() == 2
    next(cursor)
    assert cursor.remaining() == 1
    cursor.release()


def test_exhaustion_releases_borrow():
    array = make_array(['A'])
    cursor = array.iter()
    assert next(cursor) == 'A'
    assert not cursor.released
    with pytest.raises(BorrowError):
        array.push('B')
    assert next(cursor, None) is None
    assert cursor.released
    array.push('B')


def test_snapshot_survives_later_growth():
    array = make_array(['A', 'B'])
    cursor = array.iter()
    assert next(cursor) == 'A'
    cursor.release()

    for x in ['C', 'D', 'E']:
        array.push(x)
    assert array.capacity() == 8
    # Length and storage were fixed when the cursor was created
    assert next(cursor) == 'B'
    assert next(cursor, None) is None


def test_release_twice_is_noop():
    array = make_array(['A'])
    other = array.iter()
    cursor = array.iter()
    cursor.release()
    cursor.close()
    assert array.n_borrows == 1
    other.release()
    assert array.n_borrows == 0


def test_with_block_releases_borrow():
    array = make_array(['A', 'B'])
    with array.iter() as cursor:
        assert next(cursor) == 'A'
        with pytest.raises(BorrowError):
            array.push('C')
    assert cursor.released
    array.push('C')
    assert array.get(2) == 'C'


def test_with_block_releases_on_error():
    array = make_array(['A'])
    with pytest.raises(KeyError):
        with array.iter():
            raise KeyError('boom')
    assert array.n_borrows == 0


def test_repr():
    cursor = make_array(['A', 'B']).iter()
    next(cursor)
    assert repr(cursor) == 'Cursor(pos=1, length=2, released=False)'
    cursor.release()
    assert repr(cursor) == 'Cursor(pos=1, length=2, released=True)'
