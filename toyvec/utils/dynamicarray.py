import numpy as np
from toyvec.utils.cursor import Cursor


class BorrowError(RuntimeError):
    """ Raised when an array is mutated while cursors still borrow it. """

    def __init__(self, n_borrows):
        self.n_borrows = n_borrows
        super().__init__(
            f"Cannot mutate array while {n_borrows} cursor(s) borrow it. Release or exhaust the cursors first.")


def allocate(size, dtype=object, default=None):
    """ Allocate a block of `size` slots that each hold a well-defined value.

    With a `default` factory every slot gets its own `default()` result.
    Without one, numeric dtypes are zero-filled and object slots hold None.
    """
    dtype = np.dtype(dtype)
    if default is None:
        if dtype.kind == 'O':
            return np.empty(size, dtype=dtype)
        return np.zeros(size, dtype=dtype)
    array = np.empty(size, dtype=dtype)
    for i in range(size):
        array[i] = default()
    return array


class DynamicArray:
    """ Growable array backed by a fixed-size numpy block.

    Slots [0, end) hold pushed values in insertion order, slots [end, size)
    hold default placeholders. When the block is full it is replaced by one
    twice as large (or of size 1 when empty).

    Cursors obtained with `iter` borrow the array. While any cursor is alive,
    `push` raises BorrowError.

    Parameters
    ----------
    size : int
        Initial capacity.

    dtype : numpy dtype
        Element type of the backing block. Defaults to object.

    default : callable
        Zero-argument factory for placeholder values.

    Attributes
    ----------
    array : np.ndarray
        Backing block of exactly `size` slots.

    end : int
        Number of pushed elements.

    n_borrows : int
        Number of live cursors.
    """

    def __init__(self, size=0, dtype=object, default=None):
        if size < 0:
            raise ValueError(f"Capacity must be non-negative, got {size}.")
        self.dtype = np.dtype(dtype)
        if self.dtype.kind in 'US' and self.dtype.itemsize == 0:
            raise ValueError(
                f"String dtype {self.dtype} has no length. Use a sized dtype such as 'U16', or object.")
        self.default = default
        self.size = size
        self.array = allocate(self.size, self.dtype, self.default)
        self.end = 0
        self.n_borrows = 0

    @classmethod
    def new(cls, dtype=object, default=None):
        return cls(0, dtype=dtype, default=default)

    @classmethod
    def with_capacity(cls, size, dtype=object, default=None):
        return cls(size, dtype=dtype, default=default)

    def len(self):
        return self.end

    def capacity(self):
        return self.size

    def push(self, x):
        self._check_not_borrowed()
        x = self._convert(x)
        if self.end == self.size:
            self._grow()
        self.array[self.end] = x
        self.end += 1

    append = push

    def get(self, i):
        """ Return element `i`, or None if `i` is out of range. """
        return self.get_or(i, None)

    def get_or(self, i, default):
        """ Return element `i`, or `default` if `i` is out of range. """
        if 0 <= i < self.end:
            return self.array[i]
        return default

    def iter(self):
        """ Return a read-only cursor over the current elements. """
        return Cursor(self)

    def _grow(self):
        # Old slots keep their index, the new block is default-filled
        self._check_not_borrowed()
        extra = self.size if self.size else 1
        self.array = np.concatenate(
            (self.array, allocate(extra, self.dtype, self.default)))
        self.size += extra

    def _convert(self, x):
        """ Convert `x` to the array's dtype.

        Raises ValueError if the stored value would differ from `x`, e.g. a
        float pushed onto an integer array or a string longer than the
        dtype allows.
        """
        if self.dtype.kind == 'O':
            return x
        try:
            value = np.asarray(x)
            with np.errstate(invalid='ignore', over='ignore'):
                converted = value.astype(self.dtype)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"Cannot store {x!r} in a {self.dtype} array.") from e

        # Strings only go into string arrays of the same kind, numbers only
        # into numeric arrays
        is_text = value.dtype.kind in 'US'
        if self.dtype.kind in 'US':
            same_kind = value.dtype.kind == self.dtype.kind
        else:
            same_kind = not is_text
        if value.shape != () or not same_kind:
            raise ValueError(f"Cannot store {x!r} in a {self.dtype} array.")

        both_nan = not is_text and converted != converted and value != value
        if not (converted == value or both_nan):
            raise ValueError(
                f"Cannot store {x!r} in a {self.dtype} array without changing it (would be {converted[()]!r}).")
        return converted[()]

    def _check_not_borrowed(self):
        if self.n_borrows:
            raise BorrowError(self.n_borrows)

    def __len__(self):
        return self.end

    def __iter__(self):
        return self.iter()

    def __repr__(self):
        return str(self.array[:self.end])

    def __getitem__(self, i):
        if 0 <= i < self.end:
            return self.array[i]
        else:
            raise IndexError(
                f"Array index out of range. Access attempt at index {i}, but array ends at index {self.end - 1}.")
