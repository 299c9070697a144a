class Cursor:
    """ Read-only forward cursor over a DynamicArray.

    The cursor keeps the storage block and length the array had when the
    cursor was created, and borrows the array until it is released. Release
    happens on the first of: `release`/`close`, leaving a `with` block,
    exhaustion, or garbage collection.

    Attributes
    ----------
    owner : DynamicArray
        Borrowed array, None once released.

    array : np.ndarray
        Storage block at creation time.

    length : int
        Number of elements at creation time.

    pos : int
        Index of the next element to produce.
    """

    def __init__(self, owner):
        self.array = owner.array
        self.length = len(owner)
        self.pos = 0
        owner.n_borrows += 1
        self.owner = owner

    def release(self):
        """ Give the borrow back. Releasing twice does nothing. """
        if self.owner is not None:
            self.owner.n_borrows -= 1
            self.owner = None

    close = release

    @property
    def released(self):
        return self.owner is None

    def remaining(self):
        return self.length - self.pos

    def __iter__(self):
        return self

    def __next__(self):
        if self.pos >= self.length:
            self.release()
            raise StopIteration
        x = self.array[self.pos]
        self.pos += 1
        return x

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()

    def __del__(self):
        # __init__ may have failed before owner was set
        if getattr(self, 'owner', None) is not None:
            self.release()

    def __repr__(self):
        return f'Cursor(pos={self.pos}, length={self.length}, released={self.released})'
