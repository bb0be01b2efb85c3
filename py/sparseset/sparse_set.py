import logging
import numbers
from typing import Callable, Iterator, List, Tuple

import numpy as np


logger = logging.getLogger(__name__)


class SparseSetError(Exception):
    """
    Base class for all errors raised by SparseSet. Every SparseSet error indicates a caller error,
    and is raised before any mutation takes place.
    """
    pass


class InvalidArgumentError(SparseSetError, ValueError):
    """
    Raised when a value that must be a positive integer is not one. This applies to the length
    passed at construction, and to the element argument of contains()/insert()/*_remove().
    """
    pass


class OutOfBoundsError(SparseSetError, IndexError):
    """
    Raised by SparseSet.insert() when the element exceeds the length of the set.

    Note that SparseSet.contains() does NOT raise this for elements that exceed the length. It
    simply returns False, since probing for such elements is a normal thing to do.
    """
    pass


class ConcurrentModificationError(SparseSetError, RuntimeError):
    """
    Raised by an iterator over a SparseSet if the set was structurally modified after the iterator
    was created.
    """
    pass


def is_positive_int(x) -> bool:
    return isinstance(x, numbers.Integral) and not isinstance(x, (bool, np.bool_)) and x >= 1


def validate_positive_int(x, name: str = 'x') -> int:
    if not is_positive_int(x):
        raise InvalidArgumentError(f'expected integer >= 1 for {name}, got {x!r}')
    return int(x)


class SparseSet:
    """
    A set of distinct integers drawn from the fixed universe [1, length], using the dense/sparse
    representation of Briggs and Torczon ("An Efficient Representation for Sparse Sets").

    Two numpy arrays of length+1 are allocated once at construction:

    dense[1..count]: the elements currently present, in insertion order (as adjusted by removals)
    sparse[x]: the slot of x within dense, meaningful only if x is present

    Slot 0 of both arrays is never live. The contents of slots beyond count, and of sparse[x] for
    absent x, are stale. They are never trusted on their own: x is present iff

    1 <= sparse[x] <= count and dense[sparse[x]] == x

    This makes contains(), insert(), unordered_remove() and clear() O(1). ordered_remove() is
    O(count - slot), since it shifts the tail of dense down by one to preserve order.

    ### Example:
    >>> s = SparseSet(100)
    >>> s.insert(3)
    True
    >>> s.insert(3)
    False
    >>> s.insert(42)
    True
    >>> list(s.iterate())
    [(1, 3), (2, 42)]
    >>> s.unordered_remove(3)
    True
    >>> print(s)
    SparseSet(length=100, [42])

    The set is not thread-safe. Mutating the set while iterating over it causes the iterator to
    raise ConcurrentModificationError on its next step.
    """

    def __init__(self, length: int):
        self._length = validate_positive_int(length, 'length')
        self._dense = np.zeros(self._length + 1, dtype=np.int64)
        self._sparse = np.zeros(self._length + 1, dtype=np.int64)
        self._count = 0
        self._version = 0  # bumped on every structural modification
        logger.debug('Allocated SparseSet: length=%s', self._length)

    @property
    def length(self) -> int:
        return self._length

    def count(self) -> int:
        return self._count

    def contains(self, x) -> bool:
        """
        Returns True iff x is in the set. Raises InvalidArgumentError if x is not a positive
        integer. Any x > length is reported as absent.
        """
        x = validate_positive_int(x)
        return self._contains(x)

    def _contains(self, x: int) -> bool:
        if x > self._length:
            return False
        s = self._sparse[x]
        return bool(1 <= s <= self._count and self._dense[s] == x)

    def insert(self, x) -> bool:
        """
        Appends x to the set. Returns False if x was already present, True otherwise.

        Raises OutOfBoundsError if x > length.
        """
        x = validate_positive_int(x)
        if self._contains(x):
            return False
        if x > self._length:
            raise OutOfBoundsError(f'out of bounds: got {x}; max is {self._length}')

        self._count += 1
        self._dense[self._count] = x
        self._sparse[x] = self._count
        self._version += 1
        return True

    def unordered_remove(self, x) -> bool:
        """
        Removes x by moving the last element into its slot. O(1), but does not preserve the
        relative order of the remaining elements.

        Returns False if x was not present, True otherwise.
        """
        x = validate_positive_int(x)
        if not self._contains(x):
            return False

        i = self._sparse[x]
        e = self._dense[self._count]

        self._dense[i] = e
        self._sparse[e] = i
        self._count -= 1
        self._version += 1
        return True

    def ordered_remove(self, x) -> bool:
        """
        Removes x, shifting every element after it down by one slot. This preserves the relative
        order of the remaining elements, at a cost proportional to the number of shifted elements.

        Returns False if x was not present, True otherwise.
        """
        x = validate_positive_int(x)
        if not self._contains(x):
            return False

        s = int(self._sparse[x])
        n = self._count
        if s < n:
            self._dense[s:n] = self._dense[s + 1:n + 1]
            self._sparse[self._dense[s:n]] = np.arange(s, n)
        self._count -= 1
        self._version += 1
        return True

    def clear(self):
        """
        Removes all elements in O(1). The backing arrays are not touched.
        """
        if self._count:
            logger.debug('Clearing SparseSet: length=%s count=%s', self._length, self._count)
        self._count = 0
        self._version += 1

    def iterate(self) -> Iterator[Tuple[int, int]]:
        """
        Returns an iterator of (position, element) pairs over the elements present at the time of
        this call, in dense order. Positions are 1-based.

        Each call returns a fresh iterator. If the set is modified before the iterator is
        exhausted, the iterator raises ConcurrentModificationError on its next step.
        """
        return self._iterate(self._count, self._version)

    def _iterate(self, count: int, version: int) -> Iterator[Tuple[int, int]]:
        for i in range(1, count + 1):
            if self._version != version:
                raise ConcurrentModificationError(
                    f'SparseSet modified during iteration (position {i} of {count})')
            yield i, int(self._dense[i])

    def each(self, fn: Callable[[int], None]):
        """
        Calls fn(x) for each element x, in dense order.
        """
        for _, x in self.iterate():
            fn(x)

    def to_list(self) -> List[int]:
        return self._dense[1:self._count + 1].tolist()

    def check_invariants(self):
        n = self._count
        assert 0 <= n <= self._length, (n, self._length)
        live = self._dense[1:n + 1]
        assert np.all((live >= 1) & (live <= self._length)), live
        assert np.array_equal(self._sparse[live], np.arange(1, n + 1)), (live, self._sparse[live])

    def __contains__(self, x) -> bool:
        return is_positive_int(x) and self._contains(int(x))

    def __len__(self):
        return self._count

    def __iter__(self):
        return (x for _, x in self.iterate())

    def __repr__(self):
        return f'SparseSet(length={self._length}, {self.to_list()})'

    def __array__(self, dtype=None, copy=None):
        # the live prefix is only ever handed out as a copy
        if copy is False:
            raise ValueError('SparseSet cannot be converted to an array without a copy')
        return np.array(self._dense[1:self._count + 1], dtype=dtype)
