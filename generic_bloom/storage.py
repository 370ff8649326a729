"""Counter storage for Bloom filters.

A Bloom filter decides *which* counters an operation touches; the storage
decides what a counter is and how it reacts to being incremented,
decremented or queried. Storage types advertise what they can do by
subclassing (or being registered with) the capability ABCs below:

1. BloomSet: base storage, required by every filter
2. BloomSetDelete: counters can be decremented (counting Bloom filters)
3. SpectralBloomSet: raw counts can be read back (spectral Bloom filters)
4. BinaryBloomSet: storages can be OR-ed / AND-ed together

Two concrete storages are provided:

- BitSet: one bit per counter, backed by a bitarray
- CountingSet: saturating unsigned integer counters backed by array.array

Requirements:
    - bitarray >= 0.3.4: Efficient bit array operations
"""
import abc
import copy
from array import array

try:
    import bitarray
except ImportError:
    raise ImportError('generic_bloom requires bitarray >= 0.3.4')


class BloomSet(abc.ABC):
    """Storage that can back a Bloom filter.

    Implementations are constructed with the number of counters they hold,
    all initialised to their zero state. Indices passed to the methods
    below are always in ``range(self.size())``; anything else is a caller
    error and surfaces as whatever the backing sequence raises.
    """

    @abc.abstractmethod
    def size(self):
        """Return the number of counters in the storage."""

    @abc.abstractmethod
    def increment(self, index):
        """Increment the counter at ``index``."""

    @abc.abstractmethod
    def clear(self):
        """Reset every counter to its zero state."""

    @abc.abstractmethod
    def query(self, index):
        """Return whether the counter at ``index`` indicates presence."""

    def copy(self):
        """Return an independent copy of this storage."""
        return copy.deepcopy(self)

    def __len__(self):
        return self.size()


class BloomSetDelete(BloomSet):
    """Storage that supports deletions."""

    @abc.abstractmethod
    def decrement(self, index):
        """Decrement the counter at ``index``."""


class SpectralBloomSet(BloomSet):
    """Storage that supports threshold-based lookups."""

    @abc.abstractmethod
    def query_count(self, index):
        """Return the raw count stored at ``index``."""


class BinaryBloomSet(BloomSet):
    """Storage that supports unions and intersections."""

    @abc.abstractmethod
    def union(self, other):
        """Insert every value of ``other`` into ``self``."""

    @abc.abstractmethod
    def intersect(self, other):
        """Keep only the values of ``self`` that are also in ``other``."""


class BitSet(BinaryBloomSet):
    """Presence-bit storage: each counter is a single bit.

    Incrementing sets the bit, so repeated inserts are idempotent. A bit
    cannot tell one insert from many, which is why deletion is not offered.

    Example:
        >>> bits = BitSet(8)
        >>> bits.increment(3)
        >>> bits.query(3), bits.query(4)
        (True, False)
    """

    def __init__(self, count):
        self.bitarray = bitarray.bitarray(count, endian='little')
        self.bitarray.setall(False)

    def size(self):
        return len(self.bitarray)

    def increment(self, index):
        self.bitarray[index] = True

    def clear(self):
        self.bitarray.setall(False)

    def query(self, index):
        return bool(self.bitarray[index])

    def union(self, other):
        """Pointwise OR with ``other``.

        Raises:
            ValueError: If the two bit sets differ in length.
        """
        self.bitarray |= other.bitarray

    def intersect(self, other):
        """Pointwise AND with ``other``.

        Raises:
            ValueError: If the two bit sets differ in length.
        """
        self.bitarray &= other.bitarray

    def copy(self):
        new_set = BitSet(0)
        new_set.bitarray = self.bitarray.copy()
        return new_set

    def __eq__(self, other):
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.bitarray == other.bitarray

    def __repr__(self):
        return '%s(%s)' % (type(self).__name__, self.bitarray.to01())


class CountingSet(BloomSetDelete, SpectralBloomSet):
    """Saturating-count storage for counting and spectral Bloom filters.

    Counters are unsigned integers whose width is chosen by an
    ``array.array`` typecode. Arithmetic never wraps:

    - increment stops at ``max_count``
    - decrement of a zero counter is a no-op
    - decrement of a counter at ``max_count`` is also a no-op, since a
      saturated counter no longer knows how many inserts it stands for

    Args:
        count (int): Number of counters.
        typecode (str, optional): Unsigned ``array`` typecode, one of
            ``TYPECODES``. Default is ``'B'`` (8-bit counters).

    Raises:
        ValueError: If ``typecode`` is not an unsigned integer typecode.

    Example:
        >>> counts = CountingSet(4)
        >>> counts.increment(1)
        >>> counts.increment(1)
        >>> counts.query_count(1)
        2
    """
    TYPECODES = 'BHILQ'
    DEFAULT_TYPECODE = 'B'

    def __init__(self, count, typecode=DEFAULT_TYPECODE):
        if typecode not in self.TYPECODES:
            raise ValueError(
                "Counter typecode must be one of %r, got %r" % (self.TYPECODES, typecode))
        self.typecode = typecode
        self.counts = array(typecode, [0]) * count
        self.max_count = (1 << (8 * self.counts.itemsize)) - 1

    def size(self):
        return len(self.counts)

    def increment(self, index):
        if self.counts[index] < self.max_count:
            self.counts[index] += 1

    def decrement(self, index):
        value = self.counts[index]
        if 0 < value < self.max_count:
            self.counts[index] = value - 1

    def clear(self):
        self.counts = array(self.typecode, [0]) * len(self.counts)

    def query(self, index):
        return self.counts[index] > 0

    def query_count(self, index):
        return self.counts[index]

    def copy(self):
        new_set = CountingSet(0, self.typecode)
        new_set.counts = array(self.typecode, self.counts)
        return new_set

    def __eq__(self, other):
        if not isinstance(other, CountingSet):
            return NotImplemented
        return self.typecode == other.typecode and self.counts == other.counts

    def __repr__(self):
        return '%s(%r, typecode=%r)' % (type(self).__name__, self.counts.tolist(), self.typecode)
