"""Bloom filters that are generic over their counter storage.

SimpleBloomFilter owns two things: an ordered tuple of hash producers and
a counter storage. Every operation hashes the value once per producer,
reduces each digest modulo the storage size and then asks the storage to
increment, decrement or query those positions. What a "counter" means is
left entirely to the storage, so the same filter gives:

1. Binary Bloom filters with BitSet storage (the default)
2. Counting Bloom filters with CountingSet storage, adding remove()
3. Spectral Bloom filters with CountingSet storage, adding
   contains_more_than() and find_count()

Operations that need an optional storage capability raise TypeError when
the storage lacks it (see generic_bloom.storage for the capabilities).

Example:
    >>> bf = SimpleBloomFilter(10, 20)
    >>> bf.insert(48)
    >>> bf.insert(32)
    >>> 48 in bf and 32 in bf
    True

The filter does not size itself: the false positive rate depends on the
number of hashers k, the number of counters m and the number of distinct
values inserted, and choosing k and m is left to the caller.
"""
import logging

from generic_bloom.hashing import XXHasher, hash_indices
from generic_bloom.storage import (BinaryBloomSet, BitSet, BloomSet,
                                   BloomSetDelete, SpectralBloomSet)

logger = logging.getLogger(__name__)


class SimpleBloomFilter:

    def __init__(self, n_hashers, n_counters, storage=BitSet, hasher=XXHasher):
        """Initialize a Bloom filter with freshly built hash producers.

        Args:
            n_hashers (int): Number of hash producers (k in literature).
                Must be > 0.
            n_counters (int): Number of counters in the storage (m in
                literature). Must be > 0.
            storage (callable, optional): Called with ``n_counters`` to
                build the storage; must return a BloomSet. Default is
                BitSet. Use CountingSet, or e.g.
                ``functools.partial(CountingSet, typecode='H')``, for
                counting and spectral filters.
            hasher (callable, optional): Called without arguments to build
                each hash producer. Default is XXHasher, which seeds every
                producer randomly.

        Raises:
            ValueError: If n_hashers or n_counters is not positive.
            TypeError: If ``storage`` does not build a BloomSet.

        Example:
            >>> from generic_bloom.storage import CountingSet
            >>> cbf = SimpleBloomFilter(10, 20, storage=CountingSet)
        """
        if not n_hashers > 0:
            raise ValueError("Number of hashers must be > 0")
        self._setup(tuple(hasher() for _ in range(n_hashers)), n_counters, storage)

    @classmethod
    def with_hashers(cls, hashers, n_counters, storage=BitSet):
        """Create a Bloom filter from existing hash producers.

        Filters that are meant to be combined with union() or intersect()
        must hash identically, so the second one is normally built from the
        first one's producers:

            >>> f1 = SimpleBloomFilter(10, 20)
            >>> f2 = SimpleBloomFilter.with_hashers(f1.hashers, 20)

        Args:
            hashers: Sequence of hash producers, kept as a tuple in the
                given order. Must not be empty.
            n_counters (int): Number of counters in the storage. Must be > 0.
            storage (callable, optional): Storage factory, as for __init__.

        Raises:
            ValueError: If hashers is empty or n_counters is not positive.
        """
        hashers = tuple(hashers)
        if not hashers:
            raise ValueError("Number of hashers must be > 0")
        new_filter = cls.__new__(cls)
        new_filter._setup(hashers, n_counters, storage)
        return new_filter

    def _setup(self, hashers, n_counters, storage):
        if not n_counters > 0:
            raise ValueError("Number of counters must be > 0")
        counters = storage(n_counters)
        if not isinstance(counters, BloomSet):
            raise TypeError("Storage must be a BloomSet, got %s" % type(counters).__name__)
        self._hashers = hashers
        self._counters = counters
        logger.debug("Created Bloom filter with %d hashers over %d counters (%s)",
                     len(hashers), n_counters, type(counters).__name__)

    @property
    def hashers(self):
        """The filter's hash producers, as a tuple."""
        return self._hashers

    @property
    def counters(self):
        """The storage holding the filter's counters."""
        return self._counters

    def into_inner(self):
        """Return the ``(hashers, counters)`` pair backing the filter."""
        return self._hashers, self._counters

    def _indices(self, key):
        return hash_indices(self._hashers, self._counters.size(), key)

    def _require(self, capability, operation):
        if not isinstance(self._counters, capability):
            raise TypeError("%s storage does not support %s (requires %s)" % (
                type(self._counters).__name__, operation, capability.__name__))

    def insert(self, key):
        """Add an element to the Bloom filter.

        Increments the counter at each of the element's k positions. If two
        hashers agree on a position it is incremented twice.

        Args:
            key: The element to add (str, bytes, or any object with __str__)
        """
        counters = self._counters
        for i in self._indices(key):
            counters.increment(i)

    add = insert

    def contains(self, key):
        """Test whether an element is in the Bloom filter.

        Returns:
            bool: True if the element might be in the set (false positives
                are possible), False if it is definitely not in the set.
        """
        counters = self._counters
        for i in self._indices(key):
            if not counters.query(i):
                return False
        return True

    def __contains__(self, key):
        return self.contains(key)

    def clear(self):
        """Remove every element. The hash producers are kept."""
        self._counters.clear()

    def remove(self, key):
        """Remove an element from a counting Bloom filter.

        Decrements the counter at each of the element's k positions.
        Removing an element that was never inserted, or removing it more
        often than it was inserted, can cause false negatives for other
        elements sharing those counters.

        Raises:
            TypeError: If the storage does not support deletion.
        """
        self._require(BloomSetDelete, 'remove')
        counters = self._counters
        for i in self._indices(key):
            counters.decrement(i)

    def _check_compatible(self, other, operation):
        if len(self._hashers) != len(other.hashers) or \
                self._counters.size() != other.counters.size():
            raise ValueError(
                "%s requires both filters to have the same number of hashers and counters"
                % operation)

    def union(self, other):
        """Insert every element of ``other`` into this filter, in place.

        Both filters must hash identically (built from equivalent
        producers, see with_hashers). That cannot be checked in general;
        combining filters with different producers yields a meaningless
        filter rather than an error.

        Args:
            other (SimpleBloomFilter): Filter with the same storage type,
                number of hashers and number of counters.

        Raises:
            TypeError: If the storage does not support unions.
            ValueError: If the filters differ in hashers or counters count.
        """
        self._require(BinaryBloomSet, 'union')
        self._check_compatible(other, 'Union')
        self._counters.union(other.counters)
        logger.debug("Merged %d counters by union", self._counters.size())

    def intersect(self, other):
        """Keep only the elements that are also in ``other``, in place.

        The same requirements as union() apply. Due to false positives the
        result may still report elements that were not in both filters.

        Raises:
            TypeError: If the storage does not support intersections.
            ValueError: If the filters differ in hashers or counters count.
        """
        self._require(BinaryBloomSet, 'intersect')
        self._check_compatible(other, 'Intersection')
        self._counters.intersect(other.counters)
        logger.debug("Merged %d counters by intersection", self._counters.size())

    def __ior__(self, other):
        self.union(other)
        return self

    def __iand__(self, other):
        self.intersect(other)
        return self

    def __or__(self, other):
        """Return a new filter holding the union of both filters."""
        new_filter = self.copy()
        new_filter.union(other)
        return new_filter

    def __and__(self, other):
        """Return a new filter holding the intersection of both filters."""
        new_filter = self.copy()
        new_filter.intersect(other)
        return new_filter

    def contains_more_than(self, key, count):
        """Test whether an element was inserted more than ``count`` times.

        True only if every one of the element's counters exceeds
        ``count``. Like contains(), this can give false positives but never
        misses the true multiplicity (up to counter saturation).

        Raises:
            TypeError: If the storage does not expose raw counts.
        """
        self._require(SpectralBloomSet, 'contains_more_than')
        counters = self._counters
        for i in self._indices(key):
            if counters.query_count(i) <= count:
                return False
        return True

    def find_count(self, key):
        """Estimate how many times an element was inserted.

        Returns the minimum count over the element's k counters. Other
        elements can only add to a shared counter, so the estimate is never
        below the true number of inserts minus removals (up to counter
        saturation).

        Raises:
            TypeError: If the storage does not expose raw counts.
        """
        self._require(SpectralBloomSet, 'find_count')
        counters = self._counters
        return min(counters.query_count(i) for i in self._indices(key))

    def copy(self):
        """Return an independent filter sharing this filter's hashers."""
        new_filter = SimpleBloomFilter.__new__(type(self))
        new_filter._hashers = self._hashers
        new_filter._counters = self._counters.copy()
        return new_filter

    def __repr__(self):
        return '<%s hashers=%d counters=%d storage=%s>' % (
            type(self).__name__, len(self._hashers), self._counters.size(),
            type(self._counters).__name__)
