"""Tests for the counter storages in generic_bloom.storage.

Test Coverage:
- Capability ABC membership of the concrete storages
- BitSet set/query/clear and bitwise union/intersection
- CountingSet saturating increment and floor-clamped decrement
- Counter width selection via array typecodes
- Independent copies
"""
import pytest

from generic_bloom.storage import (BinaryBloomSet, BitSet, BloomSet,
                                   BloomSetDelete, CountingSet,
                                   SpectralBloomSet)


# =============================================================================
# Capability Tests
# =============================================================================

class TestCapabilities:
    """Test which capabilities each storage advertises."""

    def test_bitset_capabilities(self):
        """BitSet combines pointwise but cannot delete or count."""
        bits = BitSet(8)
        assert isinstance(bits, BloomSet)
        assert isinstance(bits, BinaryBloomSet)
        assert not isinstance(bits, BloomSetDelete)
        assert not isinstance(bits, SpectralBloomSet)

    def test_countingset_capabilities(self):
        """CountingSet deletes and counts but does not combine."""
        counts = CountingSet(8)
        assert isinstance(counts, BloomSet)
        assert isinstance(counts, BloomSetDelete)
        assert isinstance(counts, SpectralBloomSet)
        assert not isinstance(counts, BinaryBloomSet)

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            BloomSet()

    def test_registered_storage_gains_capability(self):
        """Test that a third-party storage can opt in via register().

        Purpose:
            Capabilities are plain ABC memberships, so a storage that does
            not subclass them can still be declared as supporting them.

        Expected:
            isinstance() reports the registered capability.
        """
        class ListCounts:
            pass

        SpectralBloomSet.register(ListCounts)
        assert isinstance(ListCounts(), SpectralBloomSet)


# =============================================================================
# BitSet Tests
# =============================================================================

class TestBitSet:
    """Test presence-bit storage."""

    def test_new_is_all_false(self):
        bits = BitSet(20)
        assert bits.size() == 20
        assert len(bits) == 20
        assert not any(bits.query(i) for i in range(20))

    def test_increment_sets_bit(self):
        bits = BitSet(10)
        bits.increment(3)
        assert bits.query(3)
        assert not bits.query(2)
        assert not bits.query(4)

    def test_increment_is_idempotent(self):
        """Test that setting a bit twice leaves a single set bit.

        Expected:
            Exactly one bit is set after two increments of the same index.
        """
        bits = BitSet(10)
        bits.increment(5)
        bits.increment(5)
        assert bits.bitarray.count() == 1

    def test_clear_resets_all_bits(self):
        bits = BitSet(10)
        for i in range(0, 10, 2):
            bits.increment(i)
        bits.clear()
        assert bits.bitarray.count() == 0
        assert bits.size() == 10

    def test_out_of_range_index_raises(self):
        bits = BitSet(4)
        with pytest.raises(IndexError):
            bits.increment(4)
        with pytest.raises(IndexError):
            bits.query(4)

    def test_union_is_bitwise_or(self):
        """Test that union keeps every bit set in either storage.

        Expected:
            Bits 1, 3 and 5 are set; the others stay clear.
        """
        a = BitSet(8)
        b = BitSet(8)
        a.increment(1)
        a.increment(3)
        b.increment(3)
        b.increment(5)

        a.union(b)

        assert [i for i in range(8) if a.query(i)] == [1, 3, 5]
        # other is left untouched
        assert [i for i in range(8) if b.query(i)] == [3, 5]

    def test_intersect_is_bitwise_and(self):
        a = BitSet(8)
        b = BitSet(8)
        a.increment(1)
        a.increment(3)
        b.increment(3)
        b.increment(5)

        a.intersect(b)

        assert [i for i in range(8) if a.query(i)] == [3]

    def test_union_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            BitSet(8).union(BitSet(16))

    def test_intersect_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            BitSet(8).intersect(BitSet(16))

    def test_copy_is_independent(self):
        original = BitSet(8)
        original.increment(2)
        duplicate = original.copy()
        duplicate.increment(6)

        assert duplicate.query(2)
        assert not original.query(6)
        assert original != duplicate


# =============================================================================
# CountingSet Tests
# =============================================================================

class TestCountingSet:
    """Test saturating-count storage."""

    def test_new_is_all_zero(self):
        counts = CountingSet(12)
        assert counts.size() == 12
        assert all(counts.query_count(i) == 0 for i in range(12))
        assert not any(counts.query(i) for i in range(12))

    def test_default_counter_width(self):
        counts = CountingSet(4)
        assert counts.typecode == CountingSet.DEFAULT_TYPECODE == 'B'
        assert counts.max_count == 255

    @pytest.mark.parametrize("typecode,max_count", [
        ('B', 2 ** 8 - 1),
        ('H', 2 ** 16 - 1),
        ('Q', 2 ** 64 - 1),
    ])
    def test_counter_width_from_typecode(self, typecode, max_count):
        assert CountingSet(4, typecode=typecode).max_count == max_count

    @pytest.mark.parametrize("typecode", ['b', 'h', 'f', 'd', 'x'])
    def test_invalid_typecode_raises(self, typecode):
        with pytest.raises(ValueError, match="Counter typecode must be one of"):
            CountingSet(4, typecode=typecode)

    def test_increment_counts_up(self):
        counts = CountingSet(4)
        for _ in range(3):
            counts.increment(2)
        assert counts.query_count(2) == 3
        assert counts.query(2)
        assert counts.query_count(1) == 0

    def test_increment_saturates_at_max(self):
        """Test that incrementing past the maximum never overflows.

        Purpose:
            An 8-bit counter incremented 300 times must stop at 255 rather
            than wrap around or raise OverflowError.

        Expected:
            query_count() returns max_count.
        """
        counts = CountingSet(4)
        for _ in range(300):
            counts.increment(0)
        assert counts.query_count(0) == counts.max_count == 255

    def test_decrement_counts_down(self):
        counts = CountingSet(4)
        counts.increment(1)
        counts.increment(1)
        counts.decrement(1)
        assert counts.query_count(1) == 1
        counts.decrement(1)
        assert counts.query_count(1) == 0
        assert not counts.query(1)

    def test_decrement_at_zero_is_noop(self):
        """Test the zero floor.

        Expected:
            Decrementing an untouched counter leaves it at zero and raises
            nothing.
        """
        counts = CountingSet(4)
        counts.decrement(3)
        counts.decrement(3)
        assert counts.query_count(3) == 0

    def test_decrement_at_max_is_noop(self):
        """Test that a saturated counter is never decremented.

        Purpose:
            Once a counter reaches max_count its true value is unknown, so
            decrementing it could create false negatives.

        Expected:
            The counter stays at max_count after decrements.
        """
        counts = CountingSet(4)
        for _ in range(counts.max_count):
            counts.increment(0)
        counts.decrement(0)
        counts.decrement(0)
        assert counts.query_count(0) == counts.max_count

    def test_decrement_just_below_max(self):
        counts = CountingSet(4)
        for _ in range(counts.max_count - 1):
            counts.increment(0)
        counts.decrement(0)
        assert counts.query_count(0) == counts.max_count - 2

    def test_clear_resets_counts(self):
        counts = CountingSet(6, typecode='H')
        for i in range(6):
            counts.increment(i)
        counts.clear()
        assert counts.size() == 6
        assert counts.typecode == 'H'
        assert all(counts.query_count(i) == 0 for i in range(6))

    def test_out_of_range_index_raises(self):
        counts = CountingSet(4)
        with pytest.raises(IndexError):
            counts.increment(4)
        with pytest.raises(IndexError):
            counts.query_count(4)

    def test_copy_is_independent(self):
        original = CountingSet(4, typecode='H')
        original.increment(0)
        duplicate = original.copy()
        duplicate.increment(0)
        duplicate.increment(3)

        assert original.query_count(0) == 1
        assert original.query_count(3) == 0
        assert duplicate.query_count(0) == 2
        assert duplicate.typecode == 'H'
        assert original != duplicate
        assert original == original.copy()
