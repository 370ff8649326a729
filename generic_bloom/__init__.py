"""Bloom filters generic over their counter storage."""
from generic_bloom.bloom import SimpleBloomFilter
from generic_bloom.hashing import XXHasher
from generic_bloom.storage import (BinaryBloomSet, BitSet, BloomSet,
                                   BloomSetDelete, CountingSet,
                                   SpectralBloomSet)

__all__ = [
    'SimpleBloomFilter',
    'XXHasher',
    'BloomSet',
    'BloomSetDelete',
    'SpectralBloomSet',
    'BinaryBloomSet',
    'BitSet',
    'CountingSet',
]
