"""Hash producers and index computation for Bloom filters.

A filter holds an ordered tuple of *hash producers*. A producer is any
object with a ``build_hasher()`` method returning a fresh hasher that
accepts ``update(bytes)`` and reports ``intdigest()``, which is exactly the
interface of the ``xxhash`` hashers. The filter never chooses or checks
hash quality itself; a weak producer raises the false positive rate but
never breaks anything.

Requirements:
    - xxhash >= 3.0.0: Fast non-cryptographic hashing
"""
import random

import xxhash

_seed_source = random.SystemRandom()


def key_bytes(key):
    """Normalise ``key`` to the bytes that are fed to each hasher.

    Args:
        key: The element to hash (str, bytes, or any object with __str__)

    Returns:
        bytes: ``key`` itself for bytes, UTF-8 encoding otherwise.
    """
    if isinstance(key, bytes):
        return key
    if isinstance(key, str):
        return key.encode('utf-8')
    return str(key).encode('utf-8')


class XXHasher:
    """A seeded xxh64 hash producer.

    Each instance is keyed by its own 64-bit seed. Without an explicit seed
    a random one is drawn, so independently created producers behave as
    independent hash functions. Two producers with the same seed are equal
    and map every key to the same digest.

    Args:
        seed (int, optional): 64-bit seed. Random when omitted.

    Example:
        >>> XXHasher(seed=7) == XXHasher(seed=7)
        True
    """

    def __init__(self, seed=None):
        if seed is None:
            seed = _seed_source.getrandbits(64)
        self._seed = seed

    @property
    def seed(self):
        return self._seed

    def build_hasher(self):
        return xxhash.xxh64(seed=self._seed)

    def __eq__(self, other):
        if not isinstance(other, XXHasher):
            return NotImplemented
        return self._seed == other._seed

    def __hash__(self):
        return hash((XXHasher, self._seed))

    def __repr__(self):
        return 'XXHasher(seed=%d)' % self._seed


def hash_indices(hashers, set_size, key):
    """Yield one storage index per hash producer for ``key``.

    Index ``i`` is the digest of ``key`` under ``hashers[i]`` reduced
    modulo ``set_size``. Indices are not deduplicated: if two producers
    land on the same position, that position is yielded twice.

    Args:
        hashers: Ordered sequence of hash producers.
        set_size (int): Number of counters in the storage, > 0.
        key: The element to hash.

    Yields:
        int: Indices in range [0, set_size)
    """
    data = key_bytes(key)
    for producer in hashers:
        h = producer.build_hasher()
        h.update(data)
        yield h.intdigest() % set_size
