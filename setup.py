#!/usr/bin/env python3
"""Setup script for generic_bloom - Bloom filters generic over their storage."""
from setuptools import setup

VERSION = "0.1.0"
DESCRIPTION = "Bloom filters parameterized by their counter storage"
LONG_DESCRIPTION = """
A pure-Python Bloom filter whose hashing and indexing logic is separate from
the storage that holds its counters. Plugging in different storage gives:

- Binary Bloom filters: one bit per counter (BitSet), with union and
  intersection
- Counting Bloom filters: saturating integer counters (CountingSet), with
  deletion
- Spectral Bloom filters: the same counters queried for multiplicity
  (find_count, contains_more_than)

Features:
- Seeded xxHash hash producers, shareable between filters
- Space-efficient bit array storage
- Saturating counters of 8 to 64 bits that never overflow or underflow
- Storage capabilities declared as abstract base classes
"""

CLASSIFIERS = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.8",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3 :: Only",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Utilities",
]

setup(
    name="generic_bloom",
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/plain",
    classifiers=CLASSIFIERS,
    keywords=[
        "bloom filter",
        "counting bloom filter",
        "spectral bloom filter",
        "probabilistic",
        "data structures",
        "set membership",
        "xxhash",
    ],
    license="AGPL-3.0-or-later",
    platforms=["any"],
    python_requires=">=3.8",
    install_requires=["bitarray>=0.3.4", "xxhash>=3.0.0"],
    extras_require={"test": ["pytest"]},
    packages=["generic_bloom"],
    zip_safe=True,
)
