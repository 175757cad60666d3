"""
Core cryptographic utilities.

Module 02 provides the domain-separated Hasher and hex helpers.
"""
from .hashing import (
    DEFAULT_ALGORITHM,
    DEFAULT_HASHER,
    Hasher,
    LEAF_PREFIX,
    NODE_PREFIX,
    SUPPORTED_ALGORITHMS,
    algorithm_from_id,
    algorithm_id,
    from_hex,
    sha256,
    to_hex,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_HASHER",
    "Hasher",
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "SUPPORTED_ALGORITHMS",
    "algorithm_from_id",
    "algorithm_id",
    "from_hex",
    "sha256",
    "to_hex",
]
