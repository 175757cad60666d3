"""
Shared test data factories.

Factories return fresh values on every call so tests can mutate them.
"""

from merkle_validation.crypto.hashing import Hasher


def make_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """Return ``count`` distinct leaves: b"leaf0", b"leaf1", ..."""
    return [f"{prefix}{i}".encode() for i in range(count)]


def make_records(count: int) -> list[dict]:
    """Return ``count`` structured records for canonical-leaf tests."""
    return [
        {"id": i, "name": f"record-{i}", "tags": ["x", "y"][: i % 3]}
        for i in range(count)
    ]


def flip_byte(data: bytes, position: int = 0) -> bytes:
    """Return data with one byte changed."""
    mutated = bytearray(data)
    mutated[position] ^= 0x01
    return bytes(mutated)


def manual_root(leaves: list[bytes], hasher: Hasher) -> bytes:
    """Reference root computed with an explicit duplicate-last loop."""
    level = [hasher.leaf_hash(leaf) for leaf in leaves]
    while len(level) > 1:
        if len(level) % 2 == 1:
            level = level + [level[-1]]
        level = [
            hasher.internal_hash(level[i], level[i + 1])
            for i in range(0, len(level), 2)
        ]
    return level[0]
