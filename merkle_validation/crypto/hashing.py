"""
Module 02 - Hashing Utilities
Digest wrapper with leaf/internal domain separation, plus hex helpers.

This module provides:
- Hasher: leaf_hash / internal_hash over a configurable digest
- SHA-256 hashing for raw bytes
- Hex encoding/decoding with 0x prefix

Domain Separation (Hard Contract):
- leaf_hash(data)           = H(leaf_prefix || data)       default prefix 0x00
- internal_hash(left, right) = H(node_prefix || left || right) default prefix 0x01

A leaf can therefore never hash to the same value as an internal node
built from two children, so a verifier cannot be tricked into accepting
an internal node as a leaf.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from merkle_validation.config.runtime import MerkleConfig


LEAF_PREFIX: bytes = b"\x00"
NODE_PREFIX: bytes = b"\x01"

DEFAULT_ALGORITHM = "sha256"


def _blake2b_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


# name -> (wire id, digest function, digest size)
_ALGORITHMS: dict[str, tuple[int, Callable[[bytes], bytes], int]] = {
    "sha256": (0x01, lambda data: hashlib.sha256(data).digest(), 32),
    "sha3_256": (0x02, lambda data: hashlib.sha3_256(data).digest(), 32),
    "sha512": (0x03, lambda data: hashlib.sha512(data).digest(), 64),
    "blake2b": (0x04, _blake2b_256, 32),
    "blake2s": (0x05, lambda data: hashlib.blake2s(data).digest(), 32),
}

SUPPORTED_ALGORITHMS: frozenset[str] = frozenset(_ALGORITHMS)


def algorithm_id(name: str) -> int:
    """Return the one-byte wire id of a supported digest algorithm."""
    try:
        return _ALGORITHMS[name][0]
    except KeyError:
        raise ValueError(
            f"Unsupported hash algorithm: {name!r}. "
            f"Supported algorithms: {sorted(SUPPORTED_ALGORITHMS)}"
        ) from None


def algorithm_from_id(wire_id: int) -> str:
    """Return the algorithm name for a wire id, raising ValueError if unknown."""
    for name, (ident, _, _) in _ALGORITHMS.items():
        if ident == wire_id:
            return name
    raise ValueError(f"Unknown hash algorithm id: {wire_id:#04x}")


@dataclass(frozen=True)
class Hasher:
    """
    Stateless, domain-separated node hasher.

    Attributes:
        algorithm: Digest algorithm name (see SUPPORTED_ALGORITHMS)
        leaf_prefix: Bytes prepended to leaf data before hashing
        node_prefix: Bytes prepended to concatenated children before hashing

    Example:
        >>> hasher = Hasher()
        >>> len(hasher.leaf_hash(b"a"))
        32
    """
    algorithm: str = DEFAULT_ALGORITHM
    leaf_prefix: bytes = LEAF_PREFIX
    node_prefix: bytes = NODE_PREFIX

    def __post_init__(self) -> None:
        if self.algorithm not in _ALGORITHMS:
            # Raises with the supported list
            algorithm_id(self.algorithm)
        if not self.leaf_prefix or not self.node_prefix:
            raise ValueError("Leaf and node prefixes must be non-empty")
        # Neither prefix may start with the other, or a crafted leaf can
        # reproduce an internal node's preimage
        if self.leaf_prefix.startswith(self.node_prefix) or self.node_prefix.startswith(self.leaf_prefix):
            raise ValueError("Leaf and node prefixes must differ for domain separation")

    @property
    def digest_size(self) -> int:
        """Width in bytes of every node produced by this hasher."""
        return _ALGORITHMS[self.algorithm][2]

    @property
    def algorithm_id(self) -> int:
        """One-byte wire id of the digest algorithm."""
        return _ALGORITHMS[self.algorithm][0]

    def digest(self, data: bytes) -> bytes:
        """Apply the raw digest function with no prefix."""
        return _ALGORITHMS[self.algorithm][1](data)

    def leaf_hash(self, data: bytes) -> bytes:
        """Hash one leaf's bytes into a leaf node."""
        return self.digest(self.leaf_prefix + data)

    def internal_hash(self, left: bytes, right: bytes) -> bytes:
        """
        Hash two child nodes into their parent, left then right.

        Args:
            left: Left child node
            right: Right child node

        Returns:
            Parent node (digest_size bytes)
        """
        return self.digest(self.node_prefix + left + right)

    @classmethod
    def from_config(cls, config: "MerkleConfig") -> "Hasher":
        """Build a hasher using the configured digest algorithm."""
        return cls(algorithm=config.algorithm)


DEFAULT_HASHER = Hasher()


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


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
