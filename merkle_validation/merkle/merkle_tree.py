"""
Module 02 - Merkle Tree Implementation
Deterministic, layered Merkle tree construction.

This module provides:
- MerkleTree: immutable layered tree (leaf layer through root)
- build_merkle_tree / build_merkle_root: functional shortcuts
- uniform_root: root of a perfect tree of identical leaves

Commitment Rules (Hard Contracts):
1. Leaf nodes: hasher.leaf_hash(leaf)        (domain-separated, 0x00 prefix)
2. Parent nodes: hasher.internal_hash(l, r)   (domain-separated, 0x01 prefix)
3. Odd layer: the last node is paired with itself (duplicate-last)
4. Empty input: EmptyInputException, no tree is produced
5. Single leaf: root = leaf_hash(leaf), proofs are empty

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts leaves - it trusts input order
- Layers are stored as tuples and never mutated after build, so a tree
  can be shared between threads without locking
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from merkle_validation.config.runtime import get_default_config
from merkle_validation.crypto.hashing import Hasher, to_hex
from merkle_validation.merkle.indexing import compute_tree_depth  # noqa: F401  re-exported
from merkle_validation.schemas.canonical import canonical_leaf
from merkle_validation.schemas.errors import (
    EmptyInputException,
    IndexOutOfBoundsException,
    MaxDepthExceededException,
    TreeTooLargeException,
)

if TYPE_CHECKING:
    from merkle_validation.merkle.merkle_proofs import MerkleProof

logger = logging.getLogger(__name__)

# Deepest perfect tree uniform_root() will describe (2**29 leaves)
MAX_UNIFORM_DEPTH = 30


def resolve_hasher(hasher: Hasher | None) -> Hasher:
    if hasher is not None:
        return hasher
    return Hasher.from_config(get_default_config())


def _next_layer(layer: Sequence[bytes], hasher: Hasher) -> tuple[bytes, ...]:
    """Pair adjacent nodes left to right; an unmatched last node pairs with itself."""
    parents: list[bytes] = []
    for i in range(0, len(layer), 2):
        left = layer[i]
        right = layer[i + 1] if i + 1 < len(layer) else left
        parents.append(hasher.internal_hash(left, right))
    return tuple(parents)


class MerkleTree:
    """
    A Merkle tree built once from a fixed, ordered leaf set.

    Nodes are kept as an arena of layers: ``layers[0]`` holds the leaf
    nodes and ``layers[-1]`` holds only the root.

    Example:
        >>> tree = MerkleTree.build([b"a", b"b", b"c"])
        >>> tree.leaf_count, tree.depth
        (3, 3)
    """

    __slots__ = ("_layers", "_hasher")

    def __init__(self, layers: Sequence[Sequence[bytes]], hasher: Hasher) -> None:
        if not layers or len(layers[-1]) != 1:
            raise ValueError("A tree needs at least one layer and a single root node")
        self._layers: tuple[tuple[bytes, ...], ...] = tuple(tuple(layer) for layer in layers)
        self._hasher = hasher

    @classmethod
    def build(
        cls,
        leaves: Iterable[bytes],
        hasher: Hasher | None = None,
    ) -> "MerkleTree":
        """
        Build a tree from an ordered sequence of leaf byte-strings.

        Args:
            leaves: Leaf values; order defines leaf indices
            hasher: Node hasher (defaults to the configured algorithm)

        Returns:
            The complete layered tree

        Raises:
            EmptyInputException: If there are no leaves
            TreeTooLargeException: If the leaf count exceeds max_leaf_count
            TypeError: If a leaf is not bytes-like
        """
        hasher = resolve_hasher(hasher)
        leaf_list = list(leaves)

        if not leaf_list:
            raise EmptyInputException()

        max_leaf_count = get_default_config().max_leaf_count
        if len(leaf_list) > max_leaf_count:
            raise TreeTooLargeException(
                message=f"{len(leaf_list)} leaves exceeds the maximum of {max_leaf_count}",
                details={"leaf_count": len(leaf_list), "max_leaf_count": max_leaf_count},
            )

        leaf_layer: list[bytes] = []
        for i, leaf in enumerate(leaf_list):
            if not isinstance(leaf, (bytes, bytearray, memoryview)):
                raise TypeError(
                    f"Leaf {i} must be bytes-like, got {type(leaf).__name__}"
                )
            leaf_layer.append(hasher.leaf_hash(bytes(leaf)))

        layers: list[tuple[bytes, ...]] = [tuple(leaf_layer)]
        while len(layers[-1]) > 1:
            layers.append(_next_layer(layers[-1], hasher))

        tree = cls(layers, hasher)
        logger.debug(
            "Built Merkle tree: %d leaves, depth %d, root %s",
            tree.leaf_count, tree.depth, tree.root_hex,
        )
        return tree

    @classmethod
    def from_objects(
        cls,
        objects: Iterable[Any],
        hasher: Hasher | None = None,
    ) -> "MerkleTree":
        """Build a tree whose leaves are the canonical JSON of each object."""
        return cls.build([canonical_leaf(obj) for obj in objects], hasher)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def layers(self) -> tuple[tuple[bytes, ...], ...]:
        return self._layers

    @property
    def root(self) -> bytes:
        """The single node of the top layer."""
        return self._layers[-1][0]

    @property
    def root_hex(self) -> str:
        return to_hex(self.root)

    @property
    def leaf_count(self) -> int:
        return len(self._layers[0])

    @property
    def depth(self) -> int:
        """Number of layers, leaf layer and root layer included."""
        return len(self._layers)

    @property
    def height(self) -> int:
        """Number of pairing steps from leaf to root; equals proof length."""
        return len(self._layers) - 1

    def layer(self, level: int) -> tuple[bytes, ...]:
        """Return the nodes of one layer (0 = leaf layer)."""
        return self._layers[level]

    def node(self, level: int, position: int) -> bytes:
        """Return a single node by layer and position."""
        if not 0 <= level < self.depth:
            raise IndexOutOfBoundsException(
                f"Layer {level} out of range for tree of depth {self.depth}",
                index=level,
            )
        nodes = self._layers[level]
        if not 0 <= position < len(nodes):
            raise IndexOutOfBoundsException(
                f"Position {position} out of range for layer {level} of {len(nodes)} nodes",
                index=position,
                leaf_count=self.leaf_count,
            )
        return nodes[position]

    def leaf_hash(self, index: int) -> bytes:
        """Return the leaf node at ``index``."""
        return self.node(0, index)

    def proof(self, index: int) -> "MerkleProof":
        """Generate an inclusion proof for the leaf at ``index``."""
        from merkle_validation.merkle.merkle_proofs import generate_proof

        return generate_proof(self, index)

    def __len__(self) -> int:
        return self.leaf_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MerkleTree):
            return NotImplemented
        return self._hasher == other._hasher and self._layers == other._layers

    def __hash__(self) -> int:
        return hash((self._hasher, self.root))

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={self.leaf_count}, depth={self.depth}, "
            f"algorithm={self._hasher.algorithm!r}, root={self.root_hex})"
        )


def build_merkle_tree(leaves: Iterable[bytes], hasher: Hasher | None = None) -> MerkleTree:
    """Build a MerkleTree (see MerkleTree.build)."""
    return MerkleTree.build(leaves, hasher)


def build_merkle_root(leaves: Iterable[bytes], hasher: Hasher | None = None) -> bytes:
    """
    Compute only the root of a leaf sequence.

    Raises:
        EmptyInputException: If there are no leaves
    """
    return MerkleTree.build(leaves, hasher).root


def uniform_root(depth: int, leaf: bytes, hasher: Hasher | None = None) -> bytes:
    """
    Root of a perfect tree of ``2**(depth-1)`` copies of ``leaf``.

    Every node of a layer is identical, so one hash per layer is enough.
    The result equals ``build_merkle_root([leaf] * 2**(depth-1))``.

    Args:
        depth: Number of layers, 1 to MAX_UNIFORM_DEPTH
        leaf: The repeated leaf value
        hasher: Node hasher (defaults to the configured algorithm)

    Raises:
        MaxDepthExceededException: If depth > MAX_UNIFORM_DEPTH
        ValueError: If depth < 1
        TypeError: If leaf is not bytes-like
    """
    if depth > MAX_UNIFORM_DEPTH:
        raise MaxDepthExceededException(
            f"depth must be at most {MAX_UNIFORM_DEPTH}, got {depth}",
            depth=depth,
            max_depth=MAX_UNIFORM_DEPTH,
        )
    if depth < 1:
        raise ValueError(f"depth must be at least 1, got {depth}")
    if not isinstance(leaf, (bytes, bytearray, memoryview)):
        raise TypeError(f"Leaf must be bytes-like, got {type(leaf).__name__}")

    hasher = resolve_hasher(hasher)
    node = hasher.leaf_hash(bytes(leaf))
    for _ in range(depth - 1):
        node = hasher.internal_hash(node, node)
    return node


__all__ = [
    "MAX_UNIFORM_DEPTH",
    "MerkleTree",
    "build_merkle_root",
    "build_merkle_tree",
    "compute_tree_depth",
    "uniform_root",
]
