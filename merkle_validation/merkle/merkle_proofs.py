"""
Module 02 - Merkle Proofs
Inclusion proof generation and verification.

This module provides:
- ProofStep / MerkleProof: self-contained proof values
- generate_proof: walk from a leaf to the root collecting siblings
- compute_root_from_proof / verify_proof: hash upward and compare
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Orientation Rule (Hard Contract):
- Direction.LEFT:  the sibling sits left,  parent = internal_hash(sibling, current)
- Direction.RIGHT: the sibling sits right, parent = internal_hash(current, sibling)

When the path node is the unmatched last node of an odd layer, its
sibling is the node itself with Direction.RIGHT, exactly as the builder
paired it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Sequence

from merkle_validation.config.runtime import get_default_config
from merkle_validation.crypto.hashing import Hasher, from_hex, to_hex
from merkle_validation.merkle.indexing import is_left_child, parent_index, sibling_index
from merkle_validation.merkle.merkle_tree import MerkleTree, resolve_hasher
from merkle_validation.schemas.canonical import canonical_leaf
from merkle_validation.schemas.errors import (
    IndexOutOfBoundsException,
    MalformedProofException,
)

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    """Position of a proof sibling relative to the path node."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ProofStep:
    """
    One level of an inclusion proof.

    Attributes:
        sibling: Hash of the node paired with the path node at this level
        direction: Where the sibling sits relative to the path node
    """
    sibling: bytes
    direction: Direction


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    The proof carries no reference to the tree that produced it; it can
    be serialized, transmitted and verified on its own.

    Attributes:
        steps: Sibling hashes with orientation, leaf level first
    """
    steps: tuple[ProofStep, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        if not isinstance(self.steps, tuple):
            object.__setattr__(self, "steps", tuple(self.steps))

    @property
    def siblings(self) -> list[bytes]:
        return [step.sibling for step in self.steps]

    @property
    def directions(self) -> list[Direction]:
        return [step.direction for step in self.steps]

    @property
    def leaf_index(self) -> int:
        """
        Leaf position implied by the orientation sequence.

        At level i the path node is a right child exactly when its
        sibling sits to the left, which sets bit i of the index.
        """
        index = 0
        for level, step in enumerate(self.steps):
            if step.direction == Direction.LEFT:
                index |= 1 << level
        return index

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)


def generate_proof(tree: MerkleTree, index: int) -> MerkleProof:
    """
    Generate an inclusion proof for the leaf at ``index``.

    Algorithm:
    1. Start at ``index`` in the leaf layer
    2. For every layer below the root:
       - sibling = index XOR 1; if that runs past the layer end the
         node is the unmatched last node and pairs with itself
       - record the sibling hash and whether it sits left or right
       - move up: index = index // 2

    Args:
        tree: A built tree
        index: 0-based leaf index

    Returns:
        MerkleProof with tree.height steps (empty for a single leaf)

    Raises:
        IndexOutOfBoundsException: If index is outside [0, leaf_count)
        TypeError: If index is not an int
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Leaf index must be an int, got {type(index).__name__}")

    if index < 0 or index >= tree.leaf_count:
        raise IndexOutOfBoundsException(
            f"Leaf index {index} out of range for {tree.leaf_count} leaves",
            index=index,
            leaf_count=tree.leaf_count,
        )

    steps: list[ProofStep] = []
    current = index
    for layer in tree.layers[:-1]:
        sibling = sibling_index(current)
        if sibling >= len(layer):
            # Duplicate-last: the builder paired this node with itself
            sibling = current
        direction = Direction.RIGHT if is_left_child(current) else Direction.LEFT
        steps.append(ProofStep(sibling=layer[sibling], direction=direction))
        current = parent_index(current)

    logger.debug("Generated proof for leaf %d: %d steps", index, len(steps))
    return MerkleProof(steps=tuple(steps))


def validate_proof_structure(
    proof: MerkleProof,
    hasher: Hasher,
    max_proof_length: int | None = None,
) -> None:
    """
    Check that a proof is well formed before hashing with it.

    Raises:
        MalformedProofException: If the proof is longer than any plausible
            tree, a direction is not a Direction, or a sibling has the
            wrong width
    """
    if not isinstance(proof, MerkleProof):
        raise MalformedProofException(
            f"Expected a MerkleProof, got {type(proof).__name__}"
        )

    if max_proof_length is None:
        max_proof_length = get_default_config().max_proof_length
    if len(proof.steps) > max_proof_length:
        raise MalformedProofException(
            f"Proof has {len(proof.steps)} steps, more than the maximum of {max_proof_length}",
            details={"length": len(proof.steps), "max_proof_length": max_proof_length},
        )

    for i, step in enumerate(proof.steps):
        if not isinstance(step, ProofStep):
            raise MalformedProofException(
                f"Proof step {i} is not a ProofStep", step=i,
            )
        if not isinstance(step.direction, Direction):
            raise MalformedProofException(
                f"Proof step {i} has invalid orientation {step.direction!r}",
                step=i,
            )
        if not isinstance(step.sibling, (bytes, bytearray)) or len(step.sibling) != hasher.digest_size:
            raise MalformedProofException(
                f"Proof step {i} sibling must be {hasher.digest_size} bytes",
                step=i,
                details={"expected_size": hasher.digest_size},
            )


def compute_root_from_proof(
    leaf: bytes,
    proof: MerkleProof,
    hasher: Hasher | None = None,
    max_proof_length: int | None = None,
) -> bytes:
    """
    Recompute the root implied by a leaf value and its proof.

    Raises:
        MalformedProofException: If the proof structure is invalid
        TypeError: If leaf is not bytes-like
    """
    if not isinstance(leaf, (bytes, bytearray, memoryview)):
        raise TypeError(f"Leaf must be bytes-like, got {type(leaf).__name__}")
    hasher = resolve_hasher(hasher)
    validate_proof_structure(proof, hasher, max_proof_length)

    current = hasher.leaf_hash(bytes(leaf))
    for step in proof.steps:
        sibling = bytes(step.sibling)
        if step.direction == Direction.LEFT:
            current = hasher.internal_hash(sibling, current)
        else:
            current = hasher.internal_hash(current, sibling)
    return current


def verify_proof(
    leaf: bytes,
    proof: MerkleProof,
    expected_root: bytes,
    hasher: Hasher | None = None,
    max_proof_length: int | None = None,
) -> bool:
    """
    Verify that ``leaf`` is included under ``expected_root``.

    An empty proof is valid only when expected_root == leaf_hash(leaf).

    Args:
        leaf: The raw leaf value (not its hash)
        proof: Inclusion proof for the leaf
        expected_root: The trusted root node
        hasher: Must match the hasher used at build time

    Returns:
        True if the recomputed root equals expected_root, False otherwise

    Raises:
        MalformedProofException: If the proof structure is invalid
        TypeError: If leaf is not bytes-like
    """
    computed = compute_root_from_proof(leaf, proof, hasher, max_proof_length)
    if computed != bytes(expected_root):
        logger.debug(
            "Proof mismatch: computed %s, expected %s",
            to_hex(computed), to_hex(bytes(expected_root)),
        )
        return False
    return True


def verify_proof_hex(
    leaf: bytes,
    proof: MerkleProof,
    expected_root_hex: str,
    hasher: Hasher | None = None,
) -> bool:
    """
    Verify against a 0x-prefixed hex root.

    Raises:
        MalformedProofException: If the proof is invalid
        ValueError: If expected_root_hex is not valid 0x hex
    """
    return verify_proof(leaf, proof, from_hex(expected_root_hex), hasher)


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> proof.leaf_index
        1
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int, hasher: Hasher | None = None) -> MerkleProof:
        """
        Build a tree from raw leaves and prove the leaf at ``index``.

        Raises:
            EmptyInputException: If leaves is empty
            IndexOutOfBoundsException: If index is out of range
        """
        return generate_proof(MerkleTree.build(leaves, hasher), index)

    @staticmethod
    def prove_object(objects: Sequence[Any], index: int, hasher: Hasher | None = None) -> MerkleProof:
        """Prove an object whose leaf is its canonical JSON encoding."""
        return generate_proof(MerkleTree.from_objects(objects, hasher), index)

    @staticmethod
    def compute_root(leaves: Sequence[bytes], hasher: Hasher | None = None) -> bytes:
        return MerkleTree.build(leaves, hasher).root


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(
        leaf: bytes,
        proof: MerkleProof,
        root: bytes,
        hasher: Hasher | None = None,
    ) -> bool:
        return verify_proof(leaf, proof, root, hasher)

    @staticmethod
    def verify_object(
        obj: Any,
        proof: MerkleProof,
        root: bytes,
        hasher: Hasher | None = None,
    ) -> bool:
        """
        Verify an object is included in a Merkle root.

        The object is canonically serialized to produce the leaf bytes.
        """
        return verify_proof(canonical_leaf(obj), proof, root, hasher)


__all__ = [
    "Direction",
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
    "ProofStep",
    "compute_root_from_proof",
    "generate_proof",
    "validate_proof_structure",
    "verify_proof",
    "verify_proof_hex",
]
