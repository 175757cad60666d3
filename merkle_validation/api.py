"""
Module 04 - Public Contract
Result-returning entry points.

Every fallible operation returns a Result instead of raising, so callers
branch on ``result.ok`` / ``result.code``:

    result = build([b"a", b"b", b"c"])
    if not result.ok:
        ...  # result.code == ErrorCodes.EMPTY_INPUT
    tree = result.unwrap()

    proof = generate_proof(tree, 2).unwrap()
    verify_proof(b"c", proof, root(tree)).unwrap()   # True

A failed verification is ``Result.success(False)``, not an error; only a
structurally malformed proof yields a failed Result.
"""
from __future__ import annotations

from typing import Iterable

from merkle_validation.crypto.hashing import Hasher
from merkle_validation.merkle import merkle_proofs
from merkle_validation.merkle.encoding import decode_proof as _decode_proof
from merkle_validation.merkle.encoding import encode_proof as _encode_proof
from merkle_validation.merkle.merkle_proofs import MerkleProof
from merkle_validation.merkle.merkle_tree import MerkleTree
from merkle_validation.schemas.results import Result


def build(leaves: Iterable[bytes], hasher: Hasher | None = None) -> Result[MerkleTree]:
    """Build a tree; fails with EMPTY_INPUT or TREE_TOO_LARGE."""
    return Result.capture(MerkleTree.build, leaves, hasher)


def root(tree: MerkleTree) -> bytes:
    """Root node of a built tree."""
    return tree.root


def generate_proof(tree: MerkleTree, index: int) -> Result[MerkleProof]:
    """Prove the leaf at index; fails with INDEX_OUT_OF_BOUNDS."""
    return Result.capture(merkle_proofs.generate_proof, tree, index)


def verify_proof(
    leaf: bytes,
    proof: MerkleProof,
    expected_root: bytes,
    hasher: Hasher | None = None,
) -> Result[bool]:
    """Verify an inclusion proof; fails only with MALFORMED_PROOF."""
    return Result.capture(merkle_proofs.verify_proof, leaf, proof, expected_root, hasher)


def encode_proof(proof: MerkleProof, hasher: Hasher | None = None) -> Result[bytes]:
    """Serialize a proof to the binary wire format."""
    return Result.capture(_encode_proof, proof, hasher)


def decode_proof(data: bytes) -> Result[tuple[MerkleProof, str]]:
    """Parse a binary proof into (proof, algorithm name)."""
    return Result.capture(_decode_proof, data)


__all__ = [
    "build",
    "decode_proof",
    "encode_proof",
    "generate_proof",
    "root",
    "verify_proof",
]
