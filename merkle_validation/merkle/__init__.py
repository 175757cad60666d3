"""
Module 02 - Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: layered tree built once from an ordered leaf set
- MerkleProof / ProofStep / Direction: self-contained inclusion proofs
- generate_proof / verify_proof / compute_root_from_proof
- encode_proof / decode_proof: binary wire format

Commitment Rules:
1. Leaf hashing: H(0x00 || leaf)
2. Parent hashing: H(0x01 || left || right)
3. Padding: Duplicate last node if odd number at any level
4. Empty input: EmptyInputException
5. Single leaf: root = leaf hash, empty proof

Usage:
    from merkle_validation.merkle import MerkleTree, verify_proof

    tree = MerkleTree.build([b"a", b"b", b"c"])
    proof = tree.proof(2)
    assert verify_proof(b"c", proof, tree.root)
"""
from .indexing import (
    compute_tree_depth,
    is_left_child,
    layer_sizes,
    parent_index,
    sibling_index,
)

from .merkle_tree import (
    MAX_UNIFORM_DEPTH,
    MerkleTree,
    build_merkle_root,
    build_merkle_tree,
    resolve_hasher,
    uniform_root,
)

from .merkle_proofs import (
    Direction,
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
    ProofStep,
    compute_root_from_proof,
    generate_proof,
    validate_proof_structure,
    verify_proof,
    verify_proof_hex,
)

from .encoding import (
    PROOF_FORMAT_VERSION,
    PROOF_MAGIC,
    decode_node,
    decode_proof,
    encode_node,
    encode_proof,
)


__all__ = [
    # Index arithmetic
    "compute_tree_depth",
    "is_left_child",
    "layer_sizes",
    "parent_index",
    "sibling_index",
    # Tree
    "MAX_UNIFORM_DEPTH",
    "MerkleTree",
    "build_merkle_root",
    "build_merkle_tree",
    "resolve_hasher",
    "uniform_root",
    # Proofs
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
    # Encoding
    "PROOF_FORMAT_VERSION",
    "PROOF_MAGIC",
    "decode_node",
    "decode_proof",
    "encode_node",
    "encode_proof",
]
