"""
Merkle Validation Library

Builds binary hash trees over an ordered leaf set, produces compact
inclusion proofs for individual leaves and verifies them against a
known root.

Sub-packages:
- crypto: domain-separated Hasher and hex helpers
- merkle: tree construction, proofs, binary encoding
- schemas: error taxonomy, Result type, canonical leaves, JSON proofs
- config: runtime configuration and logging setup
- api: Result-returning entry points

Usage:
    from merkle_validation import MerkleTree, verify_proof

    tree = MerkleTree.build([b"a", b"b", b"c"])
    assert verify_proof(b"b", tree.proof(1), tree.root)
"""

__version__ = "0.1.0"

from merkle_validation.config import MerkleConfig, get_default_config, set_default_config
from merkle_validation.crypto import DEFAULT_HASHER, Hasher, from_hex, to_hex
from merkle_validation.merkle import (
    Direction,
    MerkleProof,
    MerkleTree,
    ProofStep,
    build_merkle_root,
    build_merkle_tree,
    compute_root_from_proof,
    decode_proof,
    encode_proof,
    generate_proof,
    uniform_root,
    verify_proof,
)
from merkle_validation.schemas import (
    EmptyInputException,
    ErrorCodes,
    IndexOutOfBoundsException,
    MalformedProofException,
    MerkleError,
    MerkleException,
    Result,
)
from merkle_validation.schemas.proof import ProofDocument

__all__ = [
    "DEFAULT_HASHER",
    "Direction",
    "EmptyInputException",
    "ErrorCodes",
    "Hasher",
    "IndexOutOfBoundsException",
    "MalformedProofException",
    "MerkleConfig",
    "MerkleError",
    "MerkleException",
    "MerkleProof",
    "MerkleTree",
    "ProofDocument",
    "ProofStep",
    "Result",
    "build_merkle_root",
    "build_merkle_tree",
    "compute_root_from_proof",
    "decode_proof",
    "encode_proof",
    "from_hex",
    "generate_proof",
    "get_default_config",
    "set_default_config",
    "to_hex",
    "uniform_root",
    "verify_proof",
]
