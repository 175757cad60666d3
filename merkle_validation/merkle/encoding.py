"""
Module 02 - Binary Proof Encoding
Fixed-width wire format for nodes and inclusion proofs.

Proof layout (big-endian):

    offset  size          field
    0       3             magic b"MKP"
    3       1             format version (1)
    4       1             hash algorithm wire id
    5       1             digest size in bytes
    6       2             step count n
    8       ceil(n/8)     orientation bitmap, bit i set = sibling i is LEFT
                          (LSB first within each byte, unused bits zero)
    ...     n * digest    sibling hashes, leaf level first

The header names the algorithm and width, so a decoder needs no
out-of-band knowledge to parse a proof.
"""
from __future__ import annotations

import struct

from merkle_validation.config.runtime import get_default_config
from merkle_validation.crypto.hashing import Hasher, algorithm_from_id
from merkle_validation.merkle.merkle_proofs import (
    Direction,
    MerkleProof,
    ProofStep,
    validate_proof_structure,
)
from merkle_validation.merkle.merkle_tree import resolve_hasher
from merkle_validation.schemas.errors import MalformedProofException

PROOF_MAGIC = b"MKP"
PROOF_FORMAT_VERSION = 1

_HEADER = struct.Struct(">3sBBBH")
HEADER_SIZE = _HEADER.size


def _check_node_width(data: bytes, hasher: Hasher | None) -> bytes:
    hasher = resolve_hasher(hasher)
    if len(data) != hasher.digest_size:
        raise MalformedProofException(
            f"Node must be {hasher.digest_size} bytes, got {len(data)}",
            details={"expected_size": hasher.digest_size, "actual_size": len(data)},
        )
    return bytes(data)


def encode_node(node: bytes, hasher: Hasher | None = None) -> bytes:
    """
    Return the fixed-width wire form of a node.

    Raises:
        MalformedProofException: If node is not digest_size bytes
    """
    return _check_node_width(node, hasher)


def decode_node(data: bytes, hasher: Hasher | None = None) -> bytes:
    """
    Parse a node from its wire form.

    Raises:
        MalformedProofException: If data is not digest_size bytes
    """
    return _check_node_width(data, hasher)


def encode_proof(proof: MerkleProof, hasher: Hasher | None = None) -> bytes:
    """
    Serialize a proof to the binary wire format.

    Raises:
        MalformedProofException: If the proof does not fit the format
    """
    hasher = resolve_hasher(hasher)
    validate_proof_structure(proof, hasher, min(0xFFFF, get_default_config().max_proof_length))
    count = len(proof.steps)

    bitmap = bytearray((count + 7) // 8)
    for i, step in enumerate(proof.steps):
        if step.direction == Direction.LEFT:
            bitmap[i // 8] |= 1 << (i % 8)

    header = _HEADER.pack(
        PROOF_MAGIC,
        PROOF_FORMAT_VERSION,
        hasher.algorithm_id,
        hasher.digest_size,
        count,
    )
    return header + bytes(bitmap) + b"".join(bytes(step.sibling) for step in proof.steps)


def decode_proof(data: bytes) -> tuple[MerkleProof, str]:
    """
    Parse a proof from the binary wire format.

    Args:
        data: Encoded proof

    Returns:
        (proof, algorithm name) - verify with Hasher(algorithm=name)

    Raises:
        MalformedProofException: On any structural problem
    """
    data = bytes(data)
    if len(data) < HEADER_SIZE:
        raise MalformedProofException(
            f"Proof is {len(data)} bytes, shorter than the {HEADER_SIZE}-byte header"
        )

    magic, version, wire_id, digest_size, count = _HEADER.unpack_from(data)
    if magic != PROOF_MAGIC:
        raise MalformedProofException(f"Bad proof magic {magic!r}")
    if version != PROOF_FORMAT_VERSION:
        raise MalformedProofException(
            f"Unsupported proof format version {version}",
            details={"version": version},
        )

    try:
        algorithm = algorithm_from_id(wire_id)
    except ValueError as e:
        raise MalformedProofException(str(e), details={"algorithm_id": wire_id}) from e

    hasher = Hasher(algorithm=algorithm)
    if digest_size != hasher.digest_size:
        raise MalformedProofException(
            f"Digest size {digest_size} does not match {algorithm} ({hasher.digest_size})",
        )

    max_proof_length = get_default_config().max_proof_length
    if count > max_proof_length:
        raise MalformedProofException(
            f"Proof has {count} steps, more than the maximum of {max_proof_length}",
            details={"length": count, "max_proof_length": max_proof_length},
        )

    bitmap_size = (count + 7) // 8
    expected_size = HEADER_SIZE + bitmap_size + count * digest_size
    if len(data) != expected_size:
        raise MalformedProofException(
            f"Proof is {len(data)} bytes, expected {expected_size}",
            details={"expected_size": expected_size, "actual_size": len(data)},
        )

    bitmap = data[HEADER_SIZE:HEADER_SIZE + bitmap_size]
    if count % 8 and bitmap[-1] >> (count % 8):
        raise MalformedProofException("Orientation bitmap has bits set past the last step")

    steps: list[ProofStep] = []
    offset = HEADER_SIZE + bitmap_size
    for i in range(count):
        is_left = bitmap[i // 8] >> (i % 8) & 1
        steps.append(ProofStep(
            sibling=data[offset:offset + digest_size],
            direction=Direction.LEFT if is_left else Direction.RIGHT,
        ))
        offset += digest_size

    return MerkleProof(steps=tuple(steps)), algorithm


__all__ = [
    "HEADER_SIZE",
    "PROOF_FORMAT_VERSION",
    "PROOF_MAGIC",
    "decode_node",
    "decode_proof",
    "encode_node",
    "encode_proof",
]
