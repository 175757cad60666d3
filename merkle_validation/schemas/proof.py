"""
Module 01 - Schemas
File: proof.py

Purpose: JSON document form of an inclusion proof, for transport between
processes that exchange text rather than the binary wire format.

Example document:
    {
      "algorithm": "sha256",
      "leaf_index": 2,
      "root": "0x...",
      "schema_version": "v1",
      "steps": [{"direction": "right", "sibling": "0x..."}, ...]
    }
"""

from __future__ import annotations

import json
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from merkle_validation.crypto.hashing import SUPPORTED_ALGORITHMS, Hasher, from_hex, to_hex
from merkle_validation.merkle.merkle_proofs import (
    Direction,
    MerkleProof,
    ProofStep,
    validate_proof_structure,
)
from merkle_validation.merkle.merkle_tree import resolve_hasher
from .canonical import dumps_canonical
from .errors import MalformedProofException

# Current proof document schema version
SCHEMA_VERSION: str = "v1"


def _check_hex(value: str) -> str:
    from_hex(value)
    return value.lower()


class ProofStepModel(BaseModel):
    """A single proof step with its sibling as 0x hex."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="Sibling node as 0x-prefixed hex")
    direction: Literal["left", "right"] = Field(
        ...,
        description="Where the sibling sits relative to the path node",
    )

    @field_validator("sibling")
    @classmethod
    def _sibling_is_hex(cls, v: str) -> str:
        return _check_hex(v)


class ProofDocument(BaseModel):
    """
    Self-describing JSON form of a MerkleProof.

    ``root`` and ``leaf_index`` are informational; verification always
    recomputes the root from the leaf and compares it to a root the
    verifier already trusts.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: Literal["v1"] = Field(default=SCHEMA_VERSION)
    algorithm: str = Field(default="sha256", description="Digest algorithm name")
    leaf_index: int | None = Field(default=None, ge=0)
    root: str | None = Field(default=None, description="Tree root as 0x hex")
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("algorithm")
    @classmethod
    def _algorithm_supported(cls, v: str) -> str:
        if v not in SUPPORTED_ALGORITHMS:
            raise ValueError(
                f"Unsupported hash algorithm: {v!r}. "
                f"Supported algorithms: {sorted(SUPPORTED_ALGORITHMS)}"
            )
        return v

    @field_validator("root")
    @classmethod
    def _root_is_hex(cls, v: str | None) -> str | None:
        return None if v is None else _check_hex(v)

    @property
    def hasher(self) -> Hasher:
        return Hasher(algorithm=self.algorithm)

    @classmethod
    def from_proof(
        cls,
        proof: MerkleProof,
        hasher: Hasher | None = None,
        root: bytes | None = None,
    ) -> "ProofDocument":
        """
        Describe a proof, optionally recording the root it was made against.

        Without a hasher the configured default algorithm is recorded.
        """
        return cls(
            algorithm=resolve_hasher(hasher).algorithm,
            leaf_index=proof.leaf_index,
            root=to_hex(root) if root is not None else None,
            steps=[
                ProofStepModel(sibling=to_hex(step.sibling), direction=step.direction.value)
                for step in proof.steps
            ],
        )

    def to_proof(self) -> MerkleProof:
        """
        Rebuild the MerkleProof described by this document.

        Raises:
            MalformedProofException: If a sibling has the wrong width
        """
        proof = MerkleProof(steps=tuple(
            ProofStep(sibling=from_hex(step.sibling), direction=Direction(step.direction))
            for step in self.steps
        ))
        validate_proof_structure(proof, self.hasher)
        return proof

    def root_bytes(self) -> bytes | None:
        return from_hex(self.root) if self.root is not None else None

    def to_json(self) -> str:
        """Canonical JSON (sorted keys, no whitespace)."""
        return dumps_canonical(self)

    @classmethod
    def from_json(cls, text: str | bytes) -> "ProofDocument":
        """
        Parse a proof document.

        Raises:
            MalformedProofException: If the text is not a valid document
        """
        try:
            return cls.model_validate(json.loads(text))
        except (ValidationError, ValueError) as e:
            raise MalformedProofException(
                f"Invalid proof document: {e}",
                details={"error": str(e)},
            ) from e


__all__ = [
    "SCHEMA_VERSION",
    "ProofDocument",
    "ProofStepModel",
]
