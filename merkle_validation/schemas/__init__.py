"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module: error taxonomy,
result type and canonical leaf encoding. The JSON proof document lives
in schemas.proof, which depends on the merkle package.
"""

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    EmptyInputException,
    ErrorCodes,
    IndexOutOfBoundsException,
    MalformedProofException,
    MaxDepthExceededException,
    MerkleError,
    MerkleException,
    TreeTooLargeException,
)

# Result type
from .results import Result

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_leaf,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)

__all__ = [
    # Errors
    "CanonicalizationException",
    "EmptyInputException",
    "ErrorCodes",
    "IndexOutOfBoundsException",
    "MalformedProofException",
    "MaxDepthExceededException",
    "MerkleError",
    "MerkleException",
    "TreeTooLargeException",
    # Results
    "Result",
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_leaf",
    "canonicalize_value",
    "dumps_canonical",
    "format_datetime_canonical",
]
