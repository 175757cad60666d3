"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for tree construction, proof generation and
proof verification. Defines both Pydantic models for structured error
communication and Python exceptions for control flow.

A verification mismatch is not an error: verify functions return False.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    TREE_TOO_LARGE = "TREE_TOO_LARGE"
    MAX_DEPTH_EXCEEDED = "MAX_DEPTH_EXCEEDED"

    # Proof Errors
    INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Leaf Encoding Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Error model for structured error communication.

    Carried inside a failed Result so callers can branch on ``code``
    without catching exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to the matching exception."""
        exc_cls = _EXCEPTIONS_BY_CODE.get(self.code, MerkleException)
        exc = MerkleException.__new__(exc_cls)
        MerkleException.__init__(
            exc,
            message=self.message,
            code=self.code,
            details=dict(self.details),
            retryable=self.retryable,
        )
        return exc


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle library errors.

    This exception carries structured error information and can be
    converted to/from MerkleError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(MerkleException):
    """Raised when a tree is built from zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty leaf sequence",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class IndexOutOfBoundsException(MerkleException, IndexError):
    """Raised when a proof is requested for a leaf index outside the tree."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        leaf_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        if leaf_count is not None:
            full_details["leaf_count"] = leaf_count
        super().__init__(
            message=message,
            code=ErrorCodes.INDEX_OUT_OF_BOUNDS,
            details=full_details,
            retryable=False,
        )


class MalformedProofException(MerkleException, ValueError):
    """Raised when a proof's structure is invalid and cannot be verified."""

    def __init__(
        self,
        message: str,
        step: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if step is not None:
            full_details["step"] = step
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )


class MaxDepthExceededException(MerkleException):
    """Raised when a requested tree depth is above the supported maximum."""

    def __init__(
        self,
        message: str,
        depth: int | None = None,
        max_depth: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if depth is not None:
            full_details["depth"] = depth
        if max_depth is not None:
            full_details["max_depth"] = max_depth
        super().__init__(
            message=message,
            code=ErrorCodes.MAX_DEPTH_EXCEEDED,
            details=full_details,
            retryable=False,
        )


class TreeTooLargeException(MerkleException):
    """Raised when the leaf count is above the configured maximum."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.TREE_TOO_LARGE,
            details=details,
            retryable=False,
        )


class CanonicalizationException(MerkleException):
    """Exception raised when canonical serialization of a leaf object fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


_EXCEPTIONS_BY_CODE: dict[str, type[MerkleException]] = {
    ErrorCodes.EMPTY_INPUT: EmptyInputException,
    ErrorCodes.INDEX_OUT_OF_BOUNDS: IndexOutOfBoundsException,
    ErrorCodes.MALFORMED_PROOF: MalformedProofException,
    ErrorCodes.MAX_DEPTH_EXCEEDED: MaxDepthExceededException,
    ErrorCodes.TREE_TOO_LARGE: TreeTooLargeException,
    ErrorCodes.CANONICALIZATION_ERROR: CanonicalizationException,
}
