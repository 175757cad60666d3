"""
Module 01 - Schemas
File: results.py

Purpose: Explicit success/failure result type for fallible operations.

A Result holds either a value or a MerkleError, never both. It lets
callers branch on the error code instead of catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from .errors import MerkleError, MerkleException

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a fallible operation.

    Attributes:
        value: The successful value (None on failure)
        error: The structured error (None on success)
    """
    value: T | None = None
    error: MerkleError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise ValueError("A Result cannot carry both a value and an error")

    @property
    def ok(self) -> bool:
        """True if the operation succeeded."""
        return self.error is None

    @property
    def code(self) -> str | None:
        """Error code of a failed result, None on success."""
        return self.error.code if self.error is not None else None

    def unwrap(self) -> T:
        """
        Return the value or raise the exception form of the error.

        Raises:
            MerkleException: The matching subclass for the error code
        """
        if self.error is not None:
            raise self.error.to_exception()
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        """Return the value, or default if the result is a failure."""
        if self.error is not None:
            return default
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def failure(cls, error: MerkleError | MerkleException) -> "Result[T]":
        """Create a failed result from an error model or exception."""
        if isinstance(error, MerkleException):
            error = error.to_error_model()
        return cls(error=error)

    @classmethod
    def capture(cls, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Result[T]":
        """
        Call fn and wrap its outcome.

        Only MerkleException is converted into a failed result; any other
        exception propagates.
        """
        try:
            return cls.success(fn(*args, **kwargs))
        except MerkleException as e:
            return cls.failure(e)


__all__ = ["Result"]
