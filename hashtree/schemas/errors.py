"""
Schemas & Errors
File: errors.py

Purpose: Standard error taxonomy for hash tree construction and verification.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every error here is an input-contract violation: none of them is retryable.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction / lookup
    DEGENERATE_INPUT = "DEGENERATE_INPUT"
    POSITION_OUT_OF_RANGE = "POSITION_OUT_OF_RANGE"

    # Hashing & serialization
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Configuration
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Used by the CLI to emit errors as JSON without losing the code/details.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.DEGENERATE_INPUT],
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


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    Carries structured error information and can be converted
    to a HashTreeError model for reporting.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class DegenerateInputException(HashTreeException, ValueError):
    """Raised when a tree is built from fewer than two values."""

    def __init__(
        self,
        message: str,
        leaf_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_count is not None:
            full_details["leaf_count"] = leaf_count
        super().__init__(
            message=message,
            code=ErrorCodes.DEGENERATE_INPUT,
            details=full_details,
            retryable=False,
        )


class PositionOutOfRangeException(HashTreeException, IndexError):
    """Raised when a position does not address an existing leaf."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        leaf_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if position is not None:
            full_details["position"] = position
        if leaf_count is not None:
            full_details["leaf_count"] = leaf_count
        super().__init__(
            message=message,
            code=ErrorCodes.POSITION_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class UnsupportedAlgorithmException(HashTreeException, ValueError):
    """Raised when a hash algorithm is unknown or has no fixed digest size."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            code=ErrorCodes.UNSUPPORTED_ALGORITHM,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(HashTreeException):
    """Raised when a value has no canonical byte serialization."""

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


class ConfigException(HashTreeException):
    """Raised when a configuration source is malformed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )

