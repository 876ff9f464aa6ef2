"""
Schemas & Canonicalization
File: errors.py

Purpose: Error taxonomy for Merkle commitments.
Defines both a Pydantic model for structured error reporting
and Python exceptions for control flow.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library."""

    # Tree & Proof Errors
    TREE_EMPTY = "TREE_EMPTY"
    LEAF_EMPTY = "LEAF_EMPTY"
    PATH_LEAF_EMPTY = "PATH_LEAF_EMPTY"
    PROOF_EMPTY = "PROOF_EMPTY"

    # Hashing Errors
    UNKNOWN_HASH_ALGORITHM = "UNKNOWN_HASH_ALGORITHM"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class TreeErrorKind(str, Enum):
    """The four failure kinds a tree or proof operation can signal."""

    TREE_EMPTY = ErrorCodes.TREE_EMPTY
    LEAF_EMPTY = ErrorCodes.LEAF_EMPTY
    PATH_LEAF_EMPTY = ErrorCodes.PATH_LEAF_EMPTY
    PROOF_EMPTY = ErrorCodes.PROOF_EMPTY


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleCommitError(BaseModel):
    """
    Error model for structured error reporting.

    Lets callers pass failures around (or serialize them) without
    holding on to exception objects.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.TREE_EMPTY],
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

    def to_exception(self) -> "MerkleCommitException":
        """Convert this error model to a raisable exception."""
        if self.code in {kind.value for kind in TreeErrorKind}:
            return TreeError(
                kind=TreeErrorKind(self.code),
                message=self.message,
                details=self.details,
            )
        return MerkleCommitException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleCommitException(Exception):
    """
    Base exception for all merkle_commit errors.

    Carries structured error information and can be converted
    to/from MerkleCommitError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_COMMIT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleCommitError:
        """Convert this exception to a MerkleCommitError model."""
        return MerkleCommitError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class TreeError(MerkleCommitException):
    """
    Exception raised by tree reduction and proof folding.

    Only TREE_EMPTY is reachable through the public API; the other
    kinds guard internal invariants.
    """

    def __init__(
        self,
        kind: TreeErrorKind,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=kind.value,
            details=details,
            retryable=False,
        )
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"

    @classmethod
    def tree_empty(cls) -> "TreeError":
        return cls(TreeErrorKind.TREE_EMPTY, "Tree must contain at least a single leaf")

    @classmethod
    def leaf_empty(cls) -> "TreeError":
        return cls(TreeErrorKind.LEAF_EMPTY, "Leaves of the tree cannot be empty")

    @classmethod
    def path_leaf_not_set(cls) -> "TreeError":
        return cls(
            TreeErrorKind.PATH_LEAF_EMPTY,
            "Current path leaf must be set to analyse path",
        )

    @classmethod
    def proof_empty(cls) -> "TreeError":
        return cls(TreeErrorKind.PROOF_EMPTY, "Proof is empty")


class CanonicalizationException(MerkleCommitException):
    """Exception raised when canonical serialization fails."""

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


class UnknownHashAlgorithmException(MerkleCommitException):
    """Exception raised when a hash algorithm name is not registered."""

    def __init__(
        self,
        name: str,
        available: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {"name": name}
        if available:
            details["available"] = available
        super().__init__(
            message=f"Unknown hash algorithm: {name!r}",
            code=ErrorCodes.UNKNOWN_HASH_ALGORITHM,
            details=details,
            retryable=False,
        )


class ConfigurationException(MerkleCommitException):
    """Exception raised when runtime configuration is invalid."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
            retryable=False,
        )
