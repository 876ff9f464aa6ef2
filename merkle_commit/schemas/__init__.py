"""
Schemas & Canonicalization

Purpose: Export the error taxonomy and canonical serialization helpers.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigurationException,
    ErrorCodes,
    MerkleCommitError,
    MerkleCommitException,
    TreeError,
    TreeErrorKind,
    UnknownHashAlgorithmException,
)

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonical_equals",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigurationException",
    "ErrorCodes",
    "MerkleCommitError",
    "MerkleCommitException",
    "TreeError",
    "TreeErrorKind",
    "UnknownHashAlgorithmException",
]
