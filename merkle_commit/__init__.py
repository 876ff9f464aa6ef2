"""
merkle_commit

Compact commitments over ordered data and per-item membership proofs.
"""
from merkle_commit.crypto import (
    KECCAK256,
    SHA256,
    SHA3_256,
    SHA3_512,
    HashAlgorithm,
    Hasher,
    combine,
    get_hasher,
)
from merkle_commit.merkle import MerkleProof, MerkleProver, MerkleTree, MerkleVerifier
from merkle_commit.schemas.errors import MerkleCommitException, TreeError, TreeErrorKind

__version__ = "0.1.0"

__all__ = [
    "KECCAK256",
    "SHA256",
    "SHA3_256",
    "SHA3_512",
    "HashAlgorithm",
    "Hasher",
    "combine",
    "get_hasher",
    "MerkleProof",
    "MerkleProver",
    "MerkleTree",
    "MerkleVerifier",
    "MerkleCommitException",
    "TreeError",
    "TreeErrorKind",
]
