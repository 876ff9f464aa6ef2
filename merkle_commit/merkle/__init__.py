"""
Merkle Tree and Commitments
Order-deterministic Merkle root computation + proof extraction/validation.

This module provides:
- MerkleTree: append leaves, compute the root, extract sibling trails
- MerkleProof: validate a leaf against a root with a sibling trail
- MerkleProver / MerkleVerifier: one-shot convenience wrappers

Usage:
    from merkle_commit.crypto import SHA3_256
    from merkle_commit.merkle import MerkleTree, MerkleProof

    leaves = [SHA3_256.hash(item) for item in (b"0", b"1", b"2")]
    tree = MerkleTree(leaves, hasher=SHA3_256)

    root = tree.root_hash()
    siblings = tree.get_proof(leaves[2])

    assert MerkleProof(siblings, hasher=SHA3_256).validate(root, leaves[2])
"""
from .merkle_tree import (
    MerkleProof,
    MerkleTree,
    PathState,
    compute_tree_depth,
    fold_proof,
    reduce_leaves,
    reduce_level,
    track_pair,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "MerkleProof",
    "PathState",
    # Core functions
    "reduce_level",
    "reduce_leaves",
    "track_pair",
    "fold_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
