"""
Merkle Proofs Convenience Wrappers
Thin wrappers around merkle_tree for one-shot use.

This module provides class-based interfaces:
- MerkleProver: compute roots and proofs without managing a tree
- MerkleVerifier: validate raw proof components

Both accept pre-hashed leaves or raw objects; objects are turned into
leaves through canonical hashing.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence

from merkle_commit.config import default_hasher
from merkle_commit.crypto.hashing import Hasher, hash_canonical
from merkle_commit.merkle.merkle_tree import MerkleProof, MerkleTree


class MerkleProver:
    """
    Convenience class for computing roots and proofs.

    Example:
        >>> leaves = [SHA3_256.hash(b"a"), SHA3_256.hash(b"b"), SHA3_256.hash(b"c")]
        >>> proof = MerkleProver.prove(leaves, leaves[1], hasher=SHA3_256)
        >>> proof.validate(MerkleProver.compute_root(leaves, hasher=SHA3_256), leaves[1])
        True
    """

    @staticmethod
    def compute_root(leaves: Sequence[bytes], hasher: Optional[Hasher] = None) -> bytes:
        """
        Compute the Merkle root for a sequence of leaves.

        Raises:
            TreeError: TREE_EMPTY if ``leaves`` is empty
        """
        return MerkleTree(leaves, hasher=hasher).root_hash()

    @staticmethod
    def compute_root_from_objects(
        objects: Sequence[Any],
        hasher: Optional[Hasher] = None,
    ) -> bytes:
        """Compute the Merkle root for objects, canonically hashed first."""
        hasher = hasher or default_hasher()
        leaves = [hash_canonical(obj, hasher) for obj in objects]
        return MerkleTree(leaves, hasher=hasher).root_hash()

    @staticmethod
    def prove(
        leaves: Sequence[bytes],
        leaf: bytes,
        hasher: Optional[Hasher] = None,
    ) -> MerkleProof:
        """
        Generate a proof for ``leaf`` within ``leaves``.

        Raises:
            TreeError: TREE_EMPTY if ``leaves`` is empty
        """
        return MerkleTree(leaves, hasher=hasher).get_merkle_proof(leaf)

    @staticmethod
    def prove_object(
        objects: Sequence[Any],
        index: int,
        hasher: Optional[Hasher] = None,
    ) -> MerkleProof:
        """
        Generate a proof for the object at ``index``.

        Raises:
            IndexError: If index is out of range
        """
        if index < 0 or index >= len(objects):
            raise IndexError(
                f"Object index {index} out of range for {len(objects)} objects"
            )
        hasher = hasher or default_hasher()
        leaves = [hash_canonical(obj, hasher) for obj in objects]
        return MerkleTree(leaves, hasher=hasher).get_merkle_proof(leaves[index])


class MerkleVerifier:
    """
    Convenience class for validating proofs from raw components.

    Example:
        >>> MerkleVerifier.verify_leaf_in_root(leaf, siblings, root, hasher=SHA3_256)
        True
    """

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: Sequence[bytes],
        root: bytes,
        hasher: Optional[Hasher] = None,
    ) -> bool:
        """True if ``siblings`` rebuild ``root`` from ``leaf``."""
        return MerkleProof(siblings, hasher=hasher).validate(root, leaf)

    @staticmethod
    def verify_object_in_root(
        obj: Any,
        siblings: Sequence[bytes],
        root: bytes,
        hasher: Optional[Hasher] = None,
    ) -> bool:
        """Like verify_leaf_in_root, with the leaf taken as hash_canonical(obj)."""
        hasher = hasher or default_hasher()
        leaf = hash_canonical(obj, hasher)
        return MerkleVerifier.verify_leaf_in_root(leaf, siblings, root, hasher=hasher)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
