"""
Merkle Tree Implementation
Deterministic root computation, proof extraction and proof validation.

This module provides:
- MerkleTree: ordered leaf container with root_hash() / get_proof()
- MerkleProof: sibling trail that validates a leaf against a root
- Level-wise reduction building blocks (reduce_level, reduce_leaves)
- compute_tree_depth for sizing

Canonical Commitment Rules (Hard Contracts):
1. Parent hashing: parent = combine(left, right) = H(max || min)
   - Implemented via merkle_commit.crypto.hashing.combine()
2. Pairing: indices (0,1), (2,3), ... at every level
3. Odd count: the trailing node is carried up unchanged (never duplicated)
4. Empty tree: root_hash() and get_proof() raise TreeError(TREE_EMPTY)
5. Single leaf: root = leaf, proof = []

Proof extraction matches the target by digest value. When several
leaves share a digest, the first one met in pass order (lowest index,
left before right) is tracked.

Queries reduce a private copy of the leaves and keep no state on the
tree, so repeated or concurrent queries do not interfere.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Iterable, Iterator, Optional, Sequence

from merkle_commit.config import default_hasher
from merkle_commit.crypto.hashing import Hasher, combine, hash_item, to_hex
from merkle_commit.schemas.errors import TreeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathState:
    """
    Sibling trail accumulated while reducing towards the root.

    Attributes:
        target: Digest currently being followed up the tree
        siblings: Siblings collected so far, bottom-up
    """
    target: Optional[bytes]
    siblings: tuple[bytes, ...] = field(default_factory=tuple)


def track_pair(path: PathState, left: bytes, right: bytes, parent: bytes) -> PathState:
    """
    Advance the path over one pairing step.

    If either child is the current target, the other child is recorded
    and the target moves to ``parent``. Otherwise the path is returned
    unchanged.

    Raises:
        TreeError: PATH_LEAF_EMPTY if the path has no target
    """
    if path.target is None:
        raise TreeError.path_leaf_not_set()

    if left == path.target:
        sibling = right
    elif right == path.target:
        sibling = left
    else:
        return path

    return PathState(target=parent, siblings=path.siblings + (sibling,))


def reduce_level(
    hasher: Hasher,
    level: Sequence[bytes],
    path: Optional[PathState] = None,
) -> tuple[list[bytes], Optional[PathState]]:
    """
    Reduce one tree level to the next.

    Consecutive pairs are combined; an odd trailing node is carried
    forward unchanged.

    Args:
        hasher: Hash capability for parent digests
        level: Digests of the current level, in order
        path: Sibling trail to advance, or None when no proof is wanted

    Returns:
        (next level, advanced path)

    Raises:
        TreeError: LEAF_EMPTY if an odd level has no trailing node,
                   PATH_LEAF_EMPTY if the path has no target
    """
    pair_count = len(level) // 2
    next_level: list[bytes] = []

    for i in range(pair_count):
        left = level[2 * i]
        right = level[2 * i + 1]
        parent = combine(hasher, left, right)
        next_level.append(parent)
        if path is not None:
            path = track_pair(path, left, right, parent)

    if len(level) % 2 == 1:
        trailing = level[2 * pair_count:]
        if not trailing:
            raise TreeError.leaf_empty()
        next_level.append(trailing[0])

    return next_level, path


def reduce_leaves(
    hasher: Hasher,
    leaves: Sequence[bytes],
    path: Optional[PathState] = None,
) -> tuple[bytes, Optional[PathState]]:
    """
    Reduce a leaf sequence to its root, level by level.

    The input sequence is copied and never modified.

    Returns:
        (root, final path)

    Raises:
        TreeError: TREE_EMPTY if ``leaves`` is empty
    """
    level = list(leaves)
    if not level:
        raise TreeError.tree_empty()

    while len(level) > 1:
        level, path = reduce_level(hasher, level, path)

    return level[0], path


def fold_proof(hasher: Hasher, digests: Sequence[bytes]) -> bytes:
    """
    Left-fold digests through combine: combine(combine(d0, d1), d2) ...

    Raises:
        TreeError: PROOF_EMPTY if ``digests`` is empty
    """
    if not digests:
        raise TreeError.proof_empty()
    return reduce(lambda acc, sibling: combine(hasher, acc, sibling), digests)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc. Carried
    nodes do not add levels of their own.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves < 0:
        raise ValueError(f"Leaf count must be non-negative, got {num_leaves}")
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


class MerkleProof:
    """
    A sibling trail for one leaf, able to validate it against a root.

    The trail carries no left/right information; the commutative
    combine rule makes it unnecessary.

    Example:
        >>> tree = MerkleTree(leaves)
        >>> proof = tree.get_merkle_proof(leaves[3])
        >>> proof.validate(tree.root_hash(), leaves[3])
        True
    """

    def __init__(self, proof: Iterable[bytes], hasher: Optional[Hasher] = None) -> None:
        self._proof: list[bytes] = [bytes(sibling) for sibling in proof]
        self._hasher = hasher if hasher is not None else default_hasher()

    @property
    def siblings(self) -> tuple[bytes, ...]:
        return tuple(self._proof)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    def __len__(self) -> int:
        return len(self._proof)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._proof)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MerkleProof):
            return self._proof == other._proof and self._hasher.name == other._hasher.name
        return NotImplemented

    def __repr__(self) -> str:
        return f"MerkleProof(len={len(self._proof)}, hasher={self._hasher.name!r})"

    def compute_root(self, leaf: bytes) -> bytes:
        """
        Recompute the root implied by this proof for ``leaf``.

        Raises:
            TreeError: PROOF_EMPTY if there is nothing to fold
        """
        return fold_proof(self._hasher, [bytes(leaf), *self._proof])

    def validate(self, root: bytes, leaf: bytes) -> bool:
        """
        Check that ``leaf`` belongs to the tree committed to by ``root``.

        Never raises TreeError: any failure while folding counts as an
        invalid proof.

        Args:
            root: Expected Merkle root
            leaf: Leaf digest being proven

        Returns:
            True if the folded proof equals ``root``
        """
        try:
            candidate = self.compute_root(leaf)
        except TreeError as e:
            logger.debug("Proof fold failed: %s", e)
            return False

        valid = candidate == root
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Validated leaf %s against root %s: %s",
                to_hex(bytes(leaf)),
                to_hex(bytes(root)),
                valid,
            )
        return valid


class MerkleTree:
    """
    Ordered sequence of leaf digests committed to by a single root.

    Attributes:
        leaves: Snapshot of the stored leaves, in order
        hasher: Hash capability used for parents

    Example:
        >>> tree = MerkleTree(hasher=SHA3_256)
        >>> for item in (b"0", b"1", b"2"):
        ...     tree.append(SHA3_256.hash(item))
        >>> root = tree.root_hash()
    """

    def __init__(
        self,
        leaves: Iterable[bytes] = (),
        hasher: Optional[Hasher] = None,
    ) -> None:
        self._hasher = hasher if hasher is not None else default_hasher()
        self._leaves: list[bytes] = []
        for leaf in leaves:
            self.append(leaf)

    @classmethod
    def from_leaves(
        cls,
        leaves: Iterable[bytes],
        hasher: Optional[Hasher] = None,
    ) -> "MerkleTree":
        """Build a tree from already-hashed leaves."""
        return cls(leaves, hasher=hasher)

    @classmethod
    def from_items(
        cls,
        items: Iterable[Any],
        hasher: Optional[Hasher] = None,
    ) -> "MerkleTree":
        """
        Build a tree from raw items.

        ``bytes`` items are hashed directly; any other item is hashed
        through its canonical JSON form.
        """
        hasher = hasher if hasher is not None else default_hasher()
        return cls((hash_item(item, hasher) for item in items), hasher=hasher)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return tuple(self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={len(self._leaves)}, hasher={self._hasher.name!r})"

    def append(self, leaf: bytes) -> None:
        """
        Append a leaf digest to the tree.

        Raises:
            TypeError: If ``leaf`` is not bytes-like
            ValueError: If ``leaf`` is not exactly one digest long
        """
        if not isinstance(leaf, (bytes, bytearray, memoryview)):
            raise TypeError(f"Leaf must be bytes, got {type(leaf).__name__}")
        leaf = bytes(leaf)
        if len(leaf) != self._hasher.digest_size:
            raise ValueError(
                f"Leaf must be {self._hasher.digest_size} bytes for "
                f"{self._hasher.name}, got {len(leaf)}"
            )
        self._leaves.append(leaf)

    def root_hash(self) -> bytes:
        """
        Compute the root digest.

        Raises:
            TreeError: TREE_EMPTY if the tree has no leaves
        """
        root, _ = reduce_leaves(self._hasher, self._leaves)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Reduced %d leaves to root %s", len(self._leaves), to_hex(root))
        return root

    def get_proof(self, leaf: bytes) -> list[bytes]:
        """
        Collect the siblings needed to rebuild the root from ``leaf``.

        A leaf that is not in the tree yields whatever trail was met,
        which is empty and will not validate against a multi-leaf root.

        Returns:
            Sibling digests, bottom-up

        Raises:
            TreeError: TREE_EMPTY if the tree has no leaves
        """
        _, path = reduce_leaves(self._hasher, self._leaves, PathState(target=bytes(leaf)))
        siblings = list(path.siblings) if path is not None else []
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Extracted %d-sibling proof for leaf %s", len(siblings), to_hex(bytes(leaf))
            )
        return siblings

    def get_merkle_proof(self, leaf: bytes) -> MerkleProof:
        """Like get_proof(), wrapped in a MerkleProof bound to this tree's hasher."""
        return MerkleProof(self.get_proof(leaf), hasher=self._hasher)


__all__ = [
    "PathState",
    "track_pair",
    "reduce_level",
    "reduce_leaves",
    "fold_proof",
    "compute_tree_depth",
    "MerkleProof",
    "MerkleTree",
]
