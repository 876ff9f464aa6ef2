"""
Hashing Utilities
Digest capability, canonical combine rule and concrete hash algorithms.

This module provides:
- Hasher: structural contract every hash function must satisfy
- HashAlgorithm: a named, fixed-size hash function
- combine: canonical commutative parent hashing
- Registered algorithms: sha256, sha3_256, sha3_512, keccak256
- Canonical hashing for structured items (via dumps_canonical)
- Hex encoding/decoding with 0x prefix

Digests are plain ``bytes``: immutable, comparable and totally ordered
(lexicographically), which is all the tree needs from them.

Combine rule (hard contract):
    combine(a, b) = H(max(a, b) || min(a, b))

The rule drops any dependency on which operand was the left or right
child, so a verifier can fold a proof without position information.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from Crypto.Hash import keccak

from merkle_commit.schemas.canonical import dumps_canonical
from merkle_commit.schemas.errors import UnknownHashAlgorithmException


@runtime_checkable
class Hasher(Protocol):
    """
    Anything that can turn bytes into a fixed-size digest.

    Implementations must be deterministic. Collision resistance is
    assumed, never checked here.
    """

    name: str
    digest_size: int

    def hash(self, data: bytes) -> bytes:
        ...


def combine(hasher: Hasher, left: bytes, right: bytes) -> bytes:
    """
    Compute the parent digest of two child digests.

    The greater digest is always concatenated first, so
    ``combine(h, a, b) == combine(h, b, a)``.

    Args:
        hasher: Hash capability used for the parent
        left: Structurally-left child digest
        right: Structurally-right child digest

    Returns:
        Parent digest
    """
    if left <= right:
        return hasher.hash(right + left)
    return hasher.hash(left + right)


@dataclass(frozen=True)
class HashAlgorithm:
    """
    A named hash function with a fixed digest size.

    Different algorithms are different instances of this class, not
    subclasses.

    Attributes:
        name: Registry name (e.g. "sha3_256")
        digest_size: Output length in bytes
        function: The underlying ``bytes -> bytes`` function
    """
    name: str
    digest_size: int
    function: Callable[[bytes], bytes]

    def hash(self, data: bytes) -> bytes:
        return self.function(bytes(data))

    def combine(self, left: bytes, right: bytes) -> bytes:
        return combine(self, left, right)

    def __repr__(self) -> str:
        return f"HashAlgorithm(name={self.name!r}, digest_size={self.digest_size})"


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def _sha3_256(data: bytes) -> bytes:
    return hashlib.sha3_256(data).digest()


def _sha3_512(data: bytes) -> bytes:
    return hashlib.sha3_512(data).digest()


def _keccak256(data: bytes) -> bytes:
    # Original Keccak padding (Ethereum), not FIPS 202 SHA3.
    return keccak.new(digest_bits=256, data=data).digest()


SHA256 = HashAlgorithm(name="sha256", digest_size=32, function=_sha256)
SHA3_256 = HashAlgorithm(name="sha3_256", digest_size=32, function=_sha3_256)
SHA3_512 = HashAlgorithm(name="sha3_512", digest_size=64, function=_sha3_512)
KECCAK256 = HashAlgorithm(name="keccak256", digest_size=32, function=_keccak256)

_REGISTRY: dict[str, Hasher] = {
    algorithm.name: algorithm
    for algorithm in (SHA256, SHA3_256, SHA3_512, KECCAK256)
}


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def get_hasher(name: str) -> Hasher:
    """
    Look up a registered hash algorithm by name.

    Lookup ignores case and treats "-" and "_" alike, so "SHA3-256"
    resolves to SHA3_256.

    Raises:
        UnknownHashAlgorithmException: If no algorithm has that name
    """
    try:
        return _REGISTRY[_normalize_name(name)]
    except KeyError:
        raise UnknownHashAlgorithmException(name, available=available_hashers()) from None


def register_hasher(hasher: Hasher) -> None:
    """Register a custom hasher under its ``name``, replacing any previous entry."""
    if not isinstance(hasher, Hasher):
        raise TypeError(f"{hasher!r} does not satisfy the Hasher protocol")
    _REGISTRY[_normalize_name(hasher.name)] = hasher


def available_hashers() -> list[str]:
    """Sorted names of all registered algorithms."""
    return sorted(_REGISTRY)


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return SHA256.hash(data)


def hash_canonical(obj: Any, hasher: Optional[Hasher] = None) -> bytes:
    """
    Hash a structured item via its canonical JSON form.

    This is the standard way to turn a record into a Merkle leaf:
    leaf = H(dumps_canonical(obj).encode("utf-8"))

    Args:
        obj: Any canonically serializable object
             (Pydantic model, dict, list, primitives)
        hasher: Hash algorithm; defaults to the configured algorithm

    Returns:
        Leaf digest

    Raises:
        CanonicalizationException: If the object cannot be serialized
    """
    if hasher is None:
        from merkle_commit.config import default_hasher
        hasher = default_hasher()
    return hasher.hash(dumps_canonical(obj).encode("utf-8"))


def hash_item(item: Any, hasher: Hasher) -> bytes:
    """Hash raw ``bytes`` directly; anything else goes through hash_canonical."""
    if isinstance(item, (bytes, bytearray, memoryview)):
        return hasher.hash(bytes(item))
    return hash_canonical(item, hasher)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a 0x-prefixed hexadecimal string to bytes.

    Raises:
        ValueError: If the prefix is missing, the length is odd,
                    or the string holds invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]
    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "Hasher",
    "HashAlgorithm",
    "combine",
    "SHA256",
    "SHA3_256",
    "SHA3_512",
    "KECCAK256",
    "get_hasher",
    "register_hasher",
    "available_hashers",
    "sha256",
    "hash_canonical",
    "hash_item",
    "to_hex",
    "from_hex",
]
