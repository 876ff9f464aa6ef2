"""
Core cryptographic utilities.

Provides the digest capability, the canonical combine rule and
the registered hash algorithms.
"""
from .hashing import (
    Hasher,
    HashAlgorithm,
    combine,
    SHA256,
    SHA3_256,
    SHA3_512,
    KECCAK256,
    get_hasher,
    register_hasher,
    available_hashers,
    sha256,
    hash_canonical,
    hash_item,
    to_hex,
    from_hex,
)

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
