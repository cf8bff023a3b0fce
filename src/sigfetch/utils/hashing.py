"""Hashing utilities"""

import hashlib

HASH_ALGORITHMS = {
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha384": hashlib.sha384,
    "sha512": hashlib.sha512,
    "blake2b": hashlib.blake2b,
    "md5": hashlib.md5,
}


def hash_bytes(content: bytes, algorithm: str = "sha256") -> str:
    """Calculate the hex digest of in-memory content"""
    try:
        hasher = HASH_ALGORITHMS[algorithm.lower()]()
    except KeyError:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}") from None
    hasher.update(content)
    return hasher.hexdigest()
