"""Content fingerprints used to detect stale cache entries."""

import hashlib


def compute_hash(data: bytes, algorithm: str = "sha256") -> str:
    """Compute hash of bytes data.

    Args:
        data: Bytes to hash
        algorithm: Hash algorithm to use

    Returns:
        Hex digest of the hash
    """
    hasher = hashlib.new(algorithm)
    hasher.update(data)
    return hasher.hexdigest()


def text_fingerprint(text: str, length: int = 16) -> str:
    """Short, stable fingerprint of a document's text.

    Args:
        text: Document text
        length: Length of the returned digest

    Returns:
        Truncated hex digest
    """
    return compute_hash(text.encode("utf-8"))[:length]
