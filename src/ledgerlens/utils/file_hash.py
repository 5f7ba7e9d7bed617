"""File hashing utilities."""

import hashlib


def generate_file_hash(data: bytes) -> str:
    """Return the lowercase hex SHA-256 digest (64 characters) of a file buffer."""
    return hashlib.sha256(data).hexdigest()
