"""Checksum helpers for synthesized dependencies."""

import hashlib


def _hexdigest(algorithm: str, text: str) -> str:
    digest = hashlib.new(algorithm)
    digest.update(text.encode("utf-8"))
    return digest.hexdigest()


def get_sha1_checksum(text: str) -> str:
    """SHA-1 hex digest of a UTF-8 encoded string."""
    return _hexdigest("sha1", text)


def get_sha256_checksum(text: str) -> str:
    """SHA-256 hex digest of a UTF-8 encoded string."""
    return _hexdigest("sha256", text)


def get_md5_checksum(text: str) -> str:
    """MD5 hex digest of a UTF-8 encoded string."""
    return _hexdigest("md5", text)
