"""Utility functions and helpers for SPMShield."""

from .logging import setup_logging, get_logger
from .checksum import get_md5_checksum, get_sha1_checksum, get_sha256_checksum
from .path_utils import find_dependency_files, is_ignored_path

__all__ = [
    "setup_logging",
    "get_logger",
    "get_md5_checksum",
    "get_sha1_checksum",
    "get_sha256_checksum",
    "find_dependency_files",
    "is_ignored_path",
]
