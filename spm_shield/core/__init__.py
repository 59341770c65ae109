"""Core analysis logic for SPMShield."""

from .parsers import DependencyAnalyzer, DependencyCollection, DependencyRecord
from .identifiers import GenericIdentifier, PurlIdentifier, build_identifier

__all__ = [
    "DependencyAnalyzer",
    "DependencyCollection",
    "DependencyRecord",
    "GenericIdentifier",
    "PurlIdentifier",
    "build_identifier",
]
