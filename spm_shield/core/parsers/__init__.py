"""Dependency file analyzers for Swift Package Manager."""

from .base import (
    AnalysisError,
    AnalysisResult,
    BaseAnalyzer,
    Checksums,
    Confidence,
    DependencyCollection,
    DependencyRecord,
    Evidence,
    EvidenceType,
    extract_string_field,
)
from .swift import SwiftPackageManifestAnalyzer, SwiftPackageResolvedAnalyzer
from .registry import AnalyzerRegistry, ScanOutcome

# Register built-in analyzers
registry = AnalyzerRegistry()

registry.register("swift", "manifest", SwiftPackageManifestAnalyzer())
registry.register("swift", "resolved", SwiftPackageResolvedAnalyzer())

# Convenience exports
DependencyAnalyzer = registry
__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "AnalyzerRegistry",
    "BaseAnalyzer",
    "Checksums",
    "Confidence",
    "DependencyAnalyzer",
    "DependencyCollection",
    "DependencyRecord",
    "Evidence",
    "EvidenceType",
    "ScanOutcome",
    "SwiftPackageManifestAnalyzer",
    "SwiftPackageResolvedAnalyzer",
    "extract_string_field",
    "registry",
]
