"""SPMShield - collects Swift Package Manager dependencies for vulnerability scanning."""

__version__ = "0.1.0"
__author__ = "SPMShield Team"

from .config import ScanConfig, load_config
from .core.parsers import DependencyAnalyzer, DependencyCollection, DependencyRecord
from .core.identifiers import build_identifier
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "ScanConfig",
    "load_config",
    "DependencyAnalyzer",
    "DependencyCollection",
    "DependencyRecord",
    "build_identifier",
    "ConsoleFormatter",
    "JSONFormatter",
]
