"""Path utilities for finding Swift Package Manager files."""

import fnmatch
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass
class DependencyFile:
    """Represents a dependency file with metadata."""

    path: Path
    ecosystem: str
    parser_type: str

    def __post_init__(self) -> None:
        """Validate the dependency file."""
        if not self.path.exists():
            raise ValueError(f"Dependency file does not exist: {self.path}")


class PathFilter:
    """Filters paths based on patterns and rules."""

    DEFAULT_IGNORE_PATTERNS = [
        "*/.build/*",
        "*/.git/*",
        "*/.swiftpm/*",
        "*/Pods/*",
        "*/Carthage/Checkouts/*",
        "*/DerivedData/*",
        "*/node_modules/*",
    ]

    def __init__(self, ignore_patterns: Optional[List[str]] = None) -> None:
        """Initialize path filter.

        Args:
            ignore_patterns: Additional glob patterns to ignore
        """
        self.ignore_patterns = self.DEFAULT_IGNORE_PATTERNS + list(ignore_patterns or [])

    def is_ignored(self, path: Path) -> bool:
        """Check if a path should be ignored.

        Args:
            path: Path to check

        Returns:
            True if path should be ignored
        """
        # Leading slash lets "*/dir/*" match relative paths at the top level
        path_str = "/" + path.as_posix()

        for pattern in self.ignore_patterns:
            if fnmatch.fnmatch(path_str, pattern) or fnmatch.fnmatch(path.name, pattern):
                return True

        return False

    def filter_paths(self, paths: Iterator[Path]) -> Iterator[Path]:
        """Filter paths based on ignore patterns.

        Args:
            paths: Iterator of paths to filter

        Yields:
            Paths that should not be ignored
        """
        for path in paths:
            if not self.is_ignored(path):
                yield path


class DependencyFileFinder:
    """Finds Swift Package Manager files in a project directory."""

    # Files are recognized by exact name
    DEPENDENCY_PATTERNS: Dict[str, Tuple[str, str]] = {
        "Package.swift": ("swift", "manifest"),
        "Package.resolved": ("swift", "resolved"),
    }

    def __init__(self, ignore_patterns: Optional[List[str]] = None) -> None:
        """Initialize dependency file finder.

        Args:
            ignore_patterns: Additional ignore patterns
        """
        self.path_filter = PathFilter(ignore_patterns)

    def find_dependency_files(self, root_path: Path) -> List[DependencyFile]:
        """Find all dependency files in a directory tree.

        A file passed as root is returned on its own when its name matches.

        Args:
            root_path: Root directory (or single file) to search

        Returns:
            List of found dependency files, sorted by path
        """
        if not root_path.exists():
            raise ValueError(f"Root path does not exist: {root_path}")

        candidates = [root_path] if root_path.is_file() else self._walk_files(root_path)

        dependency_files = []
        for file_path in candidates:
            file_type = self.DEPENDENCY_PATTERNS.get(file_path.name)
            if file_type is None:
                continue
            ecosystem, parser_type = file_type
            dependency_files.append(
                DependencyFile(path=file_path, ecosystem=ecosystem, parser_type=parser_type)
            )

        return sorted(dependency_files, key=lambda dep_file: dep_file.path.as_posix())

    def _walk_files(self, root_path: Path) -> Iterator[Path]:
        """Walk through files in directory tree.

        Args:
            root_path: Root directory to walk

        Yields:
            File paths that are not ignored
        """
        for file_path in root_path.rglob("*"):
            if file_path.is_file() and not self.path_filter.is_ignored(file_path):
                yield file_path


def find_dependency_files(
    root_path: Path,
    ignore_patterns: Optional[List[str]] = None
) -> List[DependencyFile]:
    """Convenience function to find dependency files.

    Args:
        root_path: Root directory to search
        ignore_patterns: Additional ignore patterns

    Returns:
        List of found dependency files
    """
    finder = DependencyFileFinder(ignore_patterns)
    return finder.find_dependency_files(root_path)


def is_ignored_path(path: Path, ignore_patterns: Optional[List[str]] = None) -> bool:
    """Check if a path should be ignored.

    Args:
        path: Path to check
        ignore_patterns: Additional ignore patterns

    Returns:
        True if path should be ignored
    """
    return PathFilter(ignore_patterns).is_ignored(path)
