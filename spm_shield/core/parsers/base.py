"""Base analyzer class and data models for dependency analysis."""

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from ...config import ScanConfig
from ...utils.checksum import get_md5_checksum, get_sha1_checksum, get_sha256_checksum


class Confidence(Enum):
    """Strength rating attached to evidence and identifiers."""

    HIGHEST = 4
    HIGH = 3
    MEDIUM = 2
    LOW = 1


class EvidenceType(Enum):
    """Kinds of evidence collected for a dependency."""

    VENDOR = "vendor"
    PRODUCT = "product"
    VERSION = "version"


class AnalysisError(Exception):
    """Raised when a dependency file cannot be analyzed at all."""

    def __init__(self, message: str, file_path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.file_path = file_path


@dataclass(frozen=True)
class Evidence:
    """A single provenance-tagged observation about a dependency."""

    type: EvidenceType
    source: str
    name: str
    value: str
    confidence: Confidence

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.type.value,
            "source": self.source,
            "name": self.name,
            "value": self.value,
            "confidence": self.confidence.name,
        }


@dataclass(frozen=True)
class Checksums:
    """Hex digests computed for a dependency."""

    sha1: str
    sha256: str
    md5: str

    @classmethod
    def from_text(cls, text: str) -> "Checksums":
        """Compute all three digests over a string.

        Args:
            text: Text to hash

        Returns:
            Checksums for the text
        """
        return cls(
            sha1=get_sha1_checksum(text),
            sha256=get_sha256_checksum(text),
            md5=get_md5_checksum(text),
        )


@dataclass(eq=False)
class DependencyRecord:
    """Represents one discovered unit of software."""

    file_path: Path
    actual_file: Path
    ecosystem: str = ""
    name: Optional[str] = None
    version: Optional[str] = None
    package_path: Optional[str] = None
    display_name: Optional[str] = None
    identifiers: List[Any] = field(default_factory=list)
    evidence: List[Evidence] = field(default_factory=list)
    checksums: Optional[Checksums] = None
    is_virtual: bool = False

    @classmethod
    def from_file(cls, file_path: Union[str, Path], is_virtual: bool = False) -> "DependencyRecord":
        """Create the placeholder record for a file found on disk.

        Args:
            file_path: Path to the file
            is_virtual: Whether the record is synthesized from another file

        Returns:
            New record with only location fields populated
        """
        path = Path(file_path)
        return cls(
            file_path=path,
            actual_file=path,
            display_name=path.name,
            is_virtual=is_virtual,
        )

    @property
    def file_name(self) -> str:
        return self.file_path.name

    def add_evidence(
        self,
        evidence_type: EvidenceType,
        source: str,
        name: str,
        value: str,
        confidence: Confidence,
    ) -> None:
        """Append an evidence entry. Entries are never deduplicated."""
        self.evidence.append(Evidence(evidence_type, source, name, value, confidence))

    def get_evidence(self, evidence_type: EvidenceType) -> List[Evidence]:
        """Get evidence entries of one type in the order they were added.

        Args:
            evidence_type: Type of evidence to return

        Returns:
            Matching evidence entries
        """
        return [e for e in self.evidence if e.type == evidence_type]

    def add_identifier(self, identifier: Any) -> None:
        """Attach a software identifier unless an equal one is present."""
        if identifier not in self.identifiers:
            self.identifiers.append(identifier)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view of the record."""
        return {
            "name": self.name,
            "version": self.version,
            "ecosystem": self.ecosystem,
            "display_name": self.display_name,
            "package_path": self.package_path,
            "file_path": str(self.file_path),
            "actual_file": str(self.actual_file),
            "virtual": self.is_virtual,
            "identifiers": [identifier.to_dict() for identifier in self.identifiers],
            "evidence": [e.to_dict() for e in self.evidence],
            "checksums": (
                {
                    "sha1": self.checksums.sha1,
                    "sha256": self.checksums.sha256,
                    "md5": self.checksums.md5,
                }
                if self.checksums
                else None
            ),
        }


class DependencyCollection:
    """Ordered, caller-owned set of dependency records.

    Removal is identity based so that two records describing the same
    package stay distinct. The collection does no locking; callers sharing
    one collection across threads must serialize add and remove.
    """

    def __init__(self, dependencies: Optional[List[DependencyRecord]] = None) -> None:
        self._dependencies: List[DependencyRecord] = list(dependencies or [])

    def add_dependency(self, dependency: DependencyRecord) -> None:
        """Add a dependency to the collection.

        Args:
            dependency: Record to add
        """
        self._dependencies.append(dependency)

    def remove_dependency(self, dependency: DependencyRecord) -> bool:
        """Remove a dependency from the collection.

        Args:
            dependency: Record to remove

        Returns:
            True if the record was present
        """
        for index, existing in enumerate(self._dependencies):
            if existing is dependency:
                del self._dependencies[index]
                return True
        return False

    def find_by_name(self, name: str) -> List[DependencyRecord]:
        return [dep for dep in self._dependencies if dep.name == name]

    def filter_by_ecosystem(self, ecosystem: str) -> List[DependencyRecord]:
        """Filter dependencies by ecosystem.

        Args:
            ecosystem: Ecosystem to filter by

        Returns:
            List of dependencies in the specified ecosystem
        """
        return [dep for dep in self._dependencies if dep.ecosystem == ecosystem]

    def __iter__(self) -> Iterator[DependencyRecord]:
        return iter(list(self._dependencies))

    def __len__(self) -> int:
        return len(self._dependencies)

    def __contains__(self, dependency: object) -> bool:
        return any(existing is dependency for existing in self._dependencies)


@dataclass
class AnalysisResult:
    """Outcome of analyzing one file, including which fallbacks were taken."""

    analyzer: str
    file_path: Path
    records: List[DependencyRecord] = field(default_factory=list)
    removed: List[DependencyRecord] = field(default_factory=list)
    block_found: bool = False
    name_fallback: bool = False
    identifier_fallback: bool = False


def extract_string_field(
    block: str,
    field_pattern: str,
    dependency: Optional[DependencyRecord] = None,
    evidence_type: Optional[EvidenceType] = None,
    source: Optional[str] = None,
    field_name: Optional[str] = None,
    confidence: Confidence = Confidence.HIGHEST,
) -> str:
    """Find the first quoted value assigned to a field in a block of text.

    The search is case-sensitive and tolerates whitespace around the colon:
    ``<field_pattern>\\s*:\\s*"<value>"``. The value stops at the first quote
    and is trimmed. When a dependency and evidence type are given and the
    value is non-empty, one evidence entry is recorded on the dependency.

    Args:
        block: Text to search
        field_pattern: Regular expression matching the field name
        dependency: Record that receives evidence
        evidence_type: Type of the evidence entry
        source: Evidence source, usually the file name
        field_name: Evidence field name, defaults to ``field_pattern``
        confidence: Evidence confidence

    Returns:
        The trimmed value, or an empty string when the field is absent
    """
    match = re.search(r'%s\s*:\s*"([^"]*)' % field_pattern, block, re.DOTALL)
    value = match.group(1).strip() if match else ""

    if value and dependency is not None and evidence_type is not None:
        dependency.add_evidence(
            evidence_type,
            source or dependency.file_name,
            field_name or field_pattern,
            value,
            confidence,
        )
    return value


class BaseAnalyzer(ABC):
    """Abstract base class for dependency file analyzers."""

    def __init__(self) -> None:
        """Initialize the analyzer."""
        self.name: str = ""
        self.ecosystem: str = ""
        self.parser_type: str = ""
        self.file_names: List[str] = []

    def can_analyze(self, file_path: Path) -> bool:
        """Check if this analyzer handles the given file.

        Files are matched by exact file name, never by path.

        Args:
            file_path: Path to the file to check

        Returns:
            True if analyzer can handle the file
        """
        return Path(file_path).name in self.file_names

    @abstractmethod
    def analyze(
        self,
        dependency: DependencyRecord,
        collection: DependencyCollection,
        config: Optional[ScanConfig] = None,
    ) -> AnalysisResult:
        """Analyze the file behind a placeholder dependency record.

        Args:
            dependency: Placeholder record for the file under analysis
            collection: Dependency collection the record belongs to
            config: Scan configuration

        Returns:
            Result describing the produced records

        Raises:
            AnalysisError: If the file cannot be read
        """
        pass

    def read_contents(self, file_path: Path, config: Optional[ScanConfig] = None) -> str:
        """Read a dependency file as text.

        Args:
            file_path: Path to read
            config: Scan configuration providing the size limit

        Returns:
            File contents

        Raises:
            AnalysisError: If the file is missing, unreadable, too large or
                not valid UTF-8
        """
        config = config or ScanConfig()
        file_path = Path(file_path)

        if not file_path.is_file():
            raise AnalysisError(f"File not found: {file_path}", file_path)

        if not os.access(file_path, os.R_OK):
            raise AnalysisError(f"File is not readable: {file_path}", file_path)

        try:
            size = file_path.stat().st_size
            if size > config.max_file_size_bytes:
                raise AnalysisError(
                    f"File too large: {size} bytes (max: {config.max_file_size_bytes})",
                    file_path,
                )
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise AnalysisError(
                f"Problem occurred while reading dependency file {file_path}: {e}",
                file_path,
            ) from e
