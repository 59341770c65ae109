"""Swift Package Manager analyzers for Package.swift and Package.resolved."""

import re
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ...config import ScanConfig
from ...utils.logging import get_logger
from ..identifiers import build_identifier
from .base import (
    AnalysisResult,
    BaseAnalyzer,
    Checksums,
    Confidence,
    DependencyCollection,
    DependencyRecord,
    EvidenceType,
    extract_string_field,
)

DEPENDENCY_ECOSYSTEM = "swift"
PURL_TYPE = "swift"

SPM_FILE_NAME = "Package.swift"
SPM_RESOLVED_FILE_NAME = "Package.resolved"

# Ends at the opening parenthesis of e.g. `let package = Package( name: "Gloss" )`.
# Every repetition is bounded by a single token.
SPM_DECLARATION_PATTERN = re.compile(
    r"\blet\s+\w+(?:\s*:\s*[\w.]+)?\s*=\s*Package\s*\("
)

# Groups 1 and 2 are the raw package and version values of one pin.
# Field lines are anchored at line start and never cross a newline.
SPM_RESOLVED_BLOCK_PATTERN = re.compile(
    r'^[ \t]*"package":[ \t]*([^\n]*),\n'
    r'\s*"repositoryURL":[ \t]*[^\n]*,\n'
    r'(?:[^\n]*\n)?'
    r'\s*"branch":[ \t]*[^\n]*,\n'
    r'\s*"revision":[ \t]*[^\n]*,\n'
    r'\s*"version":[ \t]*([^\n]*)',
    re.MULTILINE,
)

_LEADING_QUOTE = re.compile(r'^"')
_TRAILING_QUOTE = re.compile(r'"$')


def unquote(value: str) -> str:
    """Strip one leading and one trailing double quote. No unescaping."""
    return _TRAILING_QUOTE.sub("", _LEADING_QUOTE.sub("", value))


def find_package_description(contents: str) -> Optional[str]:
    """Return the argument list of the first ``Package(...)`` declaration.

    The list runs to the first closing parenthesis and has leading
    whitespace removed. None means no complete declaration was found.
    """
    declaration = SPM_DECLARATION_PATTERN.search(contents)
    if not declaration:
        return None

    end = contents.find(")", declaration.end())
    if end < 0:
        # No later declaration can be closed either
        return None
    return contents[declaration.end():end].lstrip()


def _trim_version(value: str) -> str:
    value = value.rstrip(" \t")
    if value.endswith(","):
        value = value[:-1]
    return value


def _parent_path(file_path: Path) -> Optional[str]:
    parent = Path(file_path).parent
    if str(parent) in ("", ".") and not Path(file_path).is_absolute():
        return None
    return str(parent)


class SwiftPackageManifestAnalyzer(BaseAnalyzer):
    """Collects the package's own identity from Package.swift files."""

    def __init__(self) -> None:
        """Initialize the Package.swift analyzer."""
        super().__init__()
        self.name = "SWIFT Package Manager Analyzer"
        self.ecosystem = DEPENDENCY_ECOSYSTEM
        self.parser_type = "manifest"
        self.file_names = [SPM_FILE_NAME]
        self.logger = get_logger("spm_shield.parsers.swift")

    def analyze(
        self,
        dependency: DependencyRecord,
        collection: DependencyCollection,
        config: Optional[ScanConfig] = None,
    ) -> AnalysisResult:
        """Analyze a Package.swift file and update its record in place.

        Args:
            dependency: Record for the Package.swift file
            collection: Dependency collection, left unchanged
            config: Scan configuration

        Returns:
            Analysis result

        Raises:
            AnalysisError: If the file cannot be read
        """
        contents = self.read_contents(dependency.actual_file, config)
        return self.extract(dependency, contents)

    def extract(self, dependency: DependencyRecord, contents: str) -> AnalysisResult:
        """Populate a record from the text of a Package.swift file.

        Args:
            dependency: Record to update
            contents: Manifest text

        Returns:
            Analysis result noting whether the block was found and which
            fallbacks were used
        """
        result = AnalysisResult(analyzer=self.name, file_path=dependency.file_path)
        dependency.ecosystem = DEPENDENCY_ECOSYSTEM

        package_description = find_package_description(contents)
        if package_description is None:
            self.logger.debug(f"No package declaration found in {dependency.file_path}")
            return result

        result.block_found = True
        if not package_description:
            return result

        name = extract_string_field(
            package_description,
            "name",
            dependency=dependency,
            evidence_type=EvidenceType.PRODUCT,
            source=SPM_FILE_NAME,
            field_name="name",
        )
        if name:
            dependency.add_evidence(
                EvidenceType.VENDOR, SPM_FILE_NAME, "name_project", name, Confidence.HIGHEST
            )
            dependency.name = name
        else:
            # Without a declared name, the package is named after its directory
            dependency.name = Path(dependency.actual_file).absolute().parent.name
            result.name_fallback = True

        if dependency.version:
            dependency.display_name = f"{dependency.name}:{dependency.version}"
        else:
            dependency.display_name = dependency.name

        identifier = build_identifier(PURL_TYPE, dependency.name, dependency.version or None)
        dependency.add_identifier(identifier)
        result.identifier_fallback = identifier.is_fallback

        package_path = _parent_path(dependency.file_path)
        if package_path is not None:
            dependency.package_path = package_path

        self.logger.debug(f"Found package {dependency.display_name} in {dependency.file_path}")
        result.records.append(dependency)
        return result


class SwiftPackageResolvedAnalyzer(BaseAnalyzer):
    """Synthesizes one dependency per pin in Package.resolved files."""

    def __init__(self) -> None:
        """Initialize the Package.resolved analyzer."""
        super().__init__()
        self.name = "SWIFT Package Resolved Analyzer"
        self.ecosystem = DEPENDENCY_ECOSYSTEM
        self.parser_type = "resolved"
        self.file_names = [SPM_RESOLVED_FILE_NAME]
        self.logger = get_logger("spm_shield.parsers.swift")

    def analyze(
        self,
        dependency: DependencyRecord,
        collection: DependencyCollection,
        config: Optional[ScanConfig] = None,
    ) -> AnalysisResult:
        """Replace the Package.resolved record with one record per pin.

        The lock file's own record is removed from the collection before
        reading, since the lock file is not itself a shippable dependency.

        Args:
            dependency: Record for the Package.resolved file
            collection: Dependency collection to update
            config: Scan configuration

        Returns:
            Analysis result listing the added and removed records

        Raises:
            AnalysisError: If the file cannot be read
        """
        result = AnalysisResult(analyzer=self.name, file_path=dependency.file_path)
        if collection.remove_dependency(dependency):
            result.removed.append(dependency)

        contents = self.read_contents(dependency.actual_file, config)

        for record in self.extract(dependency, contents):
            collection.add_dependency(record)
            result.records.append(record)

        self.logger.debug(
            f"Found {len(result.records)} resolved packages in {dependency.file_path}"
        )
        return result

    def extract(self, resolved: DependencyRecord, contents: str) -> List[DependencyRecord]:
        """Build dependency records from the text of a Package.resolved file.

        Args:
            resolved: Record for the Package.resolved file
            contents: Lock file text

        Returns:
            One record per pin, in file order
        """
        return [
            self._create_dependency(resolved, name, version)
            for name, version in self.iter_pins(contents)
        ]

    def iter_pins(self, contents: str) -> Iterator[Tuple[str, str]]:
        """Yield unquoted (name, version) pairs in the order they appear.

        Pins whose fields are not in package, repositoryURL, branch,
        revision, version order are skipped.
        """
        for match in SPM_RESOLVED_BLOCK_PATTERN.finditer(contents):
            yield unquote(match.group(1)), unquote(_trim_version(match.group(2)))

    def _create_dependency(
        self, resolved: DependencyRecord, name: str, version: str
    ) -> DependencyRecord:
        dependency = DependencyRecord.from_file(resolved.actual_file, is_virtual=True)
        dependency.ecosystem = DEPENDENCY_ECOSYSTEM
        dependency.name = name
        dependency.version = version

        package_path = f"{name}:{version}"
        dependency.package_path = package_path
        dependency.display_name = package_path
        dependency.checksums = Checksums.from_text(package_path)

        dependency.add_evidence(
            EvidenceType.VENDOR, SPM_RESOLVED_FILE_NAME, "name", name, Confidence.HIGHEST
        )
        dependency.add_evidence(
            EvidenceType.PRODUCT, SPM_RESOLVED_FILE_NAME, "name", name, Confidence.HIGHEST
        )
        dependency.add_evidence(
            EvidenceType.VERSION, SPM_RESOLVED_FILE_NAME, "version", version, Confidence.HIGHEST
        )
        dependency.add_identifier(build_identifier(PURL_TYPE, name, version or None))
        return dependency
