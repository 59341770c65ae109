"""Registry dispatching dependency files to their analyzers."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ...config import ScanConfig
from ...utils.logging import get_logger
from .base import AnalysisError, AnalysisResult, BaseAnalyzer, DependencyCollection, DependencyRecord


@dataclass
class ScanOutcome:
    """Results of analyzing a batch of files."""

    results: List[AnalysisResult] = field(default_factory=list)
    failures: List[Tuple[Path, AnalysisError]] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)


class AnalyzerRegistry:
    """Registry for dependency file analyzers."""

    def __init__(self) -> None:
        """Initialize the analyzer registry."""
        self._analyzers: Dict[Tuple[str, str], BaseAnalyzer] = {}
        self._ecosystem_analyzers: Dict[str, List[BaseAnalyzer]] = {}
        self.logger = get_logger("spm_shield.registry")

    def register(self, ecosystem: str, parser_type: str, analyzer: BaseAnalyzer) -> None:
        """Register an analyzer for an ecosystem and type.

        Args:
            ecosystem: Ecosystem name (e.g., 'swift')
            parser_type: Parser type (e.g., 'manifest', 'resolved')
            analyzer: Analyzer instance to register
        """
        key = (ecosystem, parser_type)
        self._analyzers[key] = analyzer
        self._ecosystem_analyzers.setdefault(ecosystem, []).append(analyzer)

    def get_analyzer(self, ecosystem: str, parser_type: str) -> Optional[BaseAnalyzer]:
        """Get the analyzer for the specified ecosystem and type.

        Args:
            ecosystem: Ecosystem name
            parser_type: Parser type

        Returns:
            Analyzer instance or None if not found
        """
        return self._analyzers.get((ecosystem, parser_type))

    def find_analyzer_for_file(self, file_path: Path) -> Optional[BaseAnalyzer]:
        """Find an analyzer that handles the given file name.

        Args:
            file_path: Path to the file

        Returns:
            Analyzer that can handle the file or None
        """
        for analyzer in self._analyzers.values():
            if analyzer.can_analyze(file_path):
                return analyzer
        return None

    def get_supported_ecosystems(self) -> List[str]:
        return list(self._ecosystem_analyzers.keys())

    def get_supported_parser_types(self) -> List[str]:
        return [parser_type for _, parser_type in self._analyzers.keys()]

    def supported_file_names(self) -> List[str]:
        """Get the exact file names the registered analyzers recognize."""
        names: List[str] = []
        for analyzer in self._analyzers.values():
            names.extend(n for n in analyzer.file_names if n not in names)
        return names

    def analyze_file(
        self,
        file_path: Path,
        collection: DependencyCollection,
        config: Optional[ScanConfig] = None,
    ) -> Optional[AnalysisResult]:
        """Analyze one file, adding its records to the collection.

        A placeholder record for the file is added to the collection first;
        the analyzer then updates or replaces it.

        Args:
            file_path: Path to the file to analyze
            collection: Collection receiving the records
            config: Scan configuration

        Returns:
            Analysis result, or None if no enabled analyzer handles the file

        Raises:
            AnalysisError: If the file cannot be read
        """
        config = config or ScanConfig()
        analyzer = self.find_analyzer_for_file(file_path)
        if analyzer is None:
            return None
        if not config.is_enabled(analyzer.parser_type):
            self.logger.debug(f"{analyzer.name} is disabled, skipping {file_path}")
            return None

        dependency = DependencyRecord.from_file(file_path)
        collection.add_dependency(dependency)
        try:
            return analyzer.analyze(dependency, collection, config)
        except AnalysisError:
            collection.remove_dependency(dependency)
            raise

    def analyze_files(
        self,
        file_paths: List[Path],
        collection: DependencyCollection,
        config: Optional[ScanConfig] = None,
    ) -> ScanOutcome:
        """Analyze multiple files, continuing past files that fail.

        Args:
            file_paths: List of file paths to analyze
            collection: Collection receiving the records
            config: Scan configuration

        Returns:
            Per-file results, failures and skipped files
        """
        outcome = ScanOutcome()
        for file_path in file_paths:
            try:
                result = self.analyze_file(file_path, collection, config)
            except AnalysisError as e:
                self.logger.error(f"Failed to analyze {file_path}: {e}")
                outcome.failures.append((file_path, e))
                continue
            if result is None:
                outcome.skipped.append(file_path)
            else:
                outcome.results.append(result)
        return outcome
