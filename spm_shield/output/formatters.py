"""Output formatters for SPMShield results."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..core.parsers import AnalysisError, DependencyRecord
from ..utils.logging import get_logger

Failure = Tuple[Path, AnalysisError]


class ConsoleFormatter:
    """Rich console formatter for SPMShield output."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()

    def format_records(
        self,
        records: Sequence[DependencyRecord],
        failures: Sequence[Failure] = (),
        scan_time: float = 0.0,
    ) -> None:
        """Display discovered dependencies.

        Args:
            records: Dependency records to display
            failures: Files that could not be analyzed
            scan_time: Time taken for scan in seconds
        """
        self.console.print(self._create_summary_panel(records, failures, scan_time))

        if records:
            self.console.print(self._create_dependencies_table(records))
        else:
            self.console.print(Panel("No Swift packages found", style="yellow"))

        for file_path, error in failures:
            self.console.print(f"[red]✗ {escape(str(file_path))}: {escape(str(error))}[/red]")

    def _create_summary_panel(
        self,
        records: Sequence[DependencyRecord],
        failures: Sequence[Failure],
        scan_time: float,
    ) -> Panel:
        """Create summary panel.

        Args:
            records: Dependency records found
            failures: Files that could not be analyzed
            scan_time: Scan time in seconds

        Returns:
            Rich panel with summary
        """
        resolved = sum(1 for record in records if record.is_virtual)
        style = "red" if failures else "green"
        content = (
            f"Dependencies found: {len(records)}\n"
            f"From Package.swift: {len(records) - resolved}\n"
            f"From Package.resolved: {resolved}\n"
            f"Files failed: {len(failures)}\n"
            f"Scan time: {scan_time:.2f}s"
        )
        return Panel(content, title="Scan Summary", style=style)

    def _create_dependencies_table(self, records: Sequence[DependencyRecord]) -> Table:
        """Create dependencies table.

        Args:
            records: Dependency records to list

        Returns:
            Rich table with one row per record
        """
        table = Table(title="Swift Packages")

        table.add_column("Package", style="cyan", no_wrap=True)
        table.add_column("Version", style="blue")
        table.add_column("Ecosystem", style="magenta")
        table.add_column("Identifier", style="green")
        table.add_column("Source", style="white")

        for record in records:
            table.add_row(
                record.name or record.display_name or "",
                record.version or "unknown",
                record.ecosystem,
                ", ".join(str(identifier) for identifier in record.identifiers) or "-",
                str(record.file_path),
            )

        return table


class JSONFormatter:
    """JSON formatter for SPMShield output."""

    def __init__(self, output_file: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_file: Optional output file path
        """
        self.output_file = output_file
        self.logger = get_logger("spm_shield.output.json")

    def format_records(
        self,
        records: Sequence[DependencyRecord],
        failures: Sequence[Failure] = (),
        scan_time: float = 0.0,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Format discovered dependencies as JSON-compatible data.

        Args:
            records: Dependency records to include
            failures: Files that could not be analyzed
            scan_time: Scan time in seconds
            metadata: Optional additional metadata

        Returns:
            Formatted JSON data
        """
        result: Dict[str, Any] = {
            "scan_info": {
                "timestamp": datetime.now().isoformat(),
                "total_dependencies": len(records),
                "scan_time": scan_time,
                "tool": "spm-shield",
                "version": __version__,
            },
            "dependencies": [record.to_dict() for record in records],
            "errors": [
                {"file": str(file_path), "error": str(error)}
                for file_path, error in failures
            ],
        }
        if metadata:
            result["metadata"] = metadata
        return result

    def to_json(self, data: Dict[str, Any]) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False)

    def save_results(self, data: Dict[str, Any]) -> None:
        """Save formatted results to the output file.

        Args:
            data: Data returned by format_records
        """
        if not self.output_file:
            raise ValueError("No output file configured")

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_file, "w", encoding="utf-8") as f:
            f.write(self.to_json(data))
        self.logger.info(f"Results saved to {self.output_file}")
