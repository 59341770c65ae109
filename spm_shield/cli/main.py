"""Main CLI interface for SPMShield."""

import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import load_config
from ..core.parsers import DependencyAnalyzer, DependencyCollection
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import get_logger, setup_logging
from ..utils.path_utils import find_dependency_files

app = typer.Typer(
    name="spm-shield",
    help="Collect Swift Package Manager dependencies for vulnerability scanning",
    add_completion=False
)

console = Console()
logger = get_logger("spm_shield.cli")


@app.command()
def scan(
    path: Path = typer.Argument(
        Path("."),
        help="Project directory or single Package.swift / Package.resolved file"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    output_format: str = typer.Option(
        "console",
        "--format",
        "-f",
        help="Output format: 'console' or 'json'"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
    ignore_patterns: Optional[List[str]] = typer.Option(
        None,
        "--ignore",
        help="Additional ignore patterns"
    )
) -> None:
    """Scan a project for Swift Package Manager dependencies."""
    setup_logging(verbose=verbose)

    if output_format not in ("console", "json"):
        console.print(f"[red]Error: Unknown output format: {output_format}[/red]")
        raise typer.Exit(1)

    if not path.exists():
        console.print(f"[red]Error: Path does not exist: {path}[/red]")
        raise typer.Exit(1)

    config = load_config()
    config.ignore_patterns.extend(ignore_patterns or [])

    dependency_files = find_dependency_files(path, config.ignore_patterns)
    logger.info(f"Found {len(dependency_files)} dependency files in {path}")

    start_time = time.perf_counter()
    collection = DependencyCollection()
    outcome = DependencyAnalyzer.analyze_files(
        [dep_file.path for dep_file in dependency_files], collection, config
    )
    scan_time = time.perf_counter() - start_time

    for result in outcome.results:
        logger.info(f"{result.file_path}: {len(result.records)} dependencies")

    records = list(collection)
    json_formatter = JSONFormatter(output)
    if output_format == "json":
        data = json_formatter.format_records(records, outcome.failures, scan_time)
        typer.echo(json_formatter.to_json(data))
    else:
        ConsoleFormatter(console).format_records(records, outcome.failures, scan_time)

    if output:
        json_formatter.save_results(
            json_formatter.format_records(records, outcome.failures, scan_time)
        )
        if output_format == "console":
            console.print(f"[green]Results saved to: {output}[/green]")


@app.command()
def info() -> None:
    """Show SPMShield information."""
    console.print(Panel.fit(
        "[bold blue]SPMShield[/bold blue]\n"
        "Collects Swift Package Manager dependency records\n"
        "for matching against vulnerability databases",
        title="Information"
    ))

    ecosystems = DependencyAnalyzer.get_supported_ecosystems()
    console.print(f"\n[bold]Supported Ecosystems:[/bold] {', '.join(ecosystems)}")

    parser_types = DependencyAnalyzer.get_supported_parser_types()
    console.print(f"[bold]Supported Parsers:[/bold] {', '.join(parser_types)}")

    file_names = DependencyAnalyzer.supported_file_names()
    console.print(f"[bold]Supported Files:[/bold] {', '.join(file_names)}")


def main() -> None:
    """Main entry point for SPMShield CLI."""
    app()


if __name__ == "__main__":
    main()
