"""Rich output formatting helpers for the Depot CLI."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from depot.core.install import InstallReport
from depot.core.manifest import PackageMetadata

console = Console()

_LEVELS = {0: logging.WARNING, 1: logging.INFO, 2: logging.DEBUG}


def configure_logging(verbosity: int) -> None:
    """Route log records through Rich on stderr.

    Args:
        verbosity: 0 for warnings only, 1 for progress (default), 2+ for debug.
    """
    level = _LEVELS.get(min(max(verbosity, 0), 2), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_time=False,
                show_path=False,
                markup=False,
            )
        ],
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING if level > logging.DEBUG else level)


def print_install_report(report: InstallReport) -> None:
    """Print a table of installed packages and a one-line summary.

    Args:
        report: Report returned by an install or update run.
    """
    if report.is_noop:
        console.print("[dim]Nothing to install.[/dim]")
        return

    if report.installed:
        table = Table(title="Installed", show_header=True, header_style="bold")
        table.add_column("Package", style="bold")
        table.add_column("Version")
        for meta in report.installed:
            table.add_row(meta.name, meta.version or "-")
        console.print(table)

    parts = [f"[green]{len(report.installed)} installed[/green]"]
    if report.skipped:
        parts.append(f"[dim]{len(report.skipped)} already up to date[/dim]")
    console.print(" | ".join(parts))


def print_installed_packages(installed: dict[str, PackageMetadata], install_root: Path) -> None:
    """Print the installed-package index as a table."""
    if not installed:
        console.print(f"[dim]No packages installed in {install_root}.[/dim]")
        return

    table = Table(title=str(install_root), show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Version")
    table.add_column("Dependencies", justify="right")
    for name, meta in installed.items():
        table.add_row(name, meta.version or "-", str(len(meta.dependencies)))
    console.print(table)
