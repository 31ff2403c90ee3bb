"""``depot ls`` — List installed packages."""

from __future__ import annotations

import sys

import click

from depot.cli.output import print_installed_packages
from depot.cli.runner import EXIT_FAILURE
from depot.core.install import InstallConfig
from depot.core.manifest import scan_installed


@click.command("ls")
@click.pass_obj
def list_command(config: InstallConfig) -> None:
    """Show the packages installed in ./node_modules with their versions."""
    try:
        installed = scan_installed(config.install_root)
    except OSError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_FAILURE)
    print_installed_packages(installed, config.install_root)
