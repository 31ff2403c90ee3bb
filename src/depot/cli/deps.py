"""``depot deps`` — Install the dependencies listed in ./package.json."""

from __future__ import annotations

import click

from depot.cli.output import print_install_report
from depot.cli.runner import run_or_exit
from depot.core.install import InstallConfig


@click.command("deps")
@click.pass_obj
def deps_command(config: InstallConfig) -> None:
    """Install dependencies from the package.json file in the working directory."""
    report = run_or_exit(config, lambda session: session.orchestrator.install(None))
    print_install_report(report)
    click.echo("Dependencies done")
