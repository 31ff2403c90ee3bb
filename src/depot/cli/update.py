"""``depot update`` — Bring every installed package up to its latest version."""

from __future__ import annotations

import click

from depot.cli.output import print_install_report
from depot.cli.runner import run_or_exit
from depot.core.install import InstallConfig


@click.command("update")
@click.pass_obj
def update_command(config: InstallConfig) -> None:
    """Check the registry for newer versions of installed packages and install them.

    Exit code 0 on success, 1 if any update fails (remaining packages are
    not attempted).
    """
    report = run_or_exit(config, lambda session: session.updater.update())
    print_install_report(report)
    click.echo("All done")
