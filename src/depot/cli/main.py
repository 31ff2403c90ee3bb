"""Depot CLI — a minimal installer for npm-style packages.

Entry point for the ``depot`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    install — Install package(s) and their dependencies.
    deps    — Install dependencies from ./package.json.
    update  — Update installed packages to their latest versions.
    ls      — List installed packages.

Usage::

    depot install express socket.io underscore
    depot install express@3.x
    depot deps
    depot update
    depot --prefix ./app ls
"""

from __future__ import annotations

from pathlib import Path

import click

from depot import __version__
from depot.cli.deps import deps_command
from depot.cli.install import install_command
from depot.cli.list_cmd import list_command
from depot.cli.output import configure_logging
from depot.cli.update import update_command
from depot.core.install import InstallConfig
from depot.registry import DEFAULT_REGISTRY_URL
from depot.registry.http_client import DEFAULT_TIMEOUT


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--prefix",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    envvar="DEPOT_PREFIX",
    show_default=True,
    help="Project directory; packages go into <prefix>/node_modules.",
)
@click.option(
    "--registry",
    default=DEFAULT_REGISTRY_URL,
    envvar="DEPOT_REGISTRY",
    show_default=True,
    help="Package registry URL.",
)
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="HTTP timeout in seconds.",
)
@click.option("-v", "--verbose", count=True, help="Show debug diagnostics.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.pass_context
def cli(
    ctx: click.Context,
    prefix: Path,
    registry: str,
    timeout: float,
    verbose: int,
    quiet: bool,
) -> None:
    """Depot: install packages from an npm-style registry.

    Resolves versions and ranges against the registry, downloads and
    unpacks package archives into ./node_modules, and installs their
    dependencies one at a time.
    """
    configure_logging(0 if quiet else 1 + verbose)
    ctx.obj = InstallConfig(working_dir=prefix, registry_url=registry, timeout=timeout)


# Register all subcommands
cli.add_command(install_command)
cli.add_command(deps_command)
cli.add_command(update_command)
cli.add_command(list_command)
