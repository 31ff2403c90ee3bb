"""``depot install [PKG]...`` — Install packages and their dependencies.

Each PKG may be a name (``express``), a name with a version, tag, or range
(``express@3.0.0``, ``express@beta``, ``express@">= 3.0 < 3.2"``,
``express@3.x``), or a tarball URL. Packages are installed one after
another; the first failure stops the run.

With no PKG, the dependencies declared in ``./package.json`` are
installed.

Exit Codes:
    0 — All packages installed (or already up to date).
    1 — Resolution, download, or extraction failed.
    2 — Usage error.
"""

from __future__ import annotations

import click

from depot.cli.output import print_install_report
from depot.cli.runner import run_or_exit
from depot.core.install import InstallConfig


@click.command("install")
@click.argument("packages", nargs=-1)
@click.option(
    "--no-deps",
    is_flag=True,
    default=False,
    help="Install only the named packages, not their dependencies.",
)
@click.pass_obj
def install_command(config: InstallConfig, packages: tuple[str, ...], no_deps: bool) -> None:
    """Install package(s) and their dependencies into ./node_modules.

    Examples:

        depot install express socket.io underscore

        depot install express@3.x

        depot install https://registry.npmjs.org/easy/-/easy-0.0.1.tgz
    """
    report = run_or_exit(
        config,
        lambda session: session.orchestrator.install_many(
            list(packages), install_deps=not no_deps
        ),
    )
    print_install_report(report)
    click.echo("All done")
