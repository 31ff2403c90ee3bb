"""Bulk update of every installed package."""

from __future__ import annotations

import logging

from depot.core.install.orchestrator import InstallOrchestrator, InstallReport
from depot.core.install.references import PackageReference
from depot.core.versioning import LATEST
from depot.registry import RegistryClient

logger = logging.getLogger(__name__)


class UpdateDriver:
    """Re-resolves every installed package against the registry's ``latest``.

    Each package is re-installed through the orchestrator, which skips it
    when the installed manifest already matches the resolved version. The
    version comparison made here only feeds the log.
    """

    def __init__(self, orchestrator: InstallOrchestrator, registry: RegistryClient) -> None:
        self._orchestrator = orchestrator
        self._registry = registry

    async def update(self) -> InstallReport:
        """Update installed packages one at a time; the first failure aborts the rest."""
        report = InstallReport()
        installed = self._orchestrator.installed_packages()
        if not installed:
            logger.info("No installed packages to update")
            return report

        for name, local in installed.items():
            reference = PackageReference.for_name(name, LATEST)
            self._orchestrator.check_cancelled(reference)
            latest = await self._registry.get_metadata(name, LATEST)
            if latest.version == local.version:
                logger.debug("%s is current at %s", name, local.version)
            else:
                logger.info("Updating %s from %s to %s", name, local.version or "?", latest.version)
            await self._orchestrator.install(reference, install_deps=True, report=report)
        return report
