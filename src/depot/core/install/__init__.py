"""Install pipeline: references, orchestration, bulk update.

Public API::

    from depot.core.install import InstallConfig, InstallSession

    async with InstallSession(InstallConfig()) as session:
        await session.orchestrator.install("express@3.x")
        await session.updater.update()
"""

from depot.core.install.config import InstallConfig
from depot.core.install.orchestrator import InstallOrchestrator, InstallReport
from depot.core.install.references import (
    PackageReference,
    ReferenceKind,
    dependency_reference,
)
from depot.core.install.session import InstallSession
from depot.core.install.update import UpdateDriver

__all__ = [
    "InstallConfig",
    "InstallOrchestrator",
    "InstallReport",
    "InstallSession",
    "PackageReference",
    "ReferenceKind",
    "UpdateDriver",
    "dependency_reference",
]
