"""Installer configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from depot.registry import DEFAULT_REGISTRY_URL
from depot.registry.http_client import DEFAULT_TIMEOUT

MODULES_DIRNAME = "node_modules"
SCRATCH_DIRNAME = ".tmp"


@dataclass(frozen=True)
class InstallConfig:
    """Locations and endpoints for one installer run.

    Attributes:
        working_dir: Project directory holding the local ``package.json``.
        registry_url: Registry root URL.
        timeout: HTTP timeout in seconds.
    """

    working_dir: Path = field(default_factory=Path.cwd)
    registry_url: str = DEFAULT_REGISTRY_URL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def install_root(self) -> Path:
        """Directory holding one subdirectory per installed package."""
        return Path(self.working_dir) / MODULES_DIRNAME

    @property
    def scratch_root(self) -> Path:
        """Transient area for in-flight downloads and extractions."""
        return self.install_root / SCRATCH_DIRNAME
