"""Recursive install pipeline.

One call to :meth:`InstallOrchestrator.install` takes a package reference
through fetch, extract, relocate, and then walks the package's declared
dependencies. Every list of installs (top-level references, or the
dependencies of one manifest) is processed strictly in order: item *k+1*
starts only after item *k* has finished, and the first failure propagates
and abandons the rest of the list.

The sequential discipline is what keeps two installs from writing the
same ``node_modules/<name>`` directory at once, and what makes the
"already installed" check race-free. Parallelizing installs would require
per-name locking.

Cycles terminate: a package is moved into place before its dependencies
are walked, so a dependency edge back to it finds the installed manifest
and is skipped.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Sequence
from urllib.parse import unquote, urlsplit

import httpx

from depot.core.install.archive import (
    archive_stem,
    extract_archive,
    find_package_root,
    remove_tree,
    replace_directory,
)
from depot.core.install.config import InstallConfig
from depot.core.install.references import (
    PackageReference,
    ReferenceKind,
    dependency_reference,
)
from depot.core.manifest import PackageMetadata, read_manifest, scan_installed
from depot.exceptions import (
    InstallCancelledError,
    InstallError,
    InvalidSourceError,
    ManifestError,
    NotSupportedError,
)
from depot.registry import RegistryClient, download

logger = logging.getLogger(__name__)


@dataclass
class InstallReport:
    """What an install (or update) run did.

    Attributes:
        installed: Packages fetched and placed, in installation order.
        skipped: Packages already installed at the resolved version.
    """

    installed: list[PackageMetadata] = field(default_factory=list)
    skipped: list[PackageMetadata] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        """True when nothing was installed or even considered."""
        return not self.installed and not self.skipped


class InstallOrchestrator:
    """Installs package references into ``<working_dir>/node_modules``.

    Args:
        config: Installation locations.
        registry: Registry client for name and range resolution.
        client: HTTP client used for archive downloads.
        cancel_event: Optional event; once set, no further install step starts.
    """

    def __init__(
        self,
        config: InstallConfig,
        registry: RegistryClient,
        client: httpx.AsyncClient,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self.config = config
        self._registry = registry
        self._client = client
        self._cancel_event = cancel_event

    # -- Public entry points ------------------------------------------------

    async def install(
        self,
        reference: str | PackageReference | None,
        install_deps: bool = True,
        report: InstallReport | None = None,
    ) -> InstallReport:
        """Install one package reference and, optionally, its dependencies.

        Args:
            reference: A reference string (see :class:`PackageReference`),
                an already-classified reference, or None for the local manifest.
            install_deps: Whether to recurse into declared dependencies.
            report: Report to extend; a new one is created if omitted.

        Returns:
            The report of installed and skipped packages.

        Raises:
            DepotError: Any failure in the chain, unchanged.
        """
        if report is None:
            report = InstallReport()
        if not isinstance(reference, PackageReference):
            reference = PackageReference.parse(reference)

        self.check_cancelled(reference)

        if reference.kind is ReferenceKind.EMPTY:
            await self._install_local(install_deps, report)
        elif reference.kind is ReferenceKind.URL:
            await self._install_url(reference.url, install_deps, report)
        elif reference.kind is ReferenceKind.LOCAL_PATH:
            raise NotSupportedError(reference.raw)
        else:
            await self._install_name(reference, install_deps, report)
        return report

    async def install_many(
        self, references: Sequence[str], install_deps: bool = True
    ) -> InstallReport:
        """Install several references one after another.

        An empty sequence installs the local manifest's dependencies.
        """
        report = InstallReport()
        if not references:
            return await self.install(None, install_deps, report)
        for reference in references:
            await self.install(reference, install_deps, report)
        return report

    async def install_dependencies(
        self,
        metadata: PackageMetadata | None,
        install_deps: bool = True,
        report: InstallReport | None = None,
    ) -> InstallReport:
        """Install every dependency declared by *metadata*, in declaration order."""
        if report is None:
            report = InstallReport()
        if metadata is None or not install_deps or not metadata.dependencies:
            return report

        logger.info("Checking dependencies for %s ...", metadata.name or "<local>")
        for dep_name, dep_range in metadata.dependencies.items():
            await self.install(dependency_reference(dep_name, dep_range), install_deps, report)
        return report

    def installed_packages(self) -> dict[str, PackageMetadata]:
        """Return the current index of installed packages."""
        return scan_installed(self.config.install_root)

    def clean_scratch(self) -> None:
        """Remove the scratch directory and everything in it."""
        try:
            remove_tree(self.config.scratch_root)
        except OSError as exc:
            raise InstallError(str(self.config.scratch_root), exc) from exc

    def check_cancelled(self, reference: PackageReference | str) -> None:
        """Raise InstallCancelledError if cancellation has been requested."""
        if self._cancel_event is not None and self._cancel_event.is_set():
            logger.info("Cancelled before %s", reference)
            raise InstallCancelledError(str(reference))

    # -- Reference kinds ----------------------------------------------------

    async def _install_local(self, install_deps: bool, report: InstallReport) -> None:
        metadata = read_manifest(self.config.working_dir)
        if metadata is None:
            logger.info("Nothing to install")
            return
        await self.install_dependencies(metadata, install_deps, report)

    async def _install_name(
        self, reference: PackageReference, install_deps: bool, report: InstallReport
    ) -> None:
        logger.debug("Retrieving metadata for %s ...", reference)
        metadata = await self._registry.get_metadata(reference.name, reference.version_range)

        local = self._installed_manifest(reference.name)
        if (
            local is not None
            and local.name
            and local.version
            and local.name == metadata.name
            and local.version == metadata.version
        ):
            # The dependency tree of an up-to-date package is assumed intact.
            logger.info("Skipping %s. Already on latest version", reference)
            report.skipped.append(metadata)
            return

        if not metadata.tarball_url:
            raise InvalidSourceError(
                self._registry.package_url(metadata.name or reference.name, metadata.version),
                "registry metadata has no dist.tarball",
            )
        await self._install_url(metadata.tarball_url, install_deps, report)

    async def _install_url(self, url: str, install_deps: bool, report: InstallReport) -> None:
        try:
            metadata, package_name = await self._fetch_and_place(url)
        except OSError as exc:
            raise InstallError(url, exc) from exc
        report.installed.append(metadata or PackageMetadata(name=package_name))

        await self.install_dependencies(metadata, install_deps, report)

    async def _fetch_and_place(self, url: str) -> tuple[PackageMetadata | None, str]:
        filename = _url_filename(url)
        package_name = archive_stem(filename)
        scratch = self.config.scratch_root
        extract_dir = scratch / package_name

        logger.info("Downloading %s", url)
        archive_path = await download(self._client, url, scratch / filename)

        await asyncio.to_thread(remove_tree, extract_dir)
        await asyncio.to_thread(extract_archive, archive_path, extract_dir)
        package_dir = find_package_root(extract_dir)

        metadata = read_manifest(package_dir)
        if metadata is not None and metadata.name:
            package_name = metadata.name
        _check_directory_name(package_name, url)

        destination = self.config.install_root / package_name
        await asyncio.to_thread(replace_directory, package_dir, destination)
        logger.info("Successfully installed %s in %s", package_name, destination)
        return metadata, package_name

    def _installed_manifest(self, name: str) -> PackageMetadata | None:
        # A damaged installation is reinstalled rather than reported.
        try:
            return read_manifest(self.config.install_root / name)
        except ManifestError as exc:
            logger.warning("Reinstalling %s: %s", name, exc)
            return None


def _url_filename(url: str) -> str:
    path = unquote(urlsplit(url).path).rstrip("/")
    filename = path.rsplit("/", 1)[-1]
    if not filename:
        raise InvalidSourceError(url, "no file name in url")
    return filename


def _check_directory_name(name: str, url: str) -> None:
    # Scoped names ("@scope/pkg") occupy two directory levels.
    parts = name.split("/")
    if len(parts) == 2 and parts[0].startswith("@"):
        parts[0] = parts[0][1:]
    elif len(parts) != 1:
        raise InvalidSourceError(url, f"unsafe package name {name!r}")
    for part in parts:
        if part in ("", ".", "..") or "\\" in part:
            raise InvalidSourceError(url, f"unsafe package name {name!r}")
