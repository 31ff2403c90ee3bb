"""Reading manifests from disk and indexing the installation root."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from depot.core.manifest.models import MANIFEST_FILENAME, PackageMetadata
from depot.exceptions import ManifestError

logger = logging.getLogger(__name__)


def manifest_path(directory: Path) -> Path:
    """Return the manifest location for a package directory."""
    return Path(directory) / MANIFEST_FILENAME


def read_manifest(directory: Path) -> PackageMetadata | None:
    """Read ``package.json`` from *directory*.

    Args:
        directory: A package directory (or the working directory).

    Returns:
        The parsed metadata, or None if no manifest file exists.

    Raises:
        ManifestError: If the file exists but is not valid JSON.
    """
    path = manifest_path(directory)
    if not path.is_file():
        return None
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestError(str(path), exc) from exc
    return PackageMetadata.from_document(document)


def scan_installed(install_root: Path) -> dict[str, PackageMetadata]:
    """Index installed packages by their manifest name.

    Only the immediate subdirectories of *install_root* are examined, in
    directory-name order, plus one extra level below ``@scope``
    directories. Directories without a manifest, or whose manifest has no
    ``name``, are ignored, and so are unreadable manifests (with a
    warning). The index is rebuilt on every call.
    """
    root = Path(install_root)
    installed: dict[str, PackageMetadata] = {}
    if not root.is_dir():
        return installed
    for child in _package_dirs(root):
        try:
            metadata = read_manifest(child)
        except ManifestError as exc:
            logger.warning("Ignoring %s: %s", child, exc)
            continue
        if metadata is None or not metadata.name:
            continue
        if metadata.name in installed:
            logger.debug("Duplicate package name %s at %s", metadata.name, child)
            continue
        installed[metadata.name] = metadata
    return installed


def _package_dirs(root: Path) -> list[Path]:
    dirs: list[Path] = []
    for child in sorted(root.iterdir()):
        if not child.is_dir():
            continue
        if child.name.startswith("@"):
            dirs.extend(sorted(p for p in child.iterdir() if p.is_dir()))
        else:
            dirs.append(child)
    return dirs
