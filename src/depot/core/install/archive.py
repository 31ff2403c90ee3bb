"""Archive extraction and installation-tree filesystem operations."""

from __future__ import annotations

import logging
import shutil
import tarfile
import zlib
from pathlib import Path

from depot.core.manifest import manifest_path
from depot.exceptions import ExtractionError

logger = logging.getLogger(__name__)

_ARCHIVE_SUFFIXES = (".tar.gz", ".tgz", ".tar")


def archive_stem(filename: str) -> str:
    """Strip a known archive suffix: ``easy-0.0.1.tgz`` -> ``easy-0.0.1``."""
    for suffix in _ARCHIVE_SUFFIXES:
        if filename.endswith(suffix) and len(filename) > len(suffix):
            return filename[: -len(suffix)]
    return filename


def extract_archive(archive: Path, destination: Path) -> None:
    """Unpack a (optionally gzipped) tarball into *destination*.

    Members are filtered with tarfile's ``data`` filter, which rejects
    absolute paths, links escaping the destination, and device files.

    Raises:
        ExtractionError: Wrapping any failure to read or unpack the archive.
    """
    logger.debug("Extracting %s ...", archive)
    try:
        Path(destination).mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive, mode="r:*") as tar:
            tar.extractall(destination, filter="data")
    except (tarfile.TarError, OSError, EOFError, zlib.error) as exc:
        raise ExtractionError(str(archive), exc) from exc


def find_package_root(extracted: Path) -> Path:
    """Locate the package directory inside an extraction directory.

    An archive with a manifest at its top level is itself the package,
    whatever directories sit beside the manifest. Otherwise npm archives
    hold everything under a single top-level directory (usually
    ``package/``).

    Raises:
        ExtractionError: If the extraction produced no package directory.
    """
    extracted = Path(extracted)
    if manifest_path(extracted).is_file():
        return extracted
    subdirs = sorted(p for p in extracted.iterdir() if p.is_dir()) if extracted.is_dir() else []
    if subdirs:
        return subdirs[0]
    raise ExtractionError(str(extracted), "archive contained no package directory")


def remove_tree(path: Path) -> None:
    """Delete *path* recursively if it exists."""
    path = Path(path)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def replace_directory(source: Path, destination: Path) -> None:
    """Move *source* to *destination*, deleting whatever was there first."""
    remove_tree(destination)
    Path(destination).parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(source), str(destination))
