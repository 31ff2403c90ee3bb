"""Package manifests (``package.json``) and the installed-package index."""

from depot.core.manifest.io import manifest_path, read_manifest, scan_installed
from depot.core.manifest.models import MANIFEST_FILENAME, PackageMetadata

__all__ = [
    "MANIFEST_FILENAME",
    "PackageMetadata",
    "manifest_path",
    "read_manifest",
    "scan_installed",
]
