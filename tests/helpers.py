"""Shared test helpers: an in-memory npm-style registry.

``FakeRegistry`` answers registry and tarball requests through
``httpx.MockTransport`` and records every request path, so tests can assert
exactly which documents and archives were fetched, and in what order.
"""

from __future__ import annotations

import io
import json
import tarfile
from pathlib import Path
from typing import Any
from urllib.parse import unquote

import httpx

REGISTRY_URL = "https://registry.test/"


def make_tarball(
    manifest: dict[str, Any] | None,
    *,
    root: str = "package",
    extra_files: dict[str, str] | None = None,
) -> bytes:
    """Build a gzipped npm-style tarball in memory."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:

        def add(name: str, data: bytes) -> None:
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))

        prefix = f"{root}/" if root else ""
        if manifest is not None:
            add(f"{prefix}package.json", json.dumps(manifest).encode())
        for name, content in (extra_files or {}).items():
            add(f"{prefix}{name}", content.encode())
    return buf.getvalue()


class FakeRegistry:
    """In-memory registry with a request log."""

    def __init__(self, base_url: str = REGISTRY_URL) -> None:
        self.base_url = base_url
        self.packages: dict[str, dict[str, dict[str, Any]]] = {}
        self.latest: dict[str, str] = {}
        self.requests: list[str] = []
        self.broken_tarballs: set[str] = set()
        self.status_overrides: dict[str, int] = {}

    # -- Publishing ---------------------------------------------------------

    def publish(
        self,
        name: str,
        version: str,
        dependencies: dict[str, Any] | None = None,
        *,
        latest: bool = True,
    ) -> dict[str, Any]:
        """Add a version; by default it also becomes the ``latest`` tag."""
        doc = {
            "name": name,
            "version": version,
            "dependencies": dependencies or {},
            "dist": {"tarball": self.tarball_url(name, version)},
        }
        self.packages.setdefault(name, {})[version] = doc
        if latest:
            self.latest[name] = version
        return doc

    def tarball_url(self, name: str, version: str) -> str:
        basename = name.rsplit("/", 1)[-1]
        return f"{self.base_url}{name}/-/{basename}-{version}.tgz"

    def break_tarball(self, name: str, version: str) -> None:
        """Serve garbage instead of a tarball for this version."""
        self.broken_tarballs.add(f"{name}-{version}.tgz")

    # -- Transport ----------------------------------------------------------

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append(path)
        if path in self.status_overrides:
            return httpx.Response(self.status_overrides[path])

        raw_path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        parts = [unquote(p) for p in raw_path.strip("/").split("/")]
        # Tarball paths spell scoped names with a literal slash.
        if len(parts) > 2 and parts[0].startswith("@") and "/" not in parts[0]:
            parts = [f"{parts[0]}/{parts[1]}", *parts[2:]]
        if len(parts) == 3 and parts[1] == "-":
            return self._tarball(parts[0], parts[2])
        if len(parts) == 1:
            return self._listing(parts[0])
        if len(parts) == 2:
            return self._version(parts[0], parts[1])
        return httpx.Response(404)

    def _listing(self, name: str) -> httpx.Response:
        versions = self.packages.get(name)
        if versions is None:
            return httpx.Response(404, json={"error": "not_found"})
        return httpx.Response(
            200,
            json={
                "name": name,
                "dist-tags": {"latest": self.latest.get(name, "")},
                "versions": dict(versions),
            },
        )

    def _version(self, name: str, version: str) -> httpx.Response:
        versions = self.packages.get(name, {})
        if version == "latest":
            version = self.latest.get(name, "")
        doc = versions.get(version)
        if doc is None:
            return httpx.Response(404, json={"error": "not_found"})
        return httpx.Response(200, json=doc)

    def _tarball(self, name: str, filename: str) -> httpx.Response:
        if filename in self.broken_tarballs:
            return httpx.Response(200, content=b"this is not a tarball")
        for doc in self.packages.get(name, {}).values():
            if doc["dist"]["tarball"].endswith("/" + filename):
                manifest = {k: v for k, v in doc.items() if k != "dist"}
                return httpx.Response(200, content=make_tarball(manifest))
        return httpx.Response(404)

    # -- Request log views --------------------------------------------------

    @property
    def tarball_requests(self) -> list[str]:
        return [p for p in self.requests if "/-/" in p]

    @property
    def metadata_requests(self) -> list[str]:
        return [p for p in self.requests if "/-/" not in p]


def write_manifest(directory: Path, **fields: Any) -> Path:
    """Write a package.json into *directory*, creating it if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(fields))
    return path
