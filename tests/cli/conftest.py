"""Shared fixtures for CLI tests.

CLI commands build their HTTP client inside the install session; the
``cli_registry`` fixture swaps that client for one served by an in-memory
registry, and ``runner`` restores the root logger after each command
reconfigures it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import httpx
import pytest
from click.testing import CliRunner

from tests.helpers import REGISTRY_URL, FakeRegistry


@pytest.fixture
def runner() -> Iterator[CliRunner]:
    """Create a Click CliRunner, keeping root logging state intact."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield CliRunner()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def cli_registry(registry: FakeRegistry, monkeypatch: pytest.MonkeyPatch) -> FakeRegistry:
    """Route every session client created by the CLI to the fake registry."""

    def fake_create_client(*, timeout: float = 30.0, transport=None) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=registry.transport, timeout=timeout)

    monkeypatch.setattr("depot.core.install.session.create_client", fake_create_client)
    return registry


@pytest.fixture
def base_args(project_dir: Path) -> list[str]:
    """Global options pointing the CLI at the temp project and fake registry."""
    return ["--prefix", str(project_dir), "--registry", REGISTRY_URL]
