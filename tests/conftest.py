"""Shared fixtures for depot tests."""

import pathlib

import pytest

from depot.core.install import InstallConfig
from tests.helpers import REGISTRY_URL, FakeRegistry


@pytest.fixture
def registry() -> FakeRegistry:
    """An empty in-memory registry."""
    return FakeRegistry()


@pytest.fixture
def project_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a temporary project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def config(project_dir: pathlib.Path) -> InstallConfig:
    """Installer configuration rooted at the temporary project."""
    return InstallConfig(working_dir=project_dir, registry_url=REGISTRY_URL)
