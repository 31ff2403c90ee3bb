"""Depot: a minimal package installer for npm-style registries."""

from __future__ import annotations

__version__ = "0.3.0"
__license__ = "MIT"
