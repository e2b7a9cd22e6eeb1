"""Global test configuration."""

from __future__ import annotations

pytest_plugins = ("moka.pytest_plugin", "pytester")
