"""Pytest plugin providing moka fixtures and registry isolation."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .api import default_registry
from .factory import DoubleFactory
from .registry import ClassRegistry
from .spy import MISSING, Spy

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("moka")
    group.addoption(
        "--moka-reset-registry",
        action="store_true",
        dest="moka_reset_registry",
        default=None,
        help=(
            "Clear the default moka class registry around every test. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-moka-reset-registry",
        action="store_false",
        dest="moka_reset_registry",
        default=None,
        help=(
            "Keep class doubles registered across tests. "
            "Overrides the pytest.ini setting."
        ),
    )
    parser.addini(
        "moka_reset_registry",
        "Clear the default moka class registry before and after each test.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "moka(reset_registry: bool = True): override clearing of the "
            "default class registry for a single test."
        ),
    )


def _reset_registry_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether the default registry should be cleared for this test."""
    # Priority order: marker > CLI option > INI setting
    marker = request.node.get_closest_marker("moka")
    if marker is not None and "reset_registry" in marker.kwargs:
        return bool(marker.kwargs["reset_registry"])

    config = request.config
    cli_value = config.getoption("moka_reset_registry")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("moka_reset_registry"))


@pytest.fixture(autouse=True)
def _moka_default_registry(
    request: pytest.FixtureRequest,
) -> t.Generator[ClassRegistry, None, None]:
    """Isolate class doubles built through the module-level API."""
    reset = _reset_registry_enabled(request)
    if reset:
        default_registry.clear()
    yield default_registry
    if reset:
        default_registry.clear()


@pytest.fixture
def moka_factory() -> t.Generator[DoubleFactory, None, None]:
    """Provide a :class:`DoubleFactory` with a registry private to the test."""
    factory = DoubleFactory(ClassRegistry())
    yield factory
    logger.debug(
        "Discarding %d class double(s): %s",
        len(factory.registry),
        factory.registry.names(),
    )
    factory.registry.clear()


@pytest.fixture
def moka_spy() -> t.Callable[..., Spy]:
    """Provide a function creating named spies."""

    def make(default: t.Any = MISSING, *, name: str = "spy") -> Spy:
        return Spy(default, name=name)

    return make
