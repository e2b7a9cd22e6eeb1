"""Module-level shorthands bound to a default :class:`DoubleFactory`."""

from __future__ import annotations

import typing as t

from .factory import DoubleFactory
from .registry import ClassRegistry
from .spy import MISSING, Spy

if t.TYPE_CHECKING:
    from .controller import Config

#: Registry holding the class-level controllers of doubles built through
#: the functions below. The pytest plugin clears it between tests.
default_registry = ClassRegistry()
default_factory = DoubleFactory(default_registry)


def stub(
    parent: type | None = None,
    config: Config | None = None,
    /,
    *args: t.Any,
    **kwargs: t.Any,
) -> t.Any:
    """Create a stub object answering only the methods in *config*.

    Examples
    --------
    >>> double = stub(None, {"method": "RESULT"})
    >>> double.method()
    'RESULT'
    >>> double.moka.report("method")
    [[]]
    """
    return default_factory.stub(parent, config, *args, **kwargs)


def stub_class(
    parent: type | None = None,
    config: Config | None = None,
    *,
    name: str | None = None,
) -> type:
    """Create a stub class; ``"::name"`` keys configure class-level methods."""
    return default_factory.stub_class(parent, config, name=name)


def mock(
    parent: type | None = None,
    config: Config | None = None,
    /,
    *args: t.Any,
    **kwargs: t.Any,
) -> t.Any:
    """Create an object overriding *config* methods of *parent* only."""
    return default_factory.mock(parent, config, *args, **kwargs)


def mock_class(
    parent: type | None = None,
    config: Config | None = None,
    *,
    name: str | None = None,
) -> type:
    """Create a class overriding *config* methods of *parent* only."""
    return default_factory.mock_class(parent, config, name=name)


def spy(default: t.Any = MISSING) -> Spy:
    """Create a callable spy.

    Examples
    --------
    >>> s = spy("DEFAULT")
    >>> _ = s.stubs().with_args("ARG").returns("RESULT")
    >>> s("ARG"), s()
    ('RESULT', 'DEFAULT')
    """
    return default_factory.spy(default)
