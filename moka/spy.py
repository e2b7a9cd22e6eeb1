"""Free-standing callable spies."""

from __future__ import annotations

import enum
import typing as t

from .controller import DoubleController

if t.TYPE_CHECKING:
    from .calls import Call
    from .rules import RuleBuilder


class _Missing(enum.Enum):
    MISSING = enum.auto()

    def __repr__(self) -> str:
        return "MISSING"


#: Sentinel meaning "no default return value was given".
MISSING: t.Final = _Missing.MISSING


class Spy:
    """Callable double answering through a single behaviour ledger.

    A spy created without a default has no rule and raises
    :class:`~moka.errors.NotStubbedError` until one is added with
    :meth:`stubs`. Every call is recorded either way.
    """

    def __init__(self, default: t.Any = MISSING, *, name: str = "spy") -> None:
        self.name = name
        self.moka = DoubleController(name=name)
        if default is MISSING:
            self.moka.allow(name)
        else:
            self.moka.configure({name: default})

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Spy(name={self.name!r}, calls={self.call_count})"

    def __call__(self, *args: t.Any, **kwargs: t.Any) -> t.Any:
        """Record the call and answer it with the winning rule."""
        return self.moka.dispatch(self.name, args, kwargs)

    def stubs(self) -> RuleBuilder:
        """Return a rule builder bound to the spy's ledger."""
        return self.moka.stubs(self.name)

    def report(self) -> list[list[t.Any]]:
        """Return the positional arguments of every call, in order."""
        return self.moka.report(self.name)

    @property
    def calls(self) -> list[Call]:
        """Return the recorded calls."""
        return self.moka.calls(self.name)

    @property
    def call_count(self) -> int:
        """Return how many times the spy was called."""
        return self.moka.call_count(self.name)

    @property
    def called(self) -> bool:
        """Return ``True`` once the spy has been called."""
        return self.call_count > 0

    def assert_called(self) -> None:
        """Assert the spy was called at least once."""
        self.moka.assert_called(self.name)

    def assert_not_called(self) -> None:
        """Assert the spy was never called."""
        self.moka.assert_not_called(self.name)

    def assert_called_with(self, *args: t.Any, **kwargs: t.Any) -> None:
        """Assert the last call used ``args`` and ``kwargs``."""
        self.moka.assert_called_with(self.name, *args, **kwargs)

    def assert_called_times(self, count: int) -> None:
        """Assert the spy was called exactly *count* times."""
        self.moka.assert_called_times(self.name, count)
