"""Comparator objects used for per-argument matching."""

from __future__ import annotations

import dataclasses as dc
import re
import typing as t


class Comparator(t.Protocol):
    """Callable returning ``True`` when a value matches."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""
        ...


@dc.dataclass(frozen=True, slots=True)
class Any:
    """Match any value."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True


@dc.dataclass(frozen=True, slots=True)
class IsA:
    """Match instances of ``typ``."""

    typ: type | tuple[type, ...]

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value`` is an instance of ``typ``."""
        return isinstance(value, self.typ)


@dc.dataclass(frozen=True, slots=True)
class Regex:
    """Match strings searched successfully by ``pattern``."""

    pattern: str
    _compiled: re.Pattern[str] = dc.field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", re.compile(self.pattern))

    def __call__(self, value: object) -> bool:
        """Return ``True`` if the regex matches *value*."""
        if not isinstance(value, str):
            return False
        return bool(self._compiled.search(value))


@dc.dataclass(frozen=True, slots=True)
class Contains:
    """Match containers holding ``item``."""

    item: object

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``item`` is in *value*."""
        try:
            return self.item in value  # type: ignore[operator]
        except TypeError:
            return False


@dc.dataclass(frozen=True, slots=True)
class StartsWith:
    """Match strings beginning with ``prefix``."""

    prefix: str

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* starts with ``prefix``."""
        return isinstance(value, str) and value.startswith(self.prefix)


@dc.dataclass(frozen=True, slots=True)
class Predicate:
    """Use a custom ``func`` to determine a match."""

    func: t.Callable[[t.Any], object]

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))


__all__ = [
    "Any",
    "Comparator",
    "Contains",
    "IsA",
    "Predicate",
    "Regex",
    "StartsWith",
]
