"""Recorded calls received by doubles."""

from __future__ import annotations

import dataclasses as dc
import typing as t


@dc.dataclass(slots=True, frozen=True)
class Call:
    """Positional and keyword arguments of a single call."""

    args: tuple[t.Any, ...] = ()
    kwargs: dict[str, t.Any] = dc.field(default_factory=dict)

    @classmethod
    def of(cls, *args: t.Any, **kwargs: t.Any) -> Call:
        """Build a :class:`Call` from ordinary call syntax."""
        return cls(args, kwargs)

    @property
    def arguments(self) -> list[t.Any]:
        """Return the positional arguments as a list."""
        return list(self.args)

    def apply(self, func: t.Callable[..., t.Any]) -> t.Any:
        """Invoke *func* with the arguments of this call."""
        return func(*self.args, **self.kwargs)
