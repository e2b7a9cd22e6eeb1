"""Assertion helpers over the calls recorded by doubles."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .calls import Call


def _format_args(args: t.Sequence[object]) -> str:
    return ", ".join(repr(arg) for arg in args)


def _format_kwargs(kwargs: t.Mapping[str, object]) -> str:
    return ", ".join(f"{key}={value!r}" for key, value in kwargs.items())


def format_call(name: str, call: Call) -> str:
    """Return *call* rendered as ``name(arg, key=value)``."""
    rendered = (_format_args(call.args), _format_kwargs(call.kwargs))
    parts = [part for part in rendered if part]
    return f"{name}({', '.join(parts)})"


def describe_calls(name: str, calls: t.Sequence[Call]) -> str:
    """Return a numbered listing of *calls*, or ``(none)``."""
    if not calls:
        return "(none)"
    return "\n".join(
        f"{index}. {format_call(name, call)}" for index, call in enumerate(calls, 1)
    )


def _last_call(name: str, calls: t.Sequence[Call]) -> Call:
    if not calls:
        msg = f"Expected {name!r} to be called but it was never called"
        raise AssertionError(msg)
    return calls[-1]


def assert_called(name: str, calls: t.Sequence[Call]) -> None:
    """Raise ``AssertionError`` if *calls* is empty."""
    _last_call(name, calls)


def assert_not_called(name: str, calls: t.Sequence[Call]) -> None:
    """Raise ``AssertionError`` if *calls* is not empty."""
    if calls:
        last = calls[-1]
        msg = (
            f"Expected {name!r} to be uncalled but it was called "
            f"{len(calls)} time(s); last args={last.arguments!r}"
        )
        raise AssertionError(msg)


def assert_called_with(
    name: str,
    calls: t.Sequence[Call],
    args: tuple[object, ...],
    kwargs: t.Mapping[str, object],
) -> None:
    """Raise ``AssertionError`` unless the last call used *args* and *kwargs*."""
    last = _last_call(name, calls)
    if last.arguments != list(args):
        msg = f"{name!r} called with args {last.arguments!r}, expected {list(args)!r}"
        raise AssertionError(msg)
    if last.kwargs != dict(kwargs):
        msg = f"{name!r} called with kwargs {last.kwargs!r}, expected {dict(kwargs)!r}"
        raise AssertionError(msg)


def assert_called_times(name: str, calls: t.Sequence[Call], count: int) -> None:
    """Raise ``AssertionError`` unless *calls* holds exactly *count* entries."""
    if len(calls) != count:
        msg = "\n".join(
            [
                f"Expected {name!r} to be called {count} time(s) "
                f"but it was called {len(calls)} time(s)",
                "Recorded calls:",
                describe_calls(name, calls),
            ]
        )
        raise AssertionError(msg)
