"""Shared validation helpers."""

from __future__ import annotations

import keyword

from .errors import ConfigurationError


def validate_call_index(index: int) -> None:
    """Ensure *index* is usable as a 0-based call occurrence number."""
    if isinstance(index, bool) or not isinstance(index, int):
        msg = "call index must be an integer"
        raise TypeError(msg)

    if index < 0:
        msg = "call index must be >= 0"
        raise ValueError(msg)


def validate_member_name(name: str) -> None:
    """Ensure *name* can be installed as an attribute of a double."""
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        msg = f"{name!r} is not a valid method name"
        raise ConfigurationError(msg)
