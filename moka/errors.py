"""Exception hierarchy for moka."""

from __future__ import annotations


class MokaError(Exception):
    """Base class for all errors raised by moka."""


class NotStubbedError(MokaError):
    """Raised when a double receives a call that no rule answers."""

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f'method "{method}" is not stubbed')


class IndexOutOfRangeError(MokaError, IndexError):
    """Raised when an instance controller is requested that does not exist."""

    def __init__(self, index: int, available: int) -> None:
        self.index = index
        self.available = available
        super().__init__(
            f"instance {index} requested but {available} instance(s) were created"
        )


class ConfigurationError(MokaError, ValueError):
    """Raised when a double's configuration map is invalid."""


__all__ = [
    "ConfigurationError",
    "IndexOutOfRangeError",
    "MokaError",
    "NotStubbedError",
]
