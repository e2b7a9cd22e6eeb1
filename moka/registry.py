"""Registry of class-level controllers for class doubles."""

from __future__ import annotations

import logging
import typing as t

from .errors import MokaError

if t.TYPE_CHECKING:
    from .controller import DoubleController

logger = logging.getLogger(__name__)


class ClassRegistry:
    """Hold the class-scoped controller of each class double by name.

    Building a class double registers its controller here; building another
    one under the same name replaces the entry. Classes built earlier keep
    answering through their own controller.
    """

    def __init__(self) -> None:
        self._controllers: dict[str, DoubleController] = {}

    def __contains__(self, name: object) -> bool:
        """Return ``True`` if a class double named *name* is registered."""
        return name in self._controllers

    def __len__(self) -> int:
        """Return the number of registered class doubles."""
        return len(self._controllers)

    def register(self, name: str, controller: DoubleController) -> None:
        """Register *controller* under *name*, replacing any previous entry."""
        if name in self._controllers:
            logger.debug("Replacing class double %r", name)
        self._controllers[name] = controller

    def get(self, name: str) -> DoubleController:
        """Return the controller registered under *name*."""
        try:
            return self._controllers[name]
        except KeyError:
            msg = f"no class double named {name!r} is registered"
            raise MokaError(msg) from None

    def names(self) -> list[str]:
        """Return registered names in registration order."""
        return list(self._controllers)

    def clear(self) -> None:
        """Forget every registered class double."""
        if self._controllers:
            logger.debug("Clearing %d class double(s)", len(self._controllers))
        self._controllers.clear()
