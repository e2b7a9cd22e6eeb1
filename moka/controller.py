"""Double controller routing calls to per-method behaviour ledgers."""

from __future__ import annotations

import collections.abc as cabc
import typing as t

from . import verifiers
from .calls import Call
from .errors import IndexOutOfRangeError, NotStubbedError
from .ledger import BehaviorLedger

if t.TYPE_CHECKING:
    from .rules import RuleBuilder

Config = cabc.Mapping[str, t.Any] | cabc.Iterable[str]

#: Attribute under which every double exposes its controller.
CONTROLLER_ATTR = "moka"


def iter_config(config: Config | None) -> t.Iterator[tuple[str, t.Any]]:
    """Yield ``(name, value)`` pairs from a mapping or a list of names.

    A bare name stands for a method configured to return ``None``.
    """
    if config is None:
        return
    if isinstance(config, cabc.Mapping):
        yield from config.items()
        return
    if isinstance(config, str):
        msg = "configuration must be a mapping or an iterable of names, not str"
        raise TypeError(msg)
    for name in config:
        yield name, None


class DoubleController:
    """Configuration, dispatch and reporting for one double.

    Parameters
    ----------
    name:
        Label used in debug representations.
    delegate:
        Object answering methods that were not configured. When ``None``
        such calls raise :class:`~moka.errors.NotStubbedError`; otherwise
        they are forwarded to ``getattr(delegate, name)`` and not recorded.
    """

    def __init__(
        self, *, name: str = "double", delegate: object | None = None
    ) -> None:
        self.name = name
        self.delegate = delegate
        self._ledgers: dict[str, BehaviorLedger] = {}
        self._allowed: set[str] = set()
        self._instances: list[DoubleController] = []

    def __repr__(self) -> str:
        """Return a debug representation."""
        return (
            f"DoubleController(name={self.name!r}, "
            f"methods={sorted(self._allowed)!r}, instances={len(self._instances)})"
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def allowed_methods(self) -> frozenset[str]:
        """Return the names this double answers."""
        return frozenset(self._allowed)

    @property
    def passthrough(self) -> bool:
        """Return ``True`` when unconfigured names reach a real delegate."""
        return self.delegate is not None

    @property
    def instances(self) -> tuple[DoubleController, ...]:
        """Return instance controllers in construction order."""
        return tuple(self._instances)

    def ledger(self, method: str) -> BehaviorLedger:
        """Return the ledger for *method*, creating it on first use."""
        ledger = self._ledgers.get(method)
        if ledger is None:
            ledger = BehaviorLedger(method)
            self._ledgers[method] = ledger
        return ledger

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def configure(self, config: Config | None) -> None:
        """Register a default rule for every entry of *config*."""
        for method, value in iter_config(config):
            self.ledger(method).add_default_rule(value)
            self._allowed.add(method)

    def allow(self, method: str) -> None:
        """Let *method* be answered without adding a rule."""
        self.ledger(method)
        self._allowed.add(method)

    def stubs(self, method: str) -> RuleBuilder:
        """Return a rule builder bound to *method*'s ledger."""
        return self.ledger(method).stubs()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def dispatch(
        self,
        method: str,
        args: t.Sequence[t.Any] = (),
        kwargs: t.Mapping[str, t.Any] | None = None,
    ) -> t.Any:
        """Answer a call to *method* with *args* and *kwargs*."""
        call = Call(tuple(args), dict(kwargs or {}))
        if method in self._allowed:
            return self.ledger(method).dispatch(call)
        if self.delegate is not None:
            return call.apply(getattr(self.delegate, method))
        self.ledger(method).record(call)
        raise NotStubbedError(method)

    # ------------------------------------------------------------------
    # Instance registry
    # ------------------------------------------------------------------
    def register_instance(self, controller: DoubleController) -> None:
        """Append the controller of a newly constructed instance."""
        self._instances.append(controller)

    def instance(self, index: int) -> DoubleController:
        """Return the controller of the *index*-th constructed instance."""
        if not 0 <= index < len(self._instances):
            raise IndexOutOfRangeError(index, len(self._instances))
        return self._instances[index]

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def report(self, method: str) -> list[list[t.Any]]:
        """Return the positional arguments of every call to *method*.

        Keyword arguments are omitted; :meth:`calls` returns full
        :class:`~moka.calls.Call` records.
        """
        ledger = self._ledgers.get(method)
        return [] if ledger is None else ledger.report()

    def calls(self, method: str) -> list[Call]:
        """Return the recorded calls to *method*."""
        ledger = self._ledgers.get(method)
        return [] if ledger is None else list(ledger.calls)

    def call_count(self, method: str) -> int:
        """Return how many times *method* was called."""
        ledger = self._ledgers.get(method)
        return 0 if ledger is None else ledger.call_count

    def assert_called(self, method: str) -> None:
        """Assert *method* was called at least once."""
        verifiers.assert_called(method, self.calls(method))

    def assert_not_called(self, method: str) -> None:
        """Assert *method* was never called."""
        verifiers.assert_not_called(method, self.calls(method))

    def assert_called_with(self, method: str, *args: t.Any, **kwargs: t.Any) -> None:
        """Assert the last call to *method* used ``args`` and ``kwargs``."""
        verifiers.assert_called_with(method, self.calls(method), args, kwargs)

    def assert_called_times(self, method: str, count: int) -> None:
        """Assert *method* was called exactly *count* times."""
        verifiers.assert_called_times(method, self.calls(method), count)


def controller_of(double: object) -> DoubleController:
    """Return the controller attached to *double*."""
    controller = getattr(double, CONTROLLER_ATTR, None)
    if not isinstance(controller, DoubleController):
        msg = f"{double!r} is not a moka double"
        raise TypeError(msg)
    return controller
