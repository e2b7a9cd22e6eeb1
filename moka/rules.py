"""Rules deciding how a behaviour ledger answers a call."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from ._validators import validate_call_index
from .calls import Call

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .ledger import BehaviorLedger


@dc.dataclass(frozen=True, slots=True)
class ReturnValue:
    """Answer with a literal ``value``."""

    value: t.Any = None

    def __call__(self, call: Call) -> t.Any:
        """Return the configured value regardless of *call*."""
        return self.value


@dc.dataclass(frozen=True, slots=True)
class Invoke:
    """Answer with the result of ``func`` applied to the call arguments."""

    func: t.Callable[..., t.Any]

    def __call__(self, call: Call) -> t.Any:
        """Return ``func(*args, **kwargs)`` for *call*."""
        return call.apply(self.func)


@dc.dataclass(frozen=True, slots=True)
class Raise:
    """Answer by raising ``exc``."""

    exc: BaseException | type[BaseException]

    def __call__(self, call: Call) -> t.NoReturn:
        """Raise the configured exception."""
        raise self.exc


Action = ReturnValue | Invoke | Raise


@dc.dataclass(frozen=True, slots=True)
class Rule:
    """Optional match constraints paired with exactly one action."""

    action: Action
    expected: Call | None = None
    matchers: tuple[t.Callable[[t.Any], object], ...] | None = None
    predicate: t.Callable[..., object] | None = None
    call_index: int | None = None

    @property
    def is_default(self) -> bool:
        """Return ``True`` when the rule carries no constraint at all."""
        return (
            self.expected is None
            and self.matchers is None
            and self.predicate is None
            and self.call_index is None
        )

    def matches(self, call: Call, index: int) -> bool:
        """Return ``True`` if *call*, the *index*-th occurrence, is eligible."""
        return (
            self._matches_index(index)
            and self._matches_args(call)
            and self._matches_predicate(call)
        )

    def _matches_index(self, index: int) -> bool:
        """Check the occurrence number."""
        return self.call_index is None or self.call_index == index

    def _matches_args(self, call: Call) -> bool:
        """Validate arguments by equality and per-argument matchers."""
        if self.expected is not None and self.expected != call:
            return False
        if self.matchers is not None:
            if len(call.args) != len(self.matchers):
                return False
            for arg, matcher in zip(call.args, self.matchers, strict=True):
                if not matcher(arg):
                    return False
        return True

    def _matches_predicate(self, call: Call) -> bool:
        """Apply the predicate to the call arguments."""
        if self.predicate is None:
            return True
        return bool(call.apply(self.predicate))


@dc.dataclass(slots=True)
class RuleBuilder:
    """Collect constraints for a rule and append it once an action is chosen.

    Constraint methods return the builder so they can be chained in any
    order; :meth:`returns`, :meth:`calls` and :meth:`raises` finish the chain
    by appending a :class:`Rule` to the bound ledger.
    """

    ledger: BehaviorLedger
    expected: Call | None = None
    matchers: tuple[t.Callable[[t.Any], object], ...] | None = None
    predicate: t.Callable[..., object] | None = None
    call_index: int | None = None

    def with_args(self, *args: t.Any, **kwargs: t.Any) -> RuleBuilder:
        """Require the call arguments to equal ``args`` and ``kwargs``."""
        self.expected = Call(args, kwargs)
        return self

    def with_matching_args(
        self, *matchers: t.Callable[[t.Any], object]
    ) -> RuleBuilder:
        """Use callables in ``matchers`` to validate each positional argument."""
        self.matchers = matchers
        return self

    def on(self, predicate: t.Callable[..., object]) -> RuleBuilder:
        """Require ``predicate(*args, **kwargs)`` to be truthy."""
        self.predicate = predicate
        return self

    def at(self, index: int) -> RuleBuilder:
        """Restrict the rule to the call whose 0-based occurrence is ``index``."""
        validate_call_index(index)
        self.call_index = index
        return self

    def returns(self, value: t.Any = None) -> Rule:
        """Answer matching calls with ``value``."""
        return self._commit(ReturnValue(value))

    def calls(self, func: t.Callable[..., t.Any]) -> Rule:
        """Answer matching calls with ``func(*args, **kwargs)``."""
        return self._commit(Invoke(func))

    def raises(self, exc: BaseException | type[BaseException]) -> Rule:
        """Answer matching calls by raising ``exc``."""
        return self._commit(Raise(exc))

    def _commit(self, action: Action) -> Rule:
        rule = Rule(
            action,
            expected=self.expected,
            matchers=self.matchers,
            predicate=self.predicate,
            call_index=self.call_index,
        )
        return self.ledger.add_rule(rule)


__all__ = ["Action", "Invoke", "Raise", "ReturnValue", "Rule", "RuleBuilder"]
