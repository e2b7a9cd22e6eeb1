"""Per-method rule lists and call logs."""

from __future__ import annotations

import logging
import typing as t

from .calls import Call
from .errors import NotStubbedError
from .rules import ReturnValue, Rule, RuleBuilder

logger = logging.getLogger(__name__)


class BehaviorLedger:
    """Ordered rules and recorded calls for a single method.

    Every call is appended to :attr:`calls` before any rule is consulted, so
    the log stays complete even when a call is rejected. Rules are scanned
    newest first and the first eligible one answers the call.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.rules: list[Rule] = []
        self.calls: list[Call] = []

    def __repr__(self) -> str:
        """Return a debug representation."""
        return (
            f"BehaviorLedger(name={self.name!r}, rules={len(self.rules)}, "
            f"calls={len(self.calls)})"
        )

    @property
    def call_count(self) -> int:
        """Return the number of calls received so far."""
        return len(self.calls)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def add_rule(self, rule: Rule) -> Rule:
        """Append *rule*; it takes precedence over every older rule."""
        self.rules.append(rule)
        return rule

    def add_default_rule(self, value: t.Any = None) -> Rule:
        """Append an unconditional rule returning *value*."""
        return self.add_rule(Rule(ReturnValue(value)))

    def stubs(self) -> RuleBuilder:
        """Return a builder bound to this ledger."""
        return RuleBuilder(self)

    def with_args(self, *args: t.Any, **kwargs: t.Any) -> RuleBuilder:
        """Start a rule constrained by exact call arguments."""
        return self.stubs().with_args(*args, **kwargs)

    def on(self, predicate: t.Callable[..., object]) -> RuleBuilder:
        """Start a rule constrained by *predicate*."""
        return self.stubs().on(predicate)

    def at(self, index: int) -> RuleBuilder:
        """Start a rule constrained to the *index*-th call."""
        return self.stubs().at(index)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def record(self, call: Call) -> int:
        """Append *call* to the log and return its occurrence number."""
        index = len(self.calls)
        self.calls.append(call)
        return index

    def select(self, call: Call, index: int) -> Rule | None:
        """Return the newest rule eligible for *call*, if any."""
        for rule in reversed(self.rules):
            if rule.matches(call, index):
                return rule
        return None

    def dispatch(self, call: Call) -> t.Any:
        """Record *call* and answer it with the winning rule's action.

        Raises
        ------
        NotStubbedError
            When no rule is eligible for the call.
        """
        index = self.record(call)
        rule = self.select(call, index)
        if rule is None:
            logger.debug(
                "No rule for call %d to %r among %d rule(s)",
                index,
                self.name,
                len(self.rules),
            )
            raise NotStubbedError(self.name)
        return rule.action(call)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    def report(self) -> list[list[t.Any]]:
        """Return the positional arguments of every call, in call order.

        Keyword arguments are not included, so ``m(key="v")`` reports as
        ``[]``; use :attr:`calls` to inspect them.
        """
        return [call.arguments for call in self.calls]
