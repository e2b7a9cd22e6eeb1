"""Rule-based stubs, mocks and spies for Python objects and classes.

Doubles answer calls from per-method rules configured by argument values,
predicates or call order, and record every call for later inspection.
"""

from __future__ import annotations

from .api import (
    default_factory,
    default_registry,
    mock,
    mock_class,
    spy,
    stub,
    stub_class,
)
from .calls import Call
from .comparators import Any, Contains, IsA, Predicate, Regex, StartsWith
from .controller import DoubleController, controller_of
from .errors import (
    ConfigurationError,
    IndexOutOfRangeError,
    MokaError,
    NotStubbedError,
)
from .factory import CONSTRUCTOR, STATIC_MARKER, DoubleFactory, Mode
from .ledger import BehaviorLedger
from .registry import ClassRegistry
from .rules import Invoke, Raise, ReturnValue, Rule, RuleBuilder
from .spy import Spy

__all__ = [
    "CONSTRUCTOR",
    "STATIC_MARKER",
    "Any",
    "BehaviorLedger",
    "Call",
    "ClassRegistry",
    "ConfigurationError",
    "Contains",
    "DoubleController",
    "DoubleFactory",
    "IndexOutOfRangeError",
    "Invoke",
    "IsA",
    "Mode",
    "MokaError",
    "NotStubbedError",
    "Predicate",
    "Raise",
    "Regex",
    "ReturnValue",
    "Rule",
    "RuleBuilder",
    "Spy",
    "StartsWith",
    "controller_of",
    "default_factory",
    "default_registry",
    "mock",
    "mock_class",
    "spy",
    "stub",
    "stub_class",
]
