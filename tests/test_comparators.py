"""Comparator helpers and argument matching tests."""

from __future__ import annotations

import re
import typing as t

import pytest

from moka.calls import Call
from moka.comparators import (
    Any as AnyComparator,
)
from moka.comparators import (
    Contains,
    IsA,
    Predicate,
    Regex,
    StartsWith,
)
from moka.ledger import BehaviorLedger


@pytest.mark.parametrize(
    ("matcher", "good", "bad", "expected_repr"),
    [
        (AnyComparator(), "anything", None, "Any()"),
        (IsA(int), 42, "42", "IsA(typ=<class 'int'>)"),
        (Contains("bar"), "foobarbaz", "qux", "Contains(item='bar')"),
        (Contains(3), [1, 2, 3], [4], "Contains(item=3)"),
        (StartsWith("bar"), "barfly", "foobar", "StartsWith(prefix='bar')"),
    ],
)
def test_matchers_match_and_repr(
    matcher: t.Callable[[object], bool],
    good: object,
    bad: object | None,
    expected_repr: str,
) -> None:
    """Matchers evaluate values and provide helpful reprs."""
    assert matcher(good)
    if bad is not None:
        assert not matcher(bad)
    assert repr(matcher) == expected_repr


class CustomType:
    """Example user-defined type for IsA tests."""


def test_is_a_repr_with_custom_type() -> None:
    """User-defined classes show their fully-qualified name in repr."""
    expected = f"IsA(typ=<class '{CustomType.__module__}.{CustomType.__qualname__}'>)"
    assert repr(IsA(CustomType)) == expected


def test_is_a_accepts_tuple_of_types() -> None:
    """IsA follows ``isinstance`` semantics for tuples."""
    matcher = IsA((int, float))
    assert matcher(1)
    assert matcher(1.5)
    assert not matcher("1")


def test_regex_matches_and_repr() -> None:
    """Regex matches via search and exposes its pattern."""
    pattern = r"foo\d"
    matcher = Regex(pattern)
    assert matcher("xfoo1")
    assert not matcher("bar")
    assert repr(matcher) == f"Regex(pattern={pattern!r})"


def test_regex_invalid_pattern_raises() -> None:
    """Regex raises an error when the pattern is malformed."""
    with pytest.raises(re.error):
        Regex("[unclosed")


@pytest.mark.parametrize("value", [123, None, ["foo1"]])
def test_regex_rejects_non_string_input(value: object) -> None:
    """Regex never matches non-string values."""
    assert not Regex(r"^foo\d$")(value)


@pytest.mark.parametrize("value", [None, 5, 3.0])
def test_contains_rejects_non_containers(value: object) -> None:
    """Contains answers ``False`` for values without membership tests."""
    assert not Contains("a")(value)


def test_startswith_rejects_non_string_input() -> None:
    """StartsWith only matches strings."""
    assert not StartsWith("b")(b"bytes")


def test_comparators_compare_by_value() -> None:
    """Frozen comparators are equal when their parameters are."""
    assert Regex("a+") == Regex("a+")
    assert IsA(int) == IsA(int)
    assert hash(StartsWith("x")) == hash(StartsWith("x"))


def test_predicate_matches_and_repr() -> None:
    """Predicate delegates to the provided function."""
    matcher = Predicate(str.isupper)
    assert matcher("HELLO")
    assert not matcher("hi")
    rep = repr(matcher)
    assert rep.startswith("Predicate(func=<")
    assert rep.endswith(")")


def test_predicate_raises_exception() -> None:
    """Predicate propagates exceptions from the wrapped function."""

    def raises_exc(_: str) -> bool:
        msg = "Test exception"
        raise ValueError(msg)

    matcher = Predicate(raises_exc)
    with pytest.raises(ValueError, match="Test exception"):
        matcher("anything")


def test_predicate_non_boolean_return() -> None:
    """Predicate coerces the function result to bool."""
    assert Predicate(lambda _: "not a bool")("anything") is True
    assert Predicate(lambda _: "")("anything") is False


def test_rule_with_matchers() -> None:
    """Rules use comparator objects for flexible argument matching."""
    ledger = BehaviorLedger("cmd")
    ledger.add_default_rule("DEFAULT")
    ledger.stubs().with_matching_args(
        AnyComparator(),
        IsA(int),
        Regex(r"^foo\d+$"),
        Contains("bar"),
        StartsWith("baz"),
        Predicate(str.isupper),
    ).returns("MATCHED")
    call = Call.of(object(), 123, "foo7", "zzbarzz", "bazooka", "HELLO")
    assert ledger.dispatch(call) == "MATCHED"


@pytest.mark.parametrize(
    "args",
    [
        ("oops", "foo"),  # first matcher fails
        (123, "bar"),  # second matcher fails
        (123,),  # argument count mismatch
        (123, "foo", "extra"),  # argument count mismatch
    ],
)
def test_rule_with_matchers_failure(args: tuple[object, ...]) -> None:
    """Rules fall back when arguments do not satisfy the matchers."""
    ledger = BehaviorLedger("cmd")
    ledger.add_default_rule("DEFAULT")
    ledger.stubs().with_matching_args(IsA(int), Contains("foo")).returns("MATCHED")
    assert ledger.dispatch(Call.of(*args)) == "DEFAULT"
