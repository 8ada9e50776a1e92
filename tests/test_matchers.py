"""Argument matchers and captors used through a session."""

from __future__ import annotations

import pytest

from callmox.errors import NoArgumentValueCaptured, TooFewInvocations
from callmox.matchers import (
    ArrayEquals,
    Capturing,
    Custom,
    Equals,
    arg_that,
    argument_matches,
    captor,
    eq,
)
from callmox.session import Session
from tests.helpers.doubles import PAIR, SIMPLE, FakeDouble


@pytest.mark.parametrize(
    ("matcher", "value", "expected"),
    [
        (Equals("a"), "a", True),
        (Equals("a"), "b", False),
        (Equals(None), None, True),
        (ArrayEquals([1, 2]), (1, 2), True),
        (ArrayEquals([1, [2, 3]]), [1, [2, 3]], True),
        (ArrayEquals([1, 2]), [1, 2, 3], False),
        (ArrayEquals([1, 2]), "12", False),
        (ArrayEquals(None), None, True),
        (ArrayEquals(None), [], False),
        (Custom(lambda v: v > 3), 4, True),
        (Custom(lambda v: v > 3), 2, False),
    ],
)
def test_argument_matches(matcher: object, value: object, *, expected: bool) -> None:
    """Each matcher variant applies its own comparison."""
    assert argument_matches(matcher, value) is expected  # type: ignore[arg-type]


def test_eq_picks_sequence_matcher() -> None:
    """eq() compares lists and tuples element-wise."""
    assert eq([1, 2]) == ArrayEquals([1, 2])
    assert eq("x") == Equals("x")


def test_captor_keeps_every_value() -> None:
    """A captor used across several matching calls keeps all their arguments."""
    session = Session()
    mock = FakeDouble(session)
    for value in ("a", "b", "c"):
        mock.simple(value)

    arg = captor()
    session.verify(mock, 3).that(SIMPLE, arg)

    assert arg.value == "c"
    assert arg.all_values == ["a", "b", "c"]


def test_captor_value_before_capture_raises() -> None:
    """Reading a captor that captured nothing is an error."""
    with pytest.raises(NoArgumentValueCaptured):
        _ = Capturing().value
    assert Capturing().all_values == []


def test_captor_ignores_partial_matches() -> None:
    """A captor only records arguments of calls that matched fully."""
    session = Session()
    mock = FakeDouble(session)
    mock.pair(1, 10)
    mock.pair(2, 20)

    arg = captor()
    session.verify(mock).that(PAIR, 2, arg)

    assert arg.all_values == [20]


def test_arg_that_in_verification() -> None:
    """Custom predicates select matching calls."""
    session = Session()
    mock = FakeDouble(session)
    mock.simple("short")
    mock.simple("a much longer value")

    session.verify(mock).that(SIMPLE, arg_that(lambda s: len(s) > 10))
    with pytest.raises(TooFewInvocations):
        session.verify(mock, 2).that(SIMPLE, arg_that(lambda s: " " not in s))
