"""Unit tests for verification mode construction."""

from __future__ import annotations

import typing as t

import pytest

from callmox.errors import ConfigurationError
from callmox.modes import (
    AtLeast,
    AtMost,
    InOrder,
    Times,
    at_least,
    at_least_once,
    at_most,
    never,
    times,
)
from callmox.ordering import OrderingContext


@pytest.mark.parametrize("factory", [times, at_least, at_most])
def test_negative_counts_are_rejected(factory: t.Callable[[int], object]) -> None:
    """Negative counts fail when the mode is built, not when it is used."""
    with pytest.raises(ConfigurationError, match=">= 0"):
        factory(-1)


@pytest.mark.parametrize("value", [1.5, "2", True])
def test_non_integer_counts_are_rejected(value: object) -> None:
    """Only real integers are accepted as counts."""
    with pytest.raises(ConfigurationError, match="integer"):
        Times(value)  # type: ignore[arg-type]


def test_factories_build_expected_modes() -> None:
    """Shortcut factories produce the documented modes."""
    assert times(3) == Times(3)
    assert never() == Times(0)
    assert at_least(2) == AtLeast(2)
    assert at_least_once() == AtLeast(1)
    assert at_most(4) == AtMost(4)


def test_zero_counts_are_allowed() -> None:
    """Zero is a valid count for every mode."""
    assert Times(0).minimum == 0
    assert AtLeast(0).minimum == 0
    assert AtMost(0).minimum == 0


def test_in_order_wraps_mode_with_context() -> None:
    """InOrder keeps the wrapped mode and its ordering context."""
    context = OrderingContext((object(),))
    mode = InOrder(times(2), context)
    assert mode.mode == Times(2)
    assert mode.context is context
    assert str(mode) == "exactly 2, in order"


def test_in_order_cannot_nest() -> None:
    """Ordering wrappers cannot wrap each other."""
    context = OrderingContext((object(),))
    with pytest.raises(TypeError):
        InOrder(InOrder(times(1), context), context)  # type: ignore[arg-type]
