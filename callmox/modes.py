"""Verification modes: how many matching calls a verification accepts."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from ._validators import validate_count

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .ordering import OrderingContext


@dc.dataclass(slots=True, frozen=True)
class Times:
    """Require exactly ``count`` matching calls."""

    count: int

    def __post_init__(self) -> None:
        """Reject negative counts."""
        validate_count(self.count)

    @property
    def minimum(self) -> int:
        """Return the smallest accepted number of calls."""
        return self.count

    def __str__(self) -> str:
        """Return a short description of the mode."""
        return f"exactly {self.count}"


@dc.dataclass(slots=True, frozen=True)
class AtLeast:
    """Require ``minimum`` or more matching calls."""

    minimum: int

    def __post_init__(self) -> None:
        """Reject negative counts."""
        validate_count(self.minimum, name="minimum")

    def __str__(self) -> str:
        """Return a short description of the mode."""
        return f"at least {self.minimum}"


@dc.dataclass(slots=True, frozen=True)
class AtMost:
    """Allow at most ``maximum`` matching calls."""

    maximum: int

    def __post_init__(self) -> None:
        """Reject negative counts."""
        validate_count(self.maximum, name="maximum")

    @property
    def minimum(self) -> int:
        """Return the smallest accepted number of calls."""
        return 0

    def __str__(self) -> str:
        """Return a short description of the mode."""
        return f"at most {self.maximum}"


CountingMode: t.TypeAlias = Times | AtLeast | AtMost


@dc.dataclass(slots=True, frozen=True)
class InOrder:
    """Apply ``mode`` to calls made after the last in-order verification."""

    mode: CountingMode
    context: OrderingContext = dc.field(compare=False)

    def __post_init__(self) -> None:
        """Refuse to nest ordering wrappers."""
        if isinstance(self.mode, InOrder):
            msg = "InOrder cannot wrap another InOrder mode"
            raise TypeError(msg)

    def __str__(self) -> str:
        """Return a short description of the mode."""
        return f"{self.mode}, in order"


VerificationMode: t.TypeAlias = CountingMode | InOrder


def times(count: int) -> Times:
    """Return a mode requiring exactly *count* calls."""
    return Times(count)


def never() -> Times:
    """Return a mode requiring no calls at all."""
    return Times(0)


def at_least(minimum: int) -> AtLeast:
    """Return a mode requiring *minimum* or more calls."""
    return AtLeast(minimum)


def at_least_once() -> AtLeast:
    """Return a mode requiring one or more calls."""
    return AtLeast(1)


def at_most(maximum: int) -> AtMost:
    """Return a mode allowing up to *maximum* calls."""
    return AtMost(maximum)


__all__ = [
    "AtLeast",
    "AtMost",
    "CountingMode",
    "InOrder",
    "Times",
    "VerificationMode",
    "at_least",
    "at_least_once",
    "at_most",
    "never",
    "times",
]
