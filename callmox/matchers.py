"""Argument matchers applied to single call arguments during verification.

The matcher variants form a closed set; :func:`argument_matches` dispatches
over it exhaustively.
"""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .errors import NoArgumentValueCaptured

_SEQUENCE_TYPES: tuple[type, ...] = (list, tuple)


@dc.dataclass(slots=True, frozen=True)
class Equals:
    """Match values equal to ``expected``."""

    expected: object


@dc.dataclass(slots=True, frozen=True)
class ArrayEquals:
    """Match list or tuple values element-wise equal to ``expected``."""

    expected: t.Sequence[object] | None


@dc.dataclass(slots=True, eq=False)
class Capturing:
    """Match any value and remember it for later inspection."""

    _values: list[object] = dc.field(default_factory=list, repr=False)

    def capture(self, value: object) -> None:
        """Append *value* to the captured values."""
        self._values.append(value)

    @property
    def value(self) -> object:
        """Return the most recently captured value."""
        if not self._values:
            raise NoArgumentValueCaptured
        return self._values[-1]

    @property
    def all_values(self) -> list[object]:
        """Return a copy of every captured value in capture order."""
        return list(self._values)


@dc.dataclass(slots=True, frozen=True)
class Custom:
    """Match values for which ``predicate`` returns a truthy result."""

    predicate: t.Callable[[t.Any], object]

    def __repr__(self) -> str:
        """Return the predicate's representation."""
        return repr(self.predicate)


ArgumentMatcher: t.TypeAlias = Equals | ArrayEquals | Capturing | Custom
MATCHER_TYPES: tuple[type, ...] = (Equals, ArrayEquals, Capturing, Custom)


def _sequence_equals(expected: t.Sequence[object] | None, value: object) -> bool:
    if expected is None:
        return value is None
    if not isinstance(value, _SEQUENCE_TYPES) or len(value) != len(expected):
        return False
    for want, got in zip(expected, value, strict=True):
        if isinstance(want, _SEQUENCE_TYPES):
            if not _sequence_equals(want, got):
                return False
        elif want != got:
            return False
    return True


def argument_matches(matcher: ArgumentMatcher, value: object) -> bool:
    """Return ``True`` when *matcher* accepts *value*.

    :class:`Capturing` matchers record *value* as a side effect.
    """
    match matcher:
        case Equals(expected=expected):
            return bool(expected == value)
        case ArrayEquals(expected=expected):
            return _sequence_equals(expected, value)
        case Capturing():
            matcher.capture(value)
            return True
        case Custom(predicate=predicate):
            return bool(predicate(value))
        case _:
            t.assert_never(matcher)


def eq(value: object) -> ArgumentMatcher:
    """Return an explicit equality matcher for *value*."""
    if isinstance(value, _SEQUENCE_TYPES):
        return ArrayEquals(value)
    return Equals(value)


def arg_that(predicate: t.Callable[[t.Any], object]) -> Custom:
    """Return a matcher accepting values for which *predicate* is truthy."""
    return Custom(predicate)


def captor() -> Capturing:
    """Return a fresh capturing matcher."""
    return Capturing()


__all__ = [
    "MATCHER_TYPES",
    "ArgumentMatcher",
    "ArrayEquals",
    "Capturing",
    "Custom",
    "Equals",
    "arg_that",
    "argument_matches",
    "captor",
    "eq",
]
