"""Normalise raw call arguments before recording or matching them."""

from __future__ import annotations

import typing as t

from .comparators import Comparator
from .matchers import MATCHER_TYPES, ArgumentMatcher, ArrayEquals, Custom, Equals


def is_explicit_matcher(value: object) -> bool:
    """Return ``True`` when *value* was supplied as a matcher, not a value."""
    return isinstance(value, (*MATCHER_TYPES, Comparator))


def expand_varargs(args: t.Sequence[object], *, variadic: bool) -> tuple[object, ...]:
    """Flatten a trailing variadic group so arities line up.

    A trailing list or tuple is spliced into the argument list. A trailing
    ``None`` is kept as a single ``None`` argument rather than an empty group.
    """
    flat = tuple(args)
    if not variadic or not flat:
        return flat
    trailing = flat[-1]
    if is_explicit_matcher(trailing):
        return flat
    if isinstance(trailing, (list, tuple)):
        return (*flat[:-1], *trailing)
    return flat


def to_matcher(arg: object) -> ArgumentMatcher:
    """Wrap *arg* in the matcher that compares call arguments against it."""
    if isinstance(arg, MATCHER_TYPES):
        return t.cast("ArgumentMatcher", arg)
    if isinstance(arg, Comparator):
        return Custom(arg)
    if isinstance(arg, (list, tuple)):
        return ArrayEquals(arg)
    return Equals(arg)


def to_matchers(args: t.Iterable[object]) -> tuple[ArgumentMatcher, ...]:
    """Return a matcher for every element of *args*."""
    return tuple(to_matcher(arg) for arg in args)


__all__ = ["expand_varargs", "is_explicit_matcher", "to_matcher", "to_matchers"]
