"""Simple comparator classes used for argument matching.

Comparators are explicit argument matchers: passing one where a call argument
is expected makes the verification test the argument with the comparator
instead of comparing it for equality.
"""

from __future__ import annotations

import re
import typing as t


class Comparator:
    """Base class for callables returning ``True`` when a value matches."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""
        raise NotImplementedError


class Any(Comparator):
    """Match any value, optionally restricted to instances of ``typ``."""

    def __init__(self, typ: type | None = None) -> None:
        self.typ = typ

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input of the accepted type."""
        return self.typ is None or isinstance(value, self.typ)

    def __repr__(self) -> str:
        """Return a debug representation."""
        if self.typ is None:
            return "Any()"
        return f"Any({self.typ.__name__})"


class IsA(Comparator):
    """Match instances of ``typ``."""

    def __init__(self, typ: type) -> None:
        self.typ = typ

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value`` is an instance of ``typ``."""
        return isinstance(value, self.typ)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"IsA({self.typ.__name__})"


class Same(Comparator):
    """Match the very object ``expected``."""

    def __init__(self, expected: object) -> None:
        self.expected = expected

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* is ``expected``."""
        return value is self.expected

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Same({self.expected!r})"


class IsNone(Comparator):
    """Match ``None``."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* is ``None``."""
        return value is None

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "IsNone()"


class NotNone(Comparator):
    """Match anything but ``None``."""

    def __call__(self, value: object) -> bool:
        """Return ``True`` when *value* is not ``None``."""
        return value is not None

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "NotNone()"


class Regex(Comparator):
    """Match if *value* is a string matching ``pattern``."""

    def __init__(self, pattern: str) -> None:
        self._pattern = re.compile(pattern)

    def __call__(self, value: object) -> bool:
        """Return ``True`` if the regex matches *value*."""
        if not isinstance(value, str):
            return False
        return bool(self._pattern.search(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Regex({self._pattern.pattern!r})"


class Contains(Comparator):
    """Match if ``substring`` is found in *value*."""

    def __init__(self, substring: str) -> None:
        self.substring = substring

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``substring`` is in *value*."""
        return isinstance(value, str) and self.substring in value

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Contains({self.substring!r})"


class StartsWith(Comparator):
    """Match if *value* begins with ``prefix``."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* starts with ``prefix``."""
        return isinstance(value, str) and value.startswith(self.prefix)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"StartsWith({self.prefix!r})"


class EndsWith(Comparator):
    """Match if *value* ends with ``suffix``."""

    def __init__(self, suffix: str) -> None:
        self.suffix = suffix

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* ends with ``suffix``."""
        return isinstance(value, str) and value.endswith(self.suffix)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"EndsWith({self.suffix!r})"


class Predicate(Comparator):
    """Use a custom ``func`` to determine a match."""

    def __init__(self, func: t.Callable[[t.Any], object]) -> None:
        self.func = func

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        name = getattr(self.func, "__name__", None) or repr(self.func)
        return f"Predicate({name})"


__all__ = [
    "Any",
    "Comparator",
    "Contains",
    "EndsWith",
    "IsA",
    "IsNone",
    "NotNone",
    "Predicate",
    "Regex",
    "Same",
    "StartsWith",
]
