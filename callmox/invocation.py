"""Invocation records and the values that identify a call."""

from __future__ import annotations

import dataclasses as dc
import itertools
import sys
import threading

_sequence_counter = itertools.count(1)
_sequence_lock = threading.Lock()


def next_sequence() -> int:
    """Return the next process-wide invocation sequence number."""
    with _sequence_lock:
        return next(_sequence_counter)


@dc.dataclass(slots=True, frozen=True)
class MethodSignature:
    """Identity of a mocked method.

    Parameters
    ----------
    name:
        Method name.
    params:
        Declared parameter types (or type names) in order. ``None`` leaves
        the arity undeclared so any number of arguments is accepted.
    variadic:
        ``True`` when the last declared parameter collects a variadic group.
    """

    name: str
    params: tuple[type | str, ...] | None = None
    variadic: bool = False

    def accepts_arity(self, count: int) -> bool:
        """Return ``True`` when *count* arguments fit the declared parameters."""
        if self.params is None:
            return True
        if self.variadic:
            return count >= len(self.params) - 1
        return count == len(self.params)


@dc.dataclass(slots=True, frozen=True)
class Location:
    """Call site of a recorded invocation."""

    filename: str
    lineno: int
    function: str

    @classmethod
    def capture(cls, depth: int = 1) -> Location:
        """Return the location of the frame *depth* levels above the caller."""
        frame = sys._getframe(depth + 1)  # noqa: SLF001
        code = frame.f_code
        return cls(code.co_filename, frame.f_lineno, code.co_name)

    def __str__(self) -> str:
        """Return ``filename:lineno in function``."""
        return f"{self.filename}:{self.lineno} in {self.function}"


@dc.dataclass(slots=True, eq=False)
class Invocation:
    """One completed call on a test double.

    Records compare by identity. ``verified`` is the only field that changes
    after creation and only ever goes from ``False`` to ``True``.
    """

    mock: object
    signature: MethodSignature
    args: tuple[object, ...]
    sequence: int = dc.field(default_factory=next_sequence)
    location: Location | None = None
    verified: bool = dc.field(default=False, init=False)

    def mark_verified(self) -> None:
        """Flag this invocation as accounted for by a verification."""
        self.verified = True

    def __repr__(self) -> str:
        """Return a compact debug representation."""
        args = ", ".join(repr(arg) for arg in self.args)
        return f"Invocation(#{self.sequence} {self.signature.name}({args}))"


__all__ = ["Invocation", "Location", "MethodSignature", "next_sequence"]
