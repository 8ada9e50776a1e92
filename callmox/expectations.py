"""Invocation matchers describing the call a verification expects."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .errors import ConfigurationError
from .matchers import Capturing, argument_matches
from .normalizer import expand_varargs, to_matchers

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import Invocation, MethodSignature
    from .matchers import ArgumentMatcher


@dc.dataclass(slots=True, frozen=True)
class InvocationMatcher:
    """Pattern selecting invocations of one method on one mock."""

    mock: object = dc.field(compare=False)
    signature: MethodSignature
    arg_matchers: tuple[ArgumentMatcher, ...] = ()

    def __post_init__(self) -> None:
        """Reject matcher lists that cannot fit the declared parameters."""
        if not self.signature.accepts_arity(len(self.arg_matchers)):
            msg = (
                f"{self.signature.name}() declares "
                f"{len(self.signature.params or ())} parameter(s); "
                f"got {len(self.arg_matchers)} argument matcher(s)"
            )
            raise ConfigurationError(msg)

    @classmethod
    def for_call(
        cls, mock: object, signature: MethodSignature, args: t.Sequence[object]
    ) -> InvocationMatcher:
        """Build a matcher from the arguments of an expected call."""
        flat = expand_varargs(args, variadic=signature.variadic)
        return cls(mock, signature, to_matchers(flat))

    def matches(self, invocation: Invocation, *, capture: bool = True) -> bool:
        """Return ``True`` if *invocation* satisfies this pattern.

        When ``capture`` is false, captors accept the argument without recording it.
        """
        return (
            self._matches_mock(invocation)
            and self._matches_signature(invocation)
            and self._matches_args(invocation, capture=capture)
        )

    def _matches_mock(self, invocation: Invocation) -> bool:
        return invocation.mock is self.mock

    def _matches_signature(self, invocation: Invocation) -> bool:
        return invocation.signature == self.signature

    def _matches_args(self, invocation: Invocation, *, capture: bool) -> bool:
        """Validate positional arguments, capturing only on a full match."""
        if len(invocation.args) != len(self.arg_matchers):
            return False
        pairs = list(zip(self.arg_matchers, invocation.args, strict=True))
        if not all(
            argument_matches(matcher, arg)
            for matcher, arg in pairs
            if not isinstance(matcher, Capturing)
        ):
            return False
        if not capture:
            return True
        for matcher, arg in pairs:
            if isinstance(matcher, Capturing):
                argument_matches(matcher, arg)
        return True

    def __repr__(self) -> str:
        """Return ``name(matcher, ...)``."""
        args = ", ".join(_describe_matcher(m) for m in self.arg_matchers)
        return f"{self.signature.name}({args})"


def _describe_matcher(matcher: ArgumentMatcher) -> str:
    expected = getattr(matcher, "expected", matcher)
    if expected is matcher:
        return repr(matcher)
    return repr(expected)
