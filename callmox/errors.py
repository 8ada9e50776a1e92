"""Exception hierarchy and structured failure values for callmox."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import Location


class DiscrepancyKind(enum.StrEnum):
    """Categories of verification failure."""

    TOO_FEW = "too_few"
    WANTED_BUT_NOT_INVOKED = "wanted_but_not_invoked"
    TOO_MANY = "too_many"
    NEVER_WANTED = "never_wanted"
    IN_ORDER = "in_order"
    NO_MORE_INTERACTIONS = "no_more_interactions"
    ZERO_INTERACTIONS = "zero_interactions"


@dc.dataclass(slots=True, frozen=True)
class Discrepancy:
    """Structured description of a failed verification.

    ``locations`` lists the call sites relevant to the failure: the matching
    calls, the first extra call, or the closest mismatch depending on
    ``kind``.
    """

    kind: DiscrepancyKind
    wanted_description: str
    actual_count: int
    wanted_count: int | None = None
    locations: tuple[Location | None, ...] = ()


class CallMoxError(Exception):
    """Base class for all callmox errors."""


class ConfigurationError(CallMoxError, ValueError):
    """Raised when a matcher, mode or ordering group is declared incorrectly."""


class MisuseError(CallMoxError):
    """Raised when the stubbing or verification API is used out of sequence."""


class UnfinishedStubbing(MisuseError):
    """A stubbing declaration was started but never completed."""

    DEFAULT_MESSAGE = (
        "Unfinished stubbing detected: a stubbing declaration was started "
        "and never completed"
    )

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)


class UnfinishedVerification(MisuseError):
    """A verification was declared but the verified call never followed."""

    DEFAULT_MESSAGE = (
        "Unfinished verification detected: verify() was called without "
        "naming the call to verify"
    )

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)


class VerificationError(CallMoxError, AssertionError):
    """Base class for failed expectations; carries a :class:`Discrepancy`."""

    def __init__(self, discrepancy: Discrepancy) -> None:
        super().__init__(discrepancy)
        self.discrepancy = discrepancy

    def __str__(self) -> str:
        """Render the discrepancy through the reporting layer."""
        from .reporting import describe

        return describe(self.discrepancy)


class TooFewInvocations(VerificationError):
    """The wanted call happened fewer times than required."""


class WantedButNotInvoked(TooFewInvocations):
    """The wanted call never happened at all."""


class TooManyInvocations(VerificationError):
    """The wanted call happened more times than allowed."""


class NeverWantedButInvoked(VerificationError):
    """A call verified with ``never()`` happened."""


class VerificationInOrderFailure(VerificationError):
    """The wanted call did not happen after the previously verified one."""


class NoMoreInteractionsWanted(VerificationError):
    """A mock received calls that no verification accounted for."""


class ZeroInteractionsWanted(NoMoreInteractionsWanted):
    """A mock that should have been untouched received calls."""


class NoArgumentValueCaptured(CallMoxError, LookupError):
    """A captor was read before it captured any value."""

    DEFAULT_MESSAGE = "No argument value was captured"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)


__all__ = [
    "CallMoxError",
    "ConfigurationError",
    "Discrepancy",
    "DiscrepancyKind",
    "MisuseError",
    "NeverWantedButInvoked",
    "NoArgumentValueCaptured",
    "NoMoreInteractionsWanted",
    "TooFewInvocations",
    "TooManyInvocations",
    "UnfinishedStubbing",
    "UnfinishedVerification",
    "VerificationError",
    "VerificationInOrderFailure",
    "WantedButNotInvoked",
    "ZeroInteractionsWanted",
]
