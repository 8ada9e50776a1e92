"""Invocation recording and verification for mock objects.

Calls made on test doubles are recorded into per-mock ledgers and checked
against declared expectations with exact, at-least or at-most counts,
optionally in a fixed order across several mocks.
"""

from __future__ import annotations

from .api import (
    in_order,
    record_call,
    verify,
    verify_no_more_interactions,
    verify_zero_interactions,
)
from .comparators import (
    Any,
    Comparator,
    Contains,
    EndsWith,
    IsA,
    IsNone,
    NotNone,
    Predicate,
    Regex,
    Same,
    StartsWith,
)
from .errors import (
    CallMoxError,
    ConfigurationError,
    Discrepancy,
    DiscrepancyKind,
    MisuseError,
    NeverWantedButInvoked,
    NoArgumentValueCaptured,
    NoMoreInteractionsWanted,
    TooFewInvocations,
    TooManyInvocations,
    UnfinishedStubbing,
    UnfinishedVerification,
    VerificationError,
    VerificationInOrderFailure,
    WantedButNotInvoked,
    ZeroInteractionsWanted,
)
from .expectations import InvocationMatcher
from .invocation import Invocation, Location, MethodSignature
from .ledger import InvocationLedger, LedgerRegistry
from .matchers import ArrayEquals, Capturing, Custom, Equals, arg_that, captor, eq
from .modes import (
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
from .ordering import InOrderVerifier, OrderingContext
from .session import (
    Session,
    SessionPhase,
    VerificationRequest,
    default_session,
    reset_default_session,
)

__all__ = [
    "Any",
    "ArrayEquals",
    "AtLeast",
    "AtMost",
    "CallMoxError",
    "Capturing",
    "Comparator",
    "ConfigurationError",
    "Contains",
    "Custom",
    "Discrepancy",
    "DiscrepancyKind",
    "EndsWith",
    "Equals",
    "InOrder",
    "InOrderVerifier",
    "Invocation",
    "InvocationLedger",
    "InvocationMatcher",
    "IsA",
    "IsNone",
    "LedgerRegistry",
    "Location",
    "MethodSignature",
    "MisuseError",
    "NeverWantedButInvoked",
    "NoArgumentValueCaptured",
    "NoMoreInteractionsWanted",
    "NotNone",
    "OrderingContext",
    "Predicate",
    "Regex",
    "Same",
    "Session",
    "SessionPhase",
    "StartsWith",
    "Times",
    "TooFewInvocations",
    "TooManyInvocations",
    "UnfinishedStubbing",
    "UnfinishedVerification",
    "VerificationError",
    "VerificationInOrderFailure",
    "VerificationRequest",
    "WantedButNotInvoked",
    "ZeroInteractionsWanted",
    "arg_that",
    "at_least",
    "at_least_once",
    "at_most",
    "captor",
    "default_session",
    "eq",
    "in_order",
    "never",
    "record_call",
    "reset_default_session",
    "times",
    "verify",
    "verify_no_more_interactions",
    "verify_zero_interactions",
]
