"""Module-level shortcuts operating on the default session."""

from __future__ import annotations

import typing as t

from .invocation import Location
from .session import default_session

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import MethodSignature
    from .modes import VerificationMode
    from .ordering import InOrderVerifier
    from .session import VerificationRequest


def record_call(
    mock: object,
    signature: MethodSignature,
    args: t.Sequence[object] = (),
    *,
    location: Location | None = None,
) -> int:
    """Record a call on *mock* in the default session."""
    if location is None:
        location = Location.capture(depth=1)
    return default_session().record_call(mock, signature, args, location=location)


def verify(
    mock: object, mode: VerificationMode | int | None = None
) -> VerificationRequest:
    """Declare a verification on *mock* in the default session."""
    return default_session().verify(mock, mode)


def verify_no_more_interactions(*mocks: object) -> None:
    """Fail if any of *mocks* has unverified calls in the default session."""
    default_session().verify_no_more_interactions(*mocks)


def verify_zero_interactions(*mocks: object) -> None:
    """Fail if any of *mocks* received calls in the default session."""
    default_session().verify_zero_interactions(*mocks)


def in_order(*mocks: object) -> InOrderVerifier:
    """Return an in-order verifier over *mocks* in the default session."""
    return default_session().in_order(*mocks)
