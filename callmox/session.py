"""Session: the entry points for recording and verifying calls.

A :class:`Session` owns the ledgers of the mocks it records and the state
machine that brackets the two-step stubbing and verification APIs.
Detection of a half-finished step happens at the start of the next entry
point call: :meth:`Session.validate_state` returns the misuse error after
resetting the machine, and the entry point raises it.
"""

from __future__ import annotations

import enum
import logging
import typing as t

from .errors import MisuseError, UnfinishedStubbing, UnfinishedVerification
from .expectations import InvocationMatcher
from .finder import find_all, first_unverified, merge_snapshots
from .invocation import Location, MethodSignature
from .ledger import LedgerRegistry
from .modes import AtLeast, AtMost, InOrder, Times, times
from .normalizer import expand_varargs
from .ordering import InOrderVerifier
from .verifiers import check_count, check_in_order, check_no_more_interactions

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import Invocation
    from .modes import VerificationMode
    from .ordering import OrderingContext

logger = logging.getLogger(__name__)

_MODE_TYPES: tuple[type, ...] = (Times, AtLeast, AtMost, InOrder)


class SessionPhase(enum.StrEnum):
    """States of the stubbing/verification state machine."""

    IDLE = "IDLE"
    STUBBING = "STUBBING"
    VERIFYING = "VERIFYING"


class VerificationRequest:
    """Second half of ``verify(mock, mode)``: names the call to verify.

    Either call :meth:`that` with a signature, or call the method by name
    on the request (``session.verify(mock).fetch("key")``), which verifies
    a signature with undeclared arity. A method named ``that`` cannot be
    reached by attribute access; verify it with
    ``that(MethodSignature("that"), ...)``.
    """

    def __init__(self, session: Session, mock: object) -> None:
        self._session = session
        self._mock = mock

    def that(self, signature: MethodSignature, *args: object) -> None:
        """Verify calls of *signature* with arguments matching *args*."""
        mode = self._session.complete_verification(self)
        wanted = InvocationMatcher.for_call(self._mock, signature, args)
        self._session.run_verification(mode, wanted)

    def __getattr__(self, name: str) -> t.Callable[..., None]:
        """Return a callable verifying calls of the method *name*."""
        if name.startswith("_"):
            raise AttributeError(name)

        def verify_call(*args: object) -> None:
            self.that(MethodSignature(name), *args)

        return verify_call


class Session:
    """Ledgers plus the misuse-detecting state machine for one test run.

    Sessions are not thread-safe apart from :meth:`record_call`, which the
    system under test may invoke from any thread.
    """

    def __init__(self) -> None:
        self._registry = LedgerRegistry()
        self._phase = SessionPhase.IDLE
        self._pending_mode: VerificationMode | None = None
        self._pending_request: VerificationRequest | None = None

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    @property
    def phase(self) -> SessionPhase:
        """Return the current state machine phase."""
        return self._phase

    def validate_state(self) -> MisuseError | None:
        """Return the misuse left behind by an unfinished step, if any.

        The machine is reset to :attr:`SessionPhase.IDLE` before returning,
        so the caller may retry once it has reported the error.
        """
        phase = self._phase
        if phase is SessionPhase.IDLE:
            return None
        self.reset()
        logger.warning("Detected unfinished %s; session reset", phase.lower())
        if phase is SessionPhase.STUBBING:
            return UnfinishedStubbing()
        return UnfinishedVerification()

    def reset(self) -> None:
        """Return to :attr:`SessionPhase.IDLE`, discarding any pending step."""
        self._phase = SessionPhase.IDLE
        self._pending_mode = None
        self._pending_request = None

    def _require_phase(self, expected: SessionPhase, action: str) -> None:
        if self._phase is not expected:
            msg = (
                f"Cannot call {action}(): not in '{expected.lower()}' phase "
                f"(current phase: {self._phase.lower()})"
            )
            raise MisuseError(msg)

    def begin_stubbing(self) -> None:
        """Enter :attr:`SessionPhase.STUBBING`."""
        misuse = self.validate_state()
        if misuse is not None:
            raise misuse
        self._phase = SessionPhase.STUBBING

    def complete_stubbing(self) -> None:
        """Leave :attr:`SessionPhase.STUBBING`."""
        self._require_phase(SessionPhase.STUBBING, "complete_stubbing")
        self._phase = SessionPhase.IDLE

    def begin_verification(
        self, mode: VerificationMode, request: VerificationRequest | None = None
    ) -> None:
        """Enter :attr:`SessionPhase.VERIFYING` holding *mode* for the next call."""
        misuse = self.validate_state()
        if misuse is not None:
            raise misuse
        self._phase = SessionPhase.VERIFYING
        self._pending_mode = mode
        self._pending_request = request

    def complete_verification(
        self, request: VerificationRequest | None = None
    ) -> VerificationMode:
        """Leave :attr:`SessionPhase.VERIFYING` and return the pending mode.

        When *request* is given it must be the request that began the
        verification; a request abandoned by an earlier reset is rejected.
        """
        self._require_phase(SessionPhase.VERIFYING, "complete_verification")
        if request is not None and request is not self._pending_request:
            msg = "This verification request is no longer pending"
            raise MisuseError(msg)
        mode = t.cast("VerificationMode", self._pending_mode)
        self.reset()
        return mode

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------
    def record_call(
        self,
        mock: object,
        signature: MethodSignature,
        args: t.Sequence[object] = (),
        *,
        location: Location | None = None,
    ) -> int:
        """Record a call on *mock* and return its sequence number.

        Variadic arguments are expanded before recording. When *location*
        is omitted, the caller's frame is used.
        """
        if location is None:
            location = Location.capture(depth=1)
        flat = expand_varargs(args, variadic=signature.variadic)
        invocation = self._registry.ledger_for(mock).record(signature, flat, location)
        return invocation.sequence

    def invocations(self, mock: object) -> tuple[Invocation, ...]:
        """Return a snapshot of the calls recorded for *mock*."""
        return self._registry.snapshot(mock)

    def first_unverified(
        self, mock: object, matcher: InvocationMatcher | None = None
    ) -> Invocation | None:
        """Return the earliest unverified call on *mock*, optionally matching."""
        return first_unverified(self._registry.snapshot(mock), matcher)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def verify(
        self, mock: object, mode: VerificationMode | int | None = None
    ) -> VerificationRequest:
        """Declare a verification on *mock*; the returned request names the call.

        *mode* defaults to ``times(1)``; a bare integer means ``times(n)``.
        """
        resolved = _resolve_mode(mode)
        request = VerificationRequest(self, mock)
        self.begin_verification(resolved, request)
        return request

    def run_verification(
        self, mode: VerificationMode, wanted: InvocationMatcher
    ) -> None:
        """Check *wanted* against the recorded calls under *mode*."""
        if isinstance(mode, InOrder):
            snapshots = [self._registry.snapshot(m) for m in mode.context.mocks]
            check_in_order(mode, merge_snapshots(*snapshots), wanted)
            return
        snapshot = self._registry.snapshot(wanted.mock)
        check_count(mode, find_all(snapshot, wanted), snapshot, wanted)

    def verify_no_more_interactions(self, *mocks: object) -> None:
        """Fail if any of *mocks* has calls no verification accounted for."""
        misuse = self.validate_state()
        if misuse is not None:
            raise misuse
        for mock in mocks:
            check_no_more_interactions(self._registry.snapshot(mock))

    def verify_zero_interactions(self, *mocks: object) -> None:
        """Fail if any of *mocks* received any call at all."""
        misuse = self.validate_state()
        if misuse is not None:
            raise misuse
        for mock in mocks:
            check_no_more_interactions(self._registry.snapshot(mock), zero=True)

    def in_order(self, *mocks: object) -> InOrderVerifier:
        """Return a verifier enforcing call order across *mocks*."""
        misuse = self.validate_state()
        if misuse is not None:
            raise misuse
        return InOrderVerifier(self, mocks)

    def verify_no_more_interactions_after(self, context: OrderingContext) -> None:
        """Fail if a mock of *context* has unverified calls after its cursor."""
        misuse = self.validate_state()
        if misuse is not None:
            raise misuse
        merged = merge_snapshots(*(self._registry.snapshot(m) for m in context.mocks))
        cursor = context.last_consumed_sequence
        check_no_more_interactions(
            tuple(inv for inv in merged if inv.sequence > cursor)
        )


def _resolve_mode(mode: VerificationMode | int | None) -> VerificationMode:
    if mode is None:
        return times(1)
    if isinstance(mode, int) and not isinstance(mode, bool):
        return times(mode)
    if not isinstance(mode, _MODE_TYPES):
        msg = f"expected a verification mode, got {type(mode).__name__}"
        raise TypeError(msg)
    return t.cast("VerificationMode", mode)


_default_session: Session | None = None


def default_session() -> Session:
    """Return the process-wide session used by the module-level helpers."""
    global _default_session  # noqa: PLW0603
    if _default_session is None:
        _default_session = Session()
    return _default_session


def reset_default_session() -> Session:
    """Replace the process-wide session with a fresh one and return it."""
    global _default_session  # noqa: PLW0603
    _default_session = Session()
    return _default_session


__all__ = [
    "Session",
    "SessionPhase",
    "VerificationRequest",
    "default_session",
    "reset_default_session",
]
