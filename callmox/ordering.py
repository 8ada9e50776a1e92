"""Cross-mock ordering: a shared cursor over a declared group of mocks."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t

from .errors import ConfigurationError
from .modes import InOrder, times

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .modes import CountingMode
    from .session import Session, VerificationRequest

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, eq=False)
class OrderingContext:
    """Cursor recording the last call consumed by an in-order verification.

    Not thread-safe; an ordering context belongs to the test thread that
    declared it.
    """

    mocks: tuple[object, ...]
    last_consumed_sequence: int = 0

    def __post_init__(self) -> None:
        """Require at least one mock in the group."""
        if not self.mocks:
            msg = "in_order() requires at least one mock"
            raise ConfigurationError(msg)

    def governs(self, mock: object) -> bool:
        """Return ``True`` when *mock* belongs to this ordering group."""
        return any(member is mock for member in self.mocks)

    def advance(self, sequence: int) -> None:
        """Move the cursor forward to *sequence*."""
        if sequence <= self.last_consumed_sequence:
            return
        logger.debug(
            "Ordering cursor advanced from %d to %d",
            self.last_consumed_sequence,
            sequence,
        )
        self.last_consumed_sequence = sequence


class InOrderVerifier:
    """Verify calls across several mocks in the order they happened.

    Each verification only sees calls made after the last call consumed by
    the previous verification on this verifier, whichever mock received it.
    """

    def __init__(self, session: Session, mocks: t.Sequence[object]) -> None:
        self._session = session
        self.context = OrderingContext(tuple(mocks))

    @property
    def mocks(self) -> tuple[object, ...]:
        """Return the mocks governed by this verifier."""
        return self.context.mocks

    def verify(
        self, mock: object, mode: CountingMode | None = None
    ) -> VerificationRequest:
        """Declare an in-order verification on *mock*; see :meth:`Session.verify`."""
        wrapped = InOrder(mode if mode is not None else times(1), self.context)
        return self._session.verify(mock, wrapped)

    def verify_no_more_interactions(self) -> None:
        """Fail if any governed mock has unverified calls after the cursor."""
        self._session.verify_no_more_interactions_after(self.context)
