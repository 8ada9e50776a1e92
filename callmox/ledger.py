"""Append-only invocation ledgers, one per mock."""

from __future__ import annotations

import bisect
import logging
import threading
import typing as t

from .invocation import Invocation

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .invocation import Location, MethodSignature

logger = logging.getLogger(__name__)


def _sequence_of(invocation: Invocation) -> int:
    return invocation.sequence


class InvocationLedger:
    """Thread-safe append-only log of the calls received by one mock."""

    def __init__(self, mock: object) -> None:
        self.mock = mock
        self._entries: list[Invocation] = []
        self._lock = threading.Lock()

    def append(self, invocation: Invocation) -> None:
        """Record *invocation*, keeping the ledger in sequence order."""
        if invocation.mock is not self.mock:
            msg = "invocation belongs to a different mock than this ledger"
            raise ValueError(msg)
        with self._lock:
            bisect.insort(self._entries, invocation, key=_sequence_of)
        logger.debug("Recorded %r", invocation)

    def record(
        self,
        signature: MethodSignature,
        args: tuple[object, ...],
        location: Location | None = None,
    ) -> Invocation:
        """Create and append an invocation of *signature* on this ledger's mock.

        The sequence number is drawn while the ledger lock is held so ledger
        order always equals sequence order.
        """
        with self._lock:
            invocation = Invocation(self.mock, signature, args, location=location)
            self._entries.append(invocation)
        logger.debug("Recorded %r", invocation)
        return invocation

    def snapshot(self) -> tuple[Invocation, ...]:
        """Return an immutable copy of the recorded invocations."""
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        """Return the number of recorded invocations."""
        with self._lock:
            return len(self._entries)


class LedgerRegistry:
    """Lazily created ledgers keyed by mock identity."""

    def __init__(self) -> None:
        self._ledgers: dict[int, InvocationLedger] = {}
        self._lock = threading.Lock()

    def ledger_for(self, mock: object) -> InvocationLedger:
        """Return the ledger for *mock*, creating it on first use."""
        with self._lock:
            ledger = self._ledgers.get(id(mock))
            if ledger is None:
                ledger = InvocationLedger(mock)
                self._ledgers[id(mock)] = ledger
            return ledger

    def snapshot(self, mock: object) -> tuple[Invocation, ...]:
        """Return the recorded invocations of *mock* without creating a ledger."""
        with self._lock:
            ledger = self._ledgers.get(id(mock))
        if ledger is None:
            return ()
        return ledger.snapshot()

    def clear(self) -> None:
        """Forget every ledger."""
        with self._lock:
            self._ledgers.clear()
