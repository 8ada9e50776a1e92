"""Checkers deciding whether recorded invocations satisfy a verification."""

from __future__ import annotations

import logging
import typing as t

from .errors import (
    ConfigurationError,
    Discrepancy,
    DiscrepancyKind,
    NeverWantedButInvoked,
    NoMoreInteractionsWanted,
    TooFewInvocations,
    TooManyInvocations,
    VerificationInOrderFailure,
    WantedButNotInvoked,
    ZeroInteractionsWanted,
)
from .finder import find_after, find_all, find_similar, first_unverified
from .modes import AtLeast, AtMost, Times

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import InvocationMatcher
    from .invocation import Invocation, Location
    from .modes import CountingMode, InOrder

logger = logging.getLogger(__name__)


def _locations(invocations: t.Iterable[Invocation]) -> tuple[Location | None, ...]:
    return tuple(inv.location for inv in invocations)


def _too_few(
    wanted: InvocationMatcher,
    wanted_count: int,
    matches: t.Sequence[Invocation],
    all_invocations: t.Sequence[Invocation],
) -> TooFewInvocations:
    if not matches:
        similar = find_similar(all_invocations, wanted)
        return WantedButNotInvoked(
            Discrepancy(
                kind=DiscrepancyKind.WANTED_BUT_NOT_INVOKED,
                wanted_description=repr(wanted),
                actual_count=0,
                wanted_count=wanted_count,
                locations=() if similar is None else (similar.location,),
            )
        )
    return TooFewInvocations(
        Discrepancy(
            kind=DiscrepancyKind.TOO_FEW,
            wanted_description=repr(wanted),
            actual_count=len(matches),
            wanted_count=wanted_count,
            locations=_locations(matches),
        )
    )


def _too_many(
    wanted: InvocationMatcher,
    limit: int,
    matches: t.Sequence[Invocation],
    *,
    never: bool,
) -> TooManyInvocations | NeverWantedButInvoked:
    if never:
        return NeverWantedButInvoked(
            Discrepancy(
                kind=DiscrepancyKind.NEVER_WANTED,
                wanted_description=repr(wanted),
                actual_count=len(matches),
                wanted_count=0,
                locations=(matches[0].location,),
            )
        )
    # matches are in sequence order, so the first extra call is stable
    return TooManyInvocations(
        Discrepancy(
            kind=DiscrepancyKind.TOO_MANY,
            wanted_description=repr(wanted),
            actual_count=len(matches),
            wanted_count=limit,
            locations=(matches[limit].location,),
        )
    )


def _bounds(mode: CountingMode) -> tuple[int, int | None]:
    """Return the ``(floor, ceiling)`` accepted by *mode*."""
    match mode:
        case Times(count=count):
            return count, count
        case AtLeast(minimum=minimum):
            return minimum, None
        case AtMost(maximum=maximum):
            return 0, maximum
        case _:
            t.assert_never(mode)


def check_count(
    mode: CountingMode,
    matches: t.Sequence[Invocation],
    all_invocations: t.Sequence[Invocation],
    wanted: InvocationMatcher,
) -> None:
    """Mark *matches* verified when their number satisfies *mode*.

    Raises
    ------
    TooFewInvocations
        When fewer calls matched than *mode* requires.
    TooManyInvocations
        When more calls matched than *mode* allows.
    NeverWantedButInvoked
        When *mode* is ``Times(0)`` and any call matched.
    """
    floor, ceiling = _bounds(mode)
    actual = len(matches)
    if actual < floor:
        raise _too_few(wanted, floor, matches, all_invocations)
    if ceiling is not None and actual > ceiling:
        raise _too_many(wanted, ceiling, matches, never=mode == Times(0))
    for inv in matches:
        inv.mark_verified()
    logger.debug("Verified %r: %d call(s), wanted %s", wanted, actual, mode)


def check_in_order(
    mode: InOrder,
    all_invocations: t.Sequence[Invocation],
    wanted: InvocationMatcher,
) -> None:
    """Verify *wanted* against calls made after the ordering cursor.

    *all_invocations* is the merged snapshot of every mock governed by the
    ordering context. On success the cursor moves to the last consumed call.
    """
    context = mode.context
    if not context.governs(wanted.mock):
        msg = f"mock {wanted.mock!r} is not part of this ordering group"
        raise ConfigurationError(msg)

    window = find_after(all_invocations, wanted, context.last_consumed_sequence)
    floor, _ = _bounds(mode.mode)
    if not window and floor > 0:
        earlier = find_all(
            (
                inv
                for inv in all_invocations
                if inv.sequence <= context.last_consumed_sequence
            ),
            wanted,
            capture=False,
        )
        if not earlier:
            raise _too_few(wanted, floor, earlier, all_invocations)
        raise VerificationInOrderFailure(
            Discrepancy(
                kind=DiscrepancyKind.IN_ORDER,
                wanted_description=repr(wanted),
                actual_count=0,
                wanted_count=floor,
                locations=_locations(earlier),
            )
        )
    check_count(mode.mode, window, all_invocations, wanted)
    if window:
        context.advance(window[-1].sequence)


def check_no_more_interactions(
    snapshot: t.Sequence[Invocation], *, zero: bool = False
) -> None:
    """Raise when *snapshot* holds calls no verification accounted for.

    With ``zero`` set, any recorded call at all is a failure.
    """
    if zero:
        if snapshot:
            raise ZeroInteractionsWanted(
                Discrepancy(
                    kind=DiscrepancyKind.ZERO_INTERACTIONS,
                    wanted_description="no interactions",
                    actual_count=len(snapshot),
                    wanted_count=0,
                    locations=(snapshot[0].location,),
                )
            )
        return
    unverified = first_unverified(snapshot)
    if unverified is not None:
        raise NoMoreInteractionsWanted(
            Discrepancy(
                kind=DiscrepancyKind.NO_MORE_INTERACTIONS,
                wanted_description="no more interactions",
                actual_count=sum(1 for inv in snapshot if not inv.verified),
                wanted_count=0,
                locations=(unverified.location,),
            )
        )


__all__ = ["check_count", "check_in_order", "check_no_more_interactions"]
