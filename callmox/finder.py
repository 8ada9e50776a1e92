"""Queries over ledger snapshots.

Every function here is read-only with respect to the invocations; marking
invocations as verified is left to the checkers in :mod:`callmox.verifiers`.
"""

from __future__ import annotations

import itertools
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .expectations import InvocationMatcher
    from .invocation import Invocation


def find_all(
    snapshot: t.Iterable[Invocation],
    matcher: InvocationMatcher,
    *,
    capture: bool = True,
) -> list[Invocation]:
    """Return invocations matching *matcher* in sequence order.

    Captors in *matcher* record the matching arguments unless ``capture`` is
    false.
    """
    return [inv for inv in snapshot if matcher.matches(inv, capture=capture)]


def find_after(
    snapshot: t.Iterable[Invocation], matcher: InvocationMatcher, cursor: int
) -> list[Invocation]:
    """Return matching invocations whose sequence is greater than *cursor*."""
    return find_all((inv for inv in snapshot if inv.sequence > cursor), matcher)


def first_unverified(
    snapshot: t.Iterable[Invocation], matcher: InvocationMatcher | None = None
) -> Invocation | None:
    """Return the earliest unverified invocation, optionally matching *matcher*.

    Captors in *matcher* are not fed.
    """
    for inv in snapshot:
        if inv.verified:
            continue
        if matcher is None or matcher.matches(inv, capture=False):
            return inv
    return None


def find_similar(
    snapshot: t.Iterable[Invocation], matcher: InvocationMatcher
) -> Invocation | None:
    """Return the first call on the same mock with the same method name.

    Only the mock and the method name are compared. Arguments and argument
    matchers are ignored, so captors are left untouched.
    """
    for inv in snapshot:
        if inv.mock is matcher.mock and inv.signature.name == matcher.signature.name:
            return inv
    return None


def merge_snapshots(*snapshots: t.Iterable[Invocation]) -> tuple[Invocation, ...]:
    """Interleave several ledger snapshots by sequence number."""
    merged = itertools.chain.from_iterable(snapshots)
    return tuple(sorted(merged, key=lambda inv: inv.sequence))


__all__ = [
    "find_after",
    "find_all",
    "find_similar",
    "first_unverified",
    "merge_snapshots",
]
