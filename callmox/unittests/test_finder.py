"""Unit tests for invocation queries."""

from __future__ import annotations

from callmox.expectations import InvocationMatcher
from callmox.finder import (
    find_after,
    find_all,
    find_similar,
    first_unverified,
    merge_snapshots,
)
from callmox.invocation import MethodSignature
from callmox.ledger import InvocationLedger
from callmox.matchers import Capturing

SIMPLE = MethodSignature("simple", ("str",))
OTHER = MethodSignature("other", ("str",))


class _Fixture:
    def __init__(self) -> None:
        self.mock = object()
        ledger = InvocationLedger(self.mock)
        self.first = ledger.record(SIMPLE, ("a",))
        self.second = ledger.record(SIMPLE, ("a",))
        self.different = ledger.record(OTHER, ("a",))
        self.third = ledger.record(SIMPLE, ("b",))
        self.snapshot = ledger.snapshot()

    def wanted(
        self, *args: object, signature: MethodSignature = SIMPLE
    ) -> InvocationMatcher:
        return InvocationMatcher.for_call(self.mock, signature, args)


def test_find_all_returns_matches_in_sequence_order() -> None:
    """Only matching calls are returned, oldest first."""
    fx = _Fixture()
    assert find_all(fx.snapshot, fx.wanted("a")) == [fx.first, fx.second]


def test_find_after_excludes_calls_up_to_cursor() -> None:
    """The cursor itself and everything before it are skipped."""
    fx = _Fixture()
    assert find_after(fx.snapshot, fx.wanted("a"), fx.first.sequence) == [fx.second]
    assert find_after(fx.snapshot, fx.wanted("a"), fx.second.sequence) == []


def test_first_unverified_skips_verified_calls() -> None:
    """The earliest call not yet verified is reported."""
    fx = _Fixture()
    assert first_unverified(fx.snapshot) is fx.first

    fx.second.mark_verified()
    fx.first.mark_verified()
    assert first_unverified(fx.snapshot) is fx.different

    fx.different.mark_verified()
    fx.third.mark_verified()
    assert first_unverified(fx.snapshot) is None


def test_first_unverified_with_matcher() -> None:
    """A matcher restricts the search to matching calls."""
    fx = _Fixture()
    fx.first.mark_verified()
    assert first_unverified(fx.snapshot, fx.wanted("a")) is fx.second
    assert first_unverified(fx.snapshot, fx.wanted("zzz")) is None


def test_queries_do_not_mark_verified() -> None:
    """Finder functions leave the verified flags untouched."""
    fx = _Fixture()
    find_all(fx.snapshot, fx.wanted("a"))
    first_unverified(fx.snapshot)
    assert not any(inv.verified for inv in fx.snapshot)


def test_find_similar_ignores_arguments_and_captors() -> None:
    """Closest mismatch lookup compares method names only."""
    fx = _Fixture()
    captor = Capturing()
    wanted = fx.wanted(captor, signature=OTHER)
    assert find_similar(fx.snapshot, fx.wanted("zzz")) is fx.first
    assert find_similar(fx.snapshot, wanted) is fx.different
    assert captor.all_values == []


def test_find_similar_requires_same_mock() -> None:
    """Calls on other mocks are never offered as mismatches."""
    fx = _Fixture()
    wanted = InvocationMatcher.for_call(object(), SIMPLE, ("a",))
    assert find_similar(fx.snapshot, wanted) is None


def test_merge_snapshots_orders_by_sequence() -> None:
    """Snapshots of several ledgers interleave by global sequence."""
    a = InvocationLedger(object())
    b = InvocationLedger(object())
    a1 = a.record(SIMPLE, ("x",))
    b1 = b.record(SIMPLE, ("y",))
    a2 = a.record(SIMPLE, ("z",))
    assert merge_snapshots(a.snapshot(), b.snapshot()) == (a1, b1, a2)


def test_find_similar_may_return_identical_arguments() -> None:
    """The first call of the method is returned even if its arguments match."""
    fx = _Fixture()
    assert find_similar(fx.snapshot, fx.wanted("a")) is fx.first


def test_non_capturing_queries_leave_captors_empty() -> None:
    """first_unverified and find_all(capture=False) never feed captors."""
    fx = _Fixture()
    captor = Capturing()
    wanted = fx.wanted(captor)
    assert first_unverified(fx.snapshot, wanted) is fx.first
    assert find_all(fx.snapshot, wanted, capture=False) == [
        fx.first,
        fx.second,
        fx.third,
    ]
    assert captor.all_values == []
    find_all(fx.snapshot, wanted)
    assert captor.all_values == ["a", "a", "b"]
