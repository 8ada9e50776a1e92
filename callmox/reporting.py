"""Render :class:`~callmox.errors.Discrepancy` values as readable text."""

from __future__ import annotations

import typing as t
from textwrap import indent

from .errors import DiscrepancyKind

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .errors import Discrepancy
    from .invocation import Location

_TITLES: dict[DiscrepancyKind, str] = {
    DiscrepancyKind.TOO_FEW: "Too few invocations.",
    DiscrepancyKind.WANTED_BUT_NOT_INVOKED: "Wanted but not invoked.",
    DiscrepancyKind.TOO_MANY: "Too many invocations.",
    DiscrepancyKind.NEVER_WANTED: "Never wanted but invoked.",
    DiscrepancyKind.IN_ORDER: "Verification in order failure.",
    DiscrepancyKind.NO_MORE_INTERACTIONS: "No more interactions wanted.",
    DiscrepancyKind.ZERO_INTERACTIONS: "No interactions wanted.",
}

_LOCATION_LABELS: dict[DiscrepancyKind, str] = {
    DiscrepancyKind.TOO_FEW: "Matching calls",
    DiscrepancyKind.WANTED_BUT_NOT_INVOKED: "Closest mismatch",
    DiscrepancyKind.TOO_MANY: "First extra call",
    DiscrepancyKind.NEVER_WANTED: "First unwanted call",
    DiscrepancyKind.IN_ORDER: "Matching calls before the previous verification",
    DiscrepancyKind.NO_MORE_INTERACTIONS: "First unverified call",
    DiscrepancyKind.ZERO_INTERACTIONS: "First call",
}


def _numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    if not entries:
        return "(none)"
    return "\n".join(
        f"{index}. {entry}" for index, entry in enumerate(entries, start=start)
    )


def _format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)


def _format_location(location: Location | None) -> str:
    return "<unknown location>" if location is None else str(location)


def _observed(discrepancy: Discrepancy) -> str:
    if discrepancy.wanted_count is None:
        return str(discrepancy.actual_count)
    return f"{discrepancy.actual_count} (wanted {discrepancy.wanted_count})"


def describe(discrepancy: Discrepancy) -> str:
    """Return a multi-line description of *discrepancy*."""
    kind = discrepancy.kind
    locations = [_format_location(loc) for loc in discrepancy.locations]
    sections = [
        ("Wanted", discrepancy.wanted_description),
        ("Observed calls", _observed(discrepancy)),
        (_LOCATION_LABELS[kind], _numbered(locations) if locations else ""),
    ]
    return _format_sections(_TITLES[kind], sections)


__all__ = ["describe"]
