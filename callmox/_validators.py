"""Shared validation helpers."""

from __future__ import annotations

from .errors import ConfigurationError


def validate_count(count: int, *, name: str = "count") -> int:
    """Ensure *count* is a usable non-negative invocation count."""
    if isinstance(count, bool) or not isinstance(count, int):
        msg = f"{name} must be an integer, got {type(count).__name__}"
        raise ConfigurationError(msg)

    if count < 0:
        msg = f"{name} must be >= 0, got {count}"
        raise ConfigurationError(msg)
    return count
