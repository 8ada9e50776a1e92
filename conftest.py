"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

import callmox.session

pytest_plugins = ("callmox.pytest_plugin",)


@pytest.fixture(autouse=True)
def reset_default_session_state() -> t.Generator[None, None, None]:
    """Ensure a clean default session between tests."""
    callmox.session.reset_default_session()
    yield
    callmox.session.reset_default_session()
