"""Pytest plugin providing the ``callmox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .session import Session

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("callmox")
    group.addoption(
        "--callmox-validate-state",
        action="store_true",
        dest="callmox_validate_state",
        default=None,
        help=(
            "Fail tests that leave a stubbing or verification unfinished. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-callmox-validate-state",
        action="store_false",
        dest="callmox_validate_state",
        default=None,
        help=(
            "Do not check for unfinished stubbing or verification at teardown. "
            "Overrides the pytest.ini setting."
        ),
    )
    parser.addini(
        "callmox_validate_state",
        "Fail tests that leave a stubbing or verification unfinished.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "callmox(validate_state: bool = True): override the unfinished "
            "stubbing/verification check for a single test."
        ),
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach each phase report to the item so teardown can inspect it."""
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _validate_state_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether teardown should check for unfinished steps."""
    # Priority order: marker > fixture param > CLI option > INI setting

    marker_value = _get_marker_validate_state(request)
    if marker_value is not None:
        return marker_value

    param_value = _get_param_validate_state(request)
    if param_value is not None:
        return param_value

    config = request.config
    cli_value = config.getoption("callmox_validate_state")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("callmox_validate_state"))


def _get_marker_validate_state(request: pytest.FixtureRequest) -> bool | None:
    """Return marker override for state validation if present."""
    marker = request.node.get_closest_marker("callmox")
    if marker is None or "validate_state" not in marker.kwargs:
        return None
    return bool(marker.kwargs["validate_state"])


def _get_param_validate_state(request: pytest.FixtureRequest) -> bool | None:
    """Return fixture parameter override for state validation if present."""
    param = getattr(request, "param", None)
    if param is None:
        return None
    if isinstance(param, dict):
        if "validate_state" in param:
            return bool(param["validate_state"])
        keys = list(param.keys())
        msg = (
            "callmox fixture param dict must contain 'validate_state' key, "
            f"got keys: {keys}"
        )
        raise TypeError(msg)
    if isinstance(param, bool):
        return param
    msg = (
        "callmox fixture param must be a bool or dict with 'validate_state' key, "
        f"got {type(param).__name__}"
    )
    raise TypeError(msg)


@pytest.fixture
def callmox(request: pytest.FixtureRequest) -> t.Generator[Session, None, None]:
    """Provide a fresh :class:`Session` for the test."""
    session = Session()
    validate_state = _validate_state_enabled(request)
    try:
        yield session
    except Exception:
        logger.exception("Error during callmox fixture setup or test execution")
        raise
    finally:
        _teardown_session(request.node, session, validate_state=validate_state)


def _teardown_session(
    item: pytest.Item, session: Session, *, validate_state: bool
) -> None:
    """Report an unfinished stubbing or verification left by the test."""
    misuse = session.validate_state()
    if misuse is None or not validate_state:
        return
    if _call_stage_failed(item):
        logger.warning(
            "Ignoring %s after failed test: %s", type(misuse).__name__, misuse
        )
        return
    pytest.fail(f"{type(misuse).__name__}: {misuse}")


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    return bool(rep_call and rep_call.failed)
