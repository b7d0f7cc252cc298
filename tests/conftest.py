"""Pytest configuration and fixtures for radflux tests."""

import pytest

from radflux import ActionRegistry, DispatcherSettings


@pytest.fixture
def dispatcher_settings():
    """Provide test dispatcher settings."""
    return DispatcherSettings(
        log_level="DEBUG",
        warn_unknown_actions=False,
        metrics_enabled=False,
    )


@pytest.fixture
def registry(dispatcher_settings):
    """Provide a registry with a handful of declared actions."""
    return ActionRegistry(
        {"load": None, "ping": None, "save": None},
        settings=dispatcher_settings,
    )


@pytest.fixture
def record():
    """Provide a list collecting published results."""
    return []
