"""Pytest configuration: asyncio test driver and shared time fixtures."""

from __future__ import annotations

import asyncio
import inspect
from datetime import datetime, timezone

import pytest


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """Register the custom ``asyncio`` marker used throughout the test suite."""

    config.addinivalue_line(
        "markers",
        "asyncio: mark a test as running inside an asyncio event loop",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute ``async def`` tests by driving them with a fresh event loop."""

    test_function = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_function):
        return None

    argnames = pyfuncitem._fixtureinfo.argnames
    kwargs = {name: pyfuncitem.funcargs[name] for name in argnames}
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        loop.run_until_complete(test_function(**kwargs))
        loop.run_until_complete(loop.shutdown_asyncgens())
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True


@pytest.fixture
def fixed_now() -> datetime:
    """Wednesday 2026-01-28 20:31 UTC."""
    return datetime(2026, 1, 28, 20, 31, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_time_env(monkeypatch):
    for var in ("USER_TIMEZONE", "TZ", "USER_TIME_FORMAT", "GATEWAY_CONFIG", "TIMESTAMP_INJECTION", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
