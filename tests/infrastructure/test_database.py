"""Database Session Manager: tests for the startup probe and session rollback.

Tests cover:
    - wait_until_ready returns as soon as a ping succeeds
    - wait_until_ready keeps pinging while the database is down
    - wait_until_ready raises DatabaseUnavailableError after the timeout
    - health_check is True against a live engine
"""

import pytest

from products_crud.core.errors import DatabaseUnavailableError
from products_crud.infrastructure.database import DatabaseSessionManager


@pytest.fixture
def manager(test_engine, test_session_factory):
    fake = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake.engine = test_engine
    fake._session_factory = test_session_factory
    return fake


async def test_health_check_true_on_live_engine(manager):
    assert await manager.health_check() is True


async def test_wait_until_ready_returns_on_first_success(manager):
    await manager.wait_until_ready(timeout_seconds=1, interval_seconds=0)


async def test_wait_until_ready_retries_until_success(manager, monkeypatch):
    answers = iter([False, False, True])
    pings = []

    async def flaky_health_check():
        pings.append(1)
        return next(answers)

    monkeypatch.setattr(manager, "health_check", flaky_health_check)
    await manager.wait_until_ready(timeout_seconds=5, interval_seconds=0)
    assert len(pings) == 3


async def test_wait_until_ready_raises_after_timeout(manager, monkeypatch):
    async def down():
        return False

    monkeypatch.setattr(manager, "health_check", down)
    with pytest.raises(DatabaseUnavailableError):
        await manager.wait_until_ready(timeout_seconds=0.05, interval_seconds=0.01)


async def test_session_rolls_back_and_reraises(manager):
    with pytest.raises(ValueError):
        async with manager.session():
            raise ValueError("boom")
