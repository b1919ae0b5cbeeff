import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.sql import select

from app.core.exceptions import DataStoreError
from app.core.retry import RetryPolicy, is_rate_limit_error
from app.db.store import DataStore
from app.models import Theater


class RateLimited(Exception):
    pass


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def policy(sleeps):
    async def fake_sleep(seconds):
        sleeps.append(seconds)

    return RetryPolicy(max_attempts=4, backoff=(5.0,), retryable=is_rate_limit_error, sleep=fake_sleep)


def flaky(failures, exc):
    calls = []

    async def operation():
        calls.append(1)
        if len(calls) <= failures:
            raise exc
        return "ok"

    operation.calls = calls
    return operation


def test_rate_limit_detection():
    assert is_rate_limit_error(Exception("Rate limit exceeded, slow down"))
    assert not is_rate_limit_error(Exception("connection refused"))


def test_policy_rejects_empty_schedule():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)
    with pytest.raises(ValueError):
        RetryPolicy(backoff=())


def test_last_delay_repeats():
    policy = RetryPolicy(max_attempts=5, backoff=(1.0, 2.0))
    assert [policy.delay_for(n) for n in range(1, 5)] == [1.0, 2.0, 2.0, 2.0]


async def test_rate_limited_call_is_retried_after_backoff(policy, sleeps):
    operation = flaky(2, RateLimited("rate limit exceeded"))

    assert await policy.run(operation) == "ok"
    assert len(operation.calls) == 3
    assert sleeps == [5.0, 5.0]


async def test_other_errors_are_not_retried(policy, sleeps):
    operation = flaky(1, RuntimeError("syntax error"))

    with pytest.raises(RuntimeError):
        await policy.run(operation)
    assert len(operation.calls) == 1
    assert sleeps == []


async def test_gives_up_after_max_attempts(policy, sleeps):
    operation = flaky(10, RateLimited("rate limit exceeded"))

    with pytest.raises(RateLimited):
        await policy.run(operation)
    assert len(operation.calls) == 4
    assert sleeps == [5.0, 5.0, 5.0]


async def test_default_policy_never_retries():
    operation = flaky(1, RateLimited("rate limit exceeded"))

    with pytest.raises(RateLimited):
        await RetryPolicy.no_retry().run(operation)
    assert len(operation.calls) == 1


class FlakySession:
    """Wraps a real session and fails the first few executes with a rate-limit error."""

    def __init__(self, session, failures):
        self.session = session
        self.failures = failures
        self.rollbacks = 0

    async def execute(self, stmt):
        if self.failures > 0:
            self.failures -= 1
            raise OperationalError("SELECT", {}, Exception("rate limit exceeded"))
        return await self.session.execute(stmt)

    async def rollback(self):
        self.rollbacks += 1
        await self.session.rollback()


async def test_store_retries_rate_limited_reads(db_session_factory, seeded_test_data, policy, sleeps):
    async with db_session_factory() as session:
        flaky_session = FlakySession(session, failures=2)
        store = DataStore(flaky_session, policy)

        theater = await store.first(select(Theater).where(Theater.id == seeded_test_data["theater_id"]))

    assert theater.name == "Test Theater"
    assert sleeps == [5.0, 5.0]
    assert flaky_session.rollbacks == 2


async def test_store_wraps_final_failure(db_session_factory, seeded_test_data, policy, sleeps):
    async with db_session_factory() as session:
        store = DataStore(FlakySession(session, failures=10), policy)

        with pytest.raises(DataStoreError) as exc_info:
            await store.first(select(Theater))

    assert exc_info.value.message == "rate limit exceeded"
    assert len(sleeps) == 3
