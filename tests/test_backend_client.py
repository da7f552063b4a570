"""Tests for the backend client and the log/profile books built on it."""

import random
from datetime import datetime

import httpx
import pytest

from conftest import make_log, strength
from fitgenius.schemas import UserProfile
from fitgenius.services.backend_client import BackendClient
from fitgenius.services.errors import BackendError, Unauthorized
from fitgenius.services.log_book import DEMO_DAYS, LogBook
from fitgenius.services.profile_book import ProfileBook


async def signed_in(backend):
    await backend.register("ana", "s3cretpass")
    return backend


@pytest.mark.asyncio
async def test_requests_need_login(backend):
    with pytest.raises(Unauthorized):
        await backend.get_logs()


@pytest.mark.asyncio
async def test_register_then_login(backend):
    await backend.register("ana", "s3cretpass")
    backend.logout()
    assert not backend.authenticated
    await backend.login("ana", "s3cretpass")
    assert backend.authenticated


@pytest.mark.asyncio
async def test_bad_login_raises_unauthorized(backend):
    with pytest.raises(Unauthorized) as info:
        await backend.login("ghost", "whatever1")
    assert info.value.status_code == 401


@pytest.mark.asyncio
async def test_rejected_token_is_cleared(backend):
    backend.token = "stale-token"
    with pytest.raises(Unauthorized):
        await backend.get_profile()
    assert backend.token is None


@pytest.mark.asyncio
async def test_weak_password_is_backend_error(backend):
    with pytest.raises(BackendError) as info:
        await backend.register("ana", "short")
    assert info.value.status_code == 400


@pytest.mark.asyncio
async def test_missing_profile_and_plan_are_none(backend):
    await signed_in(backend)
    assert await backend.get_profile() is None
    assert await backend.get_plan() is None


@pytest.mark.asyncio
async def test_unreachable_backend():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = BackendClient(base_url="http://test", transport=httpx.MockTransport(refuse), token="t")
    with pytest.raises(BackendError):
        await client.get_logs()
    await client.aclose()


@pytest.mark.asyncio
async def test_log_book_merges_locally_and_remotely(backend):
    await signed_in(backend)
    book = LogBook(backend)
    await book.load()
    assert book.logs == []

    day = datetime(2024, 3, 1, 9, 0)
    await book.add(make_log(day, exercises=[strength("Squat")], log_id="morning"))
    await book.add(make_log(day.replace(hour=19), exercises=[strength("Row")], log_id="evening"))

    assert len(book.logs) == 1
    assert book.logs[0].duration == 60
    remote = await backend.get_logs()
    assert [log.id for log in remote] == ["morning"]
    assert remote[0].calories == 400


@pytest.mark.asyncio
async def test_simulated_week(backend):
    await signed_in(backend)
    book = LogBook(backend)
    logs = await book.simulate_week(rng=random.Random(7), now=datetime(2024, 3, 10, 12, 0))

    assert len(logs) == DEMO_DAYS
    assert logs[0].date.date().isoformat() == "2024-03-10"
    assert logs[-1].date.date().isoformat() == "2024-03-04"
    for log in logs:
        assert 45 <= log.duration <= 59
        assert 300 <= log.calories <= 499
        assert len(log.exercises) == 3
    assert len(await backend.get_logs()) == DEMO_DAYS


@pytest.mark.asyncio
async def test_profile_book_defaults_then_saves(backend):
    await signed_in(backend)
    book = ProfileBook(backend)
    profile = await book.load()
    assert profile == UserProfile()

    await book.save(UserProfile(name="Ana", weight=80))
    assert (await ProfileBook(backend).load()).name == "Ana"


@pytest.mark.asyncio
async def test_profile_book_records_weight(backend):
    await signed_in(backend)
    book = ProfileBook(backend)
    await book.save(UserProfile(weight=80))
    await book.record_weight(80, when=datetime(2024, 1, 1))
    await book.record_weight(78.5, when=datetime(2024, 2, 1))

    assert book.profile.weight == 78.5
    assert book.trend().formatted == "-1.5"
    remote = await backend.get_profile()
    assert remote.weight == 78.5
    assert len(remote.weight_history) == 2

    with pytest.raises(ValueError):
        await book.record_weight(0)
