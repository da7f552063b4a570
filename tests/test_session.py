"""Tests for session wiring and teardown."""

from datetime import datetime

import pytest

from conftest import FakeLLM, FakeProvider, make_log, report_payload, strength, transport
from fitgenius.services.cache import MemorySessionStore
from fitgenius.services.session import FitGeniusSession


@pytest.mark.asyncio
async def test_session_flow_and_cache_cleared_on_close():
    store = MemorySessionStore()
    llm = FakeLLM(report_payload())

    async with FitGeniusSession(
        session_id="s1", store=store, transport=transport, llm_provider=FakeProvider(report=llm)
    ) as session:
        await session.backend.register("ana", "s3cretpass")
        await session.start()
        assert session.profile.profile.name == "Athlete"
        assert session.logs.logs == []

        await session.logs.add(make_log(datetime(2024, 3, 1, 9), exercises=[strength("Squat")]))
        report = await session.report_panel().refresh(session.logs.logs, session.profile.profile)
        assert report.score == 82

        again = await session.report_panel().refresh(session.logs.logs, session.profile.profile)
        assert again == report
        assert llm.calls == 1
        assert len(store) == 1

    assert len(store) == 0


@pytest.mark.asyncio
async def test_new_entry_uses_profile_weight():
    async with FitGeniusSession(store=MemorySessionStore(), transport=transport) as session:
        await session.backend.register("ben", "b3npassword")
        await session.profile.record_weight(90)
        form = session.new_entry()
        assert form.body_weight == 90
        assert session.session_id


class DownStore(MemorySessionStore):
    async def clear(self):
        raise ConnectionError("redis down")

    async def close(self):
        raise ConnectionError("redis down")


@pytest.mark.asyncio
async def test_close_survives_store_failure_and_closes_backend():
    session = FitGeniusSession(store=DownStore(), transport=transport)
    await session.close()
    assert session.backend._client.is_closed
