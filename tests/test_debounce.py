"""Tests for the asyncio debouncer."""

import asyncio

import pytest

from fitgenius.utils.debounce import Debouncer


@pytest.mark.asyncio
async def test_rapid_calls_coalesce_to_last_arguments():
    calls = []
    debouncer = Debouncer(calls.append, 0.01)
    for value in (1, 2, 3):
        debouncer.schedule(value)
    assert debouncer.pending
    await asyncio.sleep(0.05)
    assert calls == [3]
    assert not debouncer.pending


@pytest.mark.asyncio
async def test_cancel_prevents_call():
    calls = []
    debouncer = Debouncer(calls.append, 0.01)
    handle = debouncer.schedule("x")
    assert isinstance(handle, asyncio.TimerHandle)
    debouncer.cancel()
    await asyncio.sleep(0.05)
    assert calls == []


@pytest.mark.asyncio
async def test_failing_call_is_logged_not_raised():
    def explode():
        raise RuntimeError("boom")

    debouncer = Debouncer(explode, 0.0)
    debouncer.schedule()
    await asyncio.sleep(0.02)
    assert not debouncer.pending


def test_schedule_requires_running_loop():
    with pytest.raises(RuntimeError):
        Debouncer(print, 0.1).schedule()
