# tests/test_debounce.py
"""Tests for the debounce gate (real asyncio loop, short delays)."""

import asyncio
import time

import pytest

from wordbook.core.debounce import DebounceGate


def test_burst_fires_once_after_last_call():
    calls = []

    async def scenario():
        gate = DebounceGate()
        last = None
        for i in range(3):
            last = time.monotonic()
            gate.schedule("x", 0.3, lambda n=i: calls.append((n, time.monotonic())))
            await asyncio.sleep(0.1)
        await asyncio.sleep(0.4)
        assert len(gate) == 0
        return last

    last_call = asyncio.run(scenario())

    assert len(calls) == 1
    n, fired_at = calls[0]
    assert n == 2
    assert fired_at - last_call >= 0.29
    assert fired_at - last_call < 0.5


def test_separate_keys_fire_independently():
    calls = []

    async def scenario():
        gate = DebounceGate()
        gate.schedule("a", 0.05, calls.append, "a")
        gate.schedule("b", 0.05, calls.append, "b")
        await asyncio.sleep(0.15)

    asyncio.run(scenario())
    assert sorted(calls) == ["a", "b"]


def test_calls_spaced_beyond_delay_all_fire():
    calls = []

    async def scenario():
        gate = DebounceGate()
        for i in range(3):
            gate.schedule("x", 0.03, calls.append, i)
            await asyncio.sleep(0.08)

    asyncio.run(scenario())
    assert calls == [0, 1, 2]


def test_cancel():
    calls = []

    async def scenario():
        gate = DebounceGate()
        gate.schedule("x", 0.05, calls.append, 1)
        assert gate.pending("x")
        assert gate.cancel("x") is True
        assert gate.cancel("x") is False
        assert not gate.pending("x")
        await asyncio.sleep(0.1)

    asyncio.run(scenario())
    assert calls == []


def test_coroutine_action():
    calls = []

    async def action(value):
        await asyncio.sleep(0)
        calls.append(value)

    async def scenario():
        gate = DebounceGate()
        gate.schedule("x", 0.02, action, "first")
        gate.schedule("x", 0.02, action, "second")
        await asyncio.sleep(0.1)
        assert not gate._tasks

    asyncio.run(scenario())
    assert calls == ["second"]


def test_failing_action_does_not_break_gate():
    calls = []

    def boom():
        raise RuntimeError("boom")

    async def scenario():
        gate = DebounceGate()
        gate.schedule("x", 0.01, boom)
        await asyncio.sleep(0.05)
        gate.schedule("x", 0.01, calls.append, "ok")
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert calls == ["ok"]


def test_no_handles_leak_across_reschedules():
    async def scenario():
        gate = DebounceGate()
        for _ in range(1000):
            gate.schedule("x", 10, lambda: None)
        assert len(gate) == 1
        gate.cancel_all()
        assert len(gate) == 0

    asyncio.run(scenario())


def test_injected_loop():
    loop = asyncio.new_event_loop()
    try:
        calls = []
        gate = DebounceGate(loop=loop)
        gate.schedule("x", 0.01, calls.append, "ran")
        loop.run_until_complete(asyncio.sleep(0.05))
        assert calls == ["ran"]
    finally:
        loop.close()


def test_negative_delay():
    async def scenario():
        with pytest.raises(ValueError):
            DebounceGate().schedule("x", -1, lambda: None)

    asyncio.run(scenario())
