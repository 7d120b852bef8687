"""Tests for the debounce wrapper."""

from __future__ import annotations

import asyncio

import pytest

from aggregator_core.debounce import Debounced, debounce

# asyncio may fire a timer up to one clock tick early
TOLERANCE_S = 0.005


class TestDebounce:
    def test_coalesces_burst_into_last_call(self):
        calls = []

        async def scenario():
            loop = asyncio.get_running_loop()
            start = loop.time()
            wrapped = debounce(lambda v: calls.append((v, loop.time() - start)), 0.1)
            wrapped("a")
            await asyncio.sleep(0.03)
            wrapped("b")
            await asyncio.sleep(0.03)
            wrapped("c")
            last_call = loop.time() - start
            await asyncio.sleep(0.25)
            return last_call

        last_call = asyncio.run(scenario())
        assert len(calls) == 1
        value, fired_at = calls[0]
        assert value == "c"
        assert fired_at >= 0.16 - TOLERANCE_S
        assert fired_at >= last_call + 0.1 - TOLERANCE_S

    def test_never_invoked_synchronously(self):
        calls = []

        async def scenario():
            wrapped = debounce(calls.append, 0)
            wrapped("x")
            assert calls == []
            await asyncio.sleep(0.01)

        asyncio.run(scenario())
        assert calls == ["x"]

    def test_returns_none(self):
        async def scenario():
            wrapped = debounce(lambda: 123, 0.01)
            return wrapped()

        assert asyncio.run(scenario()) is None

    def test_separate_windows_each_fire(self):
        calls = []

        async def scenario():
            wrapped = debounce(calls.append, 0.02)
            wrapped(1)
            await asyncio.sleep(0.06)
            wrapped(2)
            await asyncio.sleep(0.06)

        asyncio.run(scenario())
        assert calls == [1, 2]

    def test_keyword_arguments_forwarded(self):
        calls = []

        async def scenario():
            wrapped = debounce(lambda a, b=None: calls.append((a, b)), 0.01)
            wrapped(1, b="first")
            wrapped(2, b="second")
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert calls == [(2, "second")]

    def test_isolation_between_wrappers(self):
        calls = []

        async def scenario():
            first = debounce(lambda v: calls.append(("first", v)), 0.03)
            second = debounce(lambda v: calls.append(("second", v)), 0.03)
            first(1)
            second(2)
            first(3)
            await asyncio.sleep(0.1)

        asyncio.run(scenario())
        assert sorted(calls) == [("first", 3), ("second", 2)]

    def test_same_function_wrapped_twice_is_independent(self):
        calls = []

        async def scenario():
            a = debounce(calls.append, 0.02)
            b = debounce(calls.append, 0.02)
            a("from-a")
            b("from-b")
            await asyncio.sleep(0.06)

        asyncio.run(scenario())
        assert sorted(calls) == ["from-a", "from-b"]

    def test_pending_and_cancel(self):
        calls = []

        async def scenario():
            wrapped = debounce(calls.append, 0.05)
            assert wrapped.pending is False
            wrapped("x")
            assert wrapped.pending is True
            assert wrapped.cancel() is True
            assert wrapped.pending is False
            assert wrapped.cancel() is False
            await asyncio.sleep(0.1)

        asyncio.run(scenario())
        assert calls == []

    def test_pending_clears_after_fire(self):
        async def scenario():
            wrapped = debounce(lambda: None, 0.01)
            wrapped()
            await asyncio.sleep(0.05)
            return wrapped.pending

        assert asyncio.run(scenario()) is False

    def test_coroutine_function_is_awaited(self):
        calls = []

        async def handler(value):
            await asyncio.sleep(0)
            calls.append(value)

        async def scenario():
            wrapped = debounce(handler, 0.01)
            wrapped("a")
            wrapped("b")
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert calls == ["b"]

    def test_failing_function_does_not_break_wrapper(self):
        calls = []

        def flaky(value):
            if value == "bad":
                raise RuntimeError("boom")
            calls.append(value)

        async def scenario():
            wrapped = debounce(flaky, 0.01)
            wrapped("bad")
            await asyncio.sleep(0.03)
            wrapped("good")
            await asyncio.sleep(0.03)

        asyncio.run(scenario())
        assert calls == ["good"]

    def test_failing_coroutine_is_contained(self):
        async def broken():
            raise RuntimeError("boom")

        async def scenario():
            wrapped = debounce(broken, 0.01)
            wrapped()
            await asyncio.sleep(0.05)
            return wrapped.pending

        assert asyncio.run(scenario()) is False

    def test_explicit_loop_allows_calls_outside_coroutines(self):
        calls = []
        loop = asyncio.new_event_loop()
        try:
            wrapped = Debounced(calls.append, 0.01, loop=loop)
            wrapped("outside")
            loop.run_until_complete(asyncio.sleep(0.05))
        finally:
            loop.close()
        assert calls == ["outside"]

    def test_rejects_negative_delay(self):
        with pytest.raises(ValueError):
            debounce(lambda: None, -1)
