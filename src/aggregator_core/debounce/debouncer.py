"""Debounce wrapper built on the asyncio loop's timer handles.

A ``Debounced`` holds at most one pending ``TimerHandle``. Every call cancels
the pending handle (if any) and schedules a new one with the latest
arguments, so only the last call inside a quiet window ever runs.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from typing import Any

from aggregator_core.logging import get_logger

log = get_logger(__name__)


class Debounced:
    """Fire-and-forget wrapper that delays *fn* until *delay_seconds* of quiet.

    Must be called from inside a running event loop unless *loop* is given.
    If *fn* returns an awaitable it is scheduled as a task on the same loop.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        delay_seconds: float,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be non-negative")
        self._fn = fn
        self._delay = delay_seconds
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a scheduled call has not fired yet."""
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self.cancel()
        self._handle = loop.call_later(self._delay, self._fire, loop, args, kwargs)

    def cancel(self) -> bool:
        """Drop the pending call. Returns whether one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(
        self,
        loop: asyncio.AbstractEventLoop,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        self._handle = None
        try:
            result = self._fn(*args, **kwargs)
        except Exception:
            log.exception("debounced_call_failed", fn=_name_of(self._fn))
            return
        if inspect.isawaitable(result):
            task = loop.create_task(_await(result))
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("debounced_call_failed", fn=_name_of(self._fn), error=str(exc))


async def _await(awaitable: Any) -> Any:
    return await awaitable


def _name_of(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", repr(fn))


def debounce(fn: Callable[..., Any], delay_seconds: float) -> Debounced:
    """Wrap *fn* so that bursts of calls collapse into one delayed call."""
    return Debounced(fn, delay_seconds)
