# src/wordbook/core/debounce.py
"""
Coalesce bursts of calls into one call after a quiet period.

    gate = DebounceGate()
    gate.schedule("search", 0.3, lookup, "hel")
    gate.schedule("search", 0.3, lookup, "hello")   # replaces the first
    # 0.3s later: lookup("hello") runs once
"""

import asyncio
import inspect
import logging
from typing import Any, Callable


logger = logging.getLogger(__name__)


class DebounceGate:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop
        self._handles: dict[Any, asyncio.TimerHandle] = {}
        self._tasks: set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, key, delay: float, action: Callable, *args) -> None:
        """Run action(*args) after delay seconds unless rescheduled under the same key."""
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self.cancel(key)
        self._handles[key] = self.loop.call_later(delay, self._fire, key, action, args)

    def cancel(self, key) -> bool:
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def cancel_all(self) -> None:
        for key in list(self._handles):
            self.cancel(key)
        for task in list(self._tasks):
            task.cancel()

    def pending(self, key) -> bool:
        return key in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def _fire(self, key, action: Callable, args: tuple) -> None:
        self._handles.pop(key, None)
        try:
            result = action(*args)
        except Exception:
            logger.exception("debounced action for %r failed", key)
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result, loop=self.loop)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("debounced task failed", exc_info=task.exception())
