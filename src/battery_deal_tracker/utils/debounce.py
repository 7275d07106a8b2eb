# -*- coding: utf-8 -*-
"""Debouncer: run only the last of a burst of actions, after a quiet period."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Optional

import structlog


class Debouncer:
    """Cancellable delayed task.

    schedule() replaces any action that is still waiting out its delay; only
    the last action of a burst runs. Once the delay has elapsed the action is
    detached from the debouncer's waiting slot and runs to completion, even if
    something new is scheduled meanwhile.
    """

    def __init__(
        self,
        delay_seconds: float,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the debouncer.

        Args:
            delay_seconds: Quiet window before the scheduled action fires.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._delay = max(0.0, delay_seconds)
        self._task: Optional[asyncio.Task[None]] = None
        self._waiting = False
        self._tasks: set[asyncio.Task[None]] = set()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while the latest action is still waiting for its delay."""
        return self._waiting and self._task is not None and not self._task.done()

    def schedule(self, action: Callable[[], Awaitable[Any]]) -> asyncio.Task[None]:
        """Restart the timer with action; a still-waiting previous action is dropped."""
        self.cancel()
        task = asyncio.create_task(self._run(action))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._task = task
        self._waiting = True
        return task

    async def _run(self, action: Callable[[], Awaitable[Any]]) -> None:
        await asyncio.sleep(self._delay)
        self._waiting = False
        try:
            await action()
        except Exception as e:
            self._logger.exception(
                "debounced_action_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )

    def cancel(self) -> bool:
        """Drop the waiting action, if any. Returns True if one was dropped."""
        if not self.pending:
            return False
        assert self._task is not None
        self._task.cancel()
        self._waiting = False
        return True

    async def flush(self) -> None:
        """Wait until the latest scheduled action has fired and finished."""
        while True:
            task = self._task
            if task is None or task.done():
                return
            try:
                await task
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise

    async def aclose(self) -> None:
        """Cancel waiting and running actions and wait for them to unwind."""
        self._waiting = False
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._task = None
