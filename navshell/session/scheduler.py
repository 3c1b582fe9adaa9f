#!/usr/bin/env python3
# navshell/session/scheduler.py
from __future__ import annotations

"""
Cancellable delayed callbacks.

Every timed behaviour (panel expiry, transient buffer reset, reboot delay,
disco ticks) goes through a Scheduler so the session can cancel it and tests
can drive time by hand.
"""

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:  # pragma: no cover - protocol
        ...

    @property
    def cancelled(self) -> bool:  # pragma: no cover - protocol
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:  # pragma: no cover - protocol
        ...

    def shutdown(self) -> None:  # pragma: no cover - protocol
        ...


class _ThreadTimer:
    """threading.Timer wrapper that records cancellation and swallows callback errors."""

    def __init__(self, owner: "ThreadingScheduler", delay: float, callback: Callable[[], None]) -> None:
        self._owner = owner
        self._callback = callback
        self._cancelled = False
        self._timer = threading.Timer(max(0.0, delay), self._run)
        self._timer.daemon = True

    def start(self) -> None:
        self._timer.start()

    def _run(self) -> None:
        self._owner._forget(self)
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("Scheduled callback failed")

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()
        self._owner._forget(self)

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler:
    """Runs callbacks on daemon timer threads."""

    def __init__(self) -> None:
        self._live: set[_ThreadTimer] = set()
        self._mutex = threading.Lock()
        self._closed = False

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ThreadTimer(self, delay, callback)
        with self._mutex:
            if self._closed:
                handle._cancelled = True
                return handle
            self._live.add(handle)
        handle.start()
        return handle

    def _forget(self, handle: _ThreadTimer) -> None:
        with self._mutex:
            self._live.discard(handle)

    def shutdown(self) -> None:
        """Cancel every pending timer and refuse new ones."""
        with self._mutex:
            self._closed = True
            pending = list(self._live)
        for handle in pending:
            handle.cancel()
