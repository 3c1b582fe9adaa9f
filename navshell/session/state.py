#!/usr/bin/env python3
# navshell/session/state.py
from __future__ import annotations

"""
Interpreter session: the one mutable object a shell owns.

Tracks the working directory, the input buffer and its ghost suggestion, the
submitted-line history, the visible panel output with its expiry timer, the
transient buffer message, and the running animated task (if any).

Timer and fetch callbacks arrive on worker threads, so every mutation happens
under the session's re-entrant lock.
"""

import enum
import logging
import threading
from typing import Callable, Mapping, Optional, Protocol

from navshell.commands import DEFAULT_TIMEOUTS, Output, OutputKind, TransientBufferMessage
from navshell.fs import WorkingDirectory
from navshell.session.scheduler import Scheduler, ThreadingScheduler, TimerHandle

logger = logging.getLogger(__name__)

HISTORY_DISPLAY_LIMIT = 10


class SessionState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_INPUT = "awaiting_input"
    EXECUTING = "executing"
    OUTPUT_VISIBLE = "output_visible"


class SessionTask(Protocol):
    """A bounded-lifetime animated task (e.g. disco) owned by the session."""

    @property
    def active(self) -> bool:  # pragma: no cover - protocol
        ...

    def cancel(self) -> None:  # pragma: no cover - protocol
        ...


class Session:
    """
    Explicit session value with a create()/dispose() lifecycle.

    Nothing here knows about commands; the interpreter drives it.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        timeouts: Mapping[OutputKind, float | None] | None = None,
        owns_scheduler: bool = False,
    ) -> None:
        self.scheduler = scheduler
        self.timeouts: dict[OutputKind, float | None] = dict(DEFAULT_TIMEOUTS)
        if timeouts:
            self.timeouts.update(timeouts)
        self._owns_scheduler = owns_scheduler
        self._lock = threading.RLock()
        self._listeners: list[Callable[["Session"], None]] = []

        self.cwd = WorkingDirectory.root()
        self.buffer = ""
        self.suggestion = ""
        self.history: list[str] = []
        self.output: Optional[Output] = None
        self.transient: Optional[TransientBufferMessage] = None
        self.task: Optional[SessionTask] = None

        self._output_timer: Optional[TimerHandle] = None
        self._output_generation = 0
        self._transient_timer: Optional[TimerHandle] = None
        self._request_token = 0
        self._executing = False
        self._disposed = False

    # ---------------- Lifecycle ----------------

    @classmethod
    def create(
        cls,
        scheduler: Scheduler | None = None,
        *,
        timeouts: Mapping[OutputKind, float | None] | None = None,
    ) -> "Session":
        if scheduler is None:
            return cls(ThreadingScheduler(), timeouts=timeouts, owns_scheduler=True)
        return cls(scheduler, timeouts=timeouts)

    def dispose(self) -> None:
        """Cancel every timer and task; the session is inert afterwards."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._cancel_output_timer()
            self._cancel_transient_timer()
            self.cancel_task()
            self.output = None
            self._listeners.clear()
        if self._owns_scheduler:
            self.scheduler.shutdown()

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    # ---------------- Observers ----------------

    def subscribe(self, listener: Callable[["Session"], None]) -> None:
        """Call `listener` after every visible change (frontends redraw on it)."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Session listener failed")

    # ---------------- State ----------------

    @property
    def state(self) -> SessionState:
        with self._lock:
            if self._executing:
                return SessionState.EXECUTING
            if self.output is not None:
                return SessionState.OUTPUT_VISIBLE
            if self.buffer and self.transient is None:
                return SessionState.AWAITING_INPUT
            return SessionState.IDLE

    def begin_execution(self) -> int:
        """Enter EXECUTING and issue a fresh request token."""
        with self._lock:
            self._executing = True
            self._request_token += 1
            return self._request_token

    def end_execution(self) -> None:
        with self._lock:
            self._executing = False
        self._notify()

    def is_current(self, token: int) -> bool:
        """True while no newer submission has been made since `token` was issued."""
        with self._lock:
            return not self._disposed and token == self._request_token

    # ---------------- Working directory / history ----------------

    def change_directory(self, cwd: WorkingDirectory) -> None:
        with self._lock:
            self.cwd = cwd

    def record(self, line: str) -> None:
        with self._lock:
            self.history.append(line)

    def recent_history(self, limit: int = HISTORY_DISPLAY_LIMIT, *, skip_last: int = 0) -> list[str]:
        """Most recent lines first, at most `limit` of them."""
        with self._lock:
            lines = self.history[:len(self.history) - skip_last] if skip_last else list(self.history)
        return list(reversed(lines[-limit:])) if limit > 0 else []

    # ---------------- Input buffer ----------------

    def set_buffer(self, text: str, suggestion: str = "") -> None:
        with self._lock:
            if self.transient is not None:
                self._end_transient()
            self.buffer = text
            self.suggestion = suggestion
        self._notify()

    def clear_buffer(self) -> None:
        self.set_buffer("")

    def flash_buffer(self, message: TransientBufferMessage) -> None:
        """Show `message` in place of the input line, then reset the line."""
        with self._lock:
            self._cancel_transient_timer()
            self.transient = message
            self.buffer = message.text
            self.suggestion = ""
            self._transient_timer = self.scheduler.call_later(
                message.duration, lambda: self._expire_transient(message))
        self._notify()

    def _expire_transient(self, message: TransientBufferMessage) -> None:
        with self._lock:
            if self.transient is not message:
                return
            self._transient_timer = None
            self._end_transient()
        self._notify()

    def _end_transient(self) -> None:
        self._cancel_transient_timer()
        self.transient = None
        self.buffer = ""
        self.suggestion = ""

    def _cancel_transient_timer(self) -> None:
        if self._transient_timer is not None:
            self._transient_timer.cancel()
            self._transient_timer = None

    # ---------------- Panel output ----------------

    def show(self, output: Output) -> None:
        """Replace the panel output and arm its expiry timer."""
        with self._lock:
            if self._disposed:
                return
            self._cancel_output_timer()
            self._output_generation += 1
            if not output.visible:
                self.output = None
            else:
                self.output = output
                delay = output.timeout if output.timeout is not None else self.timeouts.get(output.kind)
                if delay is not None:
                    generation = self._output_generation
                    self._output_timer = self.scheduler.call_later(
                        delay, lambda: self._expire_output(generation))
        self._notify()

    def _expire_output(self, generation: int) -> None:
        with self._lock:
            if generation != self._output_generation:
                return
            self._output_timer = None
            self.output = None
        self._notify()

    def dismiss(self) -> None:
        """Hide the panel (explicit close or `clear`)."""
        with self._lock:
            self._cancel_output_timer()
            self._output_generation += 1
            self.output = None
        self._notify()

    def _cancel_output_timer(self) -> None:
        if self._output_timer is not None:
            self._output_timer.cancel()
            self._output_timer = None

    # ---------------- Animated task ----------------

    def start_task(self, task: SessionTask) -> None:
        """Own `task`; any previous task is cancelled first."""
        with self._lock:
            self.cancel_task()
            self.task = task

    def cancel_task(self) -> None:
        with self._lock:
            task, self.task = self.task, None
        if task is not None and task.active:
            task.cancel()

    def release_task(self, task: SessionTask) -> None:
        """Forget `task` once it finished on its own."""
        with self._lock:
            if self.task is task:
                self.task = None
