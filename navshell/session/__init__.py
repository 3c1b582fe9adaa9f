#!/usr/bin/env python3
# navshell/session/__init__.py
from __future__ import annotations

"""
Session state machine, scheduling, and session-owned animated tasks.
"""

from .scheduler import Scheduler, ThreadingScheduler, TimerHandle
from .state import HISTORY_DISPLAY_LIMIT, Session, SessionState, SessionTask
from .tasks import DiscoTask

__all__ = [
    "Scheduler",
    "ThreadingScheduler",
    "TimerHandle",
    "HISTORY_DISPLAY_LIMIT",
    "Session",
    "SessionState",
    "SessionTask",
    "DiscoTask",
]
