#!/usr/bin/env python3
# navshell/session/tasks.py
from __future__ import annotations

"""
Timed animated tasks owned by a session.

DiscoTask swaps a preview palette every `interval` seconds for `duration`
seconds. The tick timer and the end timer form one unit: finishing or
cancelling stops both and restores the variant that was active at start.
"""

import logging
import random
import threading
from typing import Callable, Mapping, Optional, Sequence

from navshell.services.base import ThemeEngine, VisualEffects
from navshell.session.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class DiscoTask:
    """Palette-cycling animation ending with a celebratory effect."""

    def __init__(
        self,
        scheduler: Scheduler,
        theme: ThemeEngine,
        effects: VisualEffects,
        palettes: Sequence[Mapping[str, str]],
        *,
        interval: float = 0.15,
        duration: float = 3.0,
        effect_name: str = "confetti",
        rng: random.Random | None = None,
        on_finish: Optional[Callable[["DiscoTask"], None]] = None,
    ) -> None:
        if not palettes:
            raise ValueError("DiscoTask needs at least one palette")
        self._scheduler = scheduler
        self._theme = theme
        self._effects = effects
        self._palettes = list(palettes)
        self.interval = interval
        self.duration = duration
        self.effect_name = effect_name
        self._rng = rng or random.Random()
        self._on_finish = on_finish
        self._mutex = threading.Lock()
        self._tick_timer: Optional[TimerHandle] = None
        self._end_timer: Optional[TimerHandle] = None
        self._original_variant: str | None = None
        self._active = False
        self.frames = 0

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        with self._mutex:
            if self._active:
                return
            self._active = True
            self._original_variant = self._theme.get_current_variant()
            self._end_timer = self._scheduler.call_later(self.duration, self._finish)
        self._tick()

    def _tick(self) -> None:
        with self._mutex:
            if not self._active:
                return
            palette = self._rng.choice(self._palettes)
            self.frames += 1
            self._tick_timer = self._scheduler.call_later(self.interval, self._tick)
        self._theme.preview_variant(palette)

    def _stop_timers(self) -> None:
        for handle in (self._tick_timer, self._end_timer):
            if handle is not None:
                handle.cancel()
        self._tick_timer = None
        self._end_timer = None

    def _restore(self) -> None:
        self._theme.preview_variant(None)
        if self._original_variant is not None:
            self._theme.set_variant(self._original_variant)

    def _finish(self) -> None:
        with self._mutex:
            if not self._active:
                return
            self._active = False
            self._stop_timers()
        self._restore()
        try:
            self._effects.trigger(self.effect_name)
        except Exception as exc:
            logger.warning("Effect '%s' failed: %s", self.effect_name, exc)
        logger.debug("Disco finished after %d frames", self.frames)
        if self._on_finish is not None:
            self._on_finish(self)

    def cancel(self) -> None:
        """Stop both timers and restore the theme without the closing effect."""
        with self._mutex:
            if not self._active:
                return
            self._active = False
            self._stop_timers()
        self._restore()
        logger.debug("Disco cancelled after %d frames", self.frames)
