#!/usr/bin/env python3
# navshell/interface/handler.py
from __future__ import annotations

"""
Command dispatch and keystroke handling.

The Interpreter is stateless apart from its fixed collaborators; all mutable
state lives on the Session passed into every call.

Submission order for a non-blank line:
  1) append to history, clear the input buffer
  2) resolve the command (case-insensitive exact name)
  3) for a known command: new request token, cancel the running animation,
     run the handler, apply its result (cwd, panel or transient line, effects)
  4) unknown command: silent no-op unless UNKNOWN_COMMAND_ERROR is enabled
"""

import difflib
import logging
import random
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from navshell.commands import (
    Close,
    CommandRegistry,
    CommandResult,
    Navigate,
    OpenUrl,
    Output,
    Reload,
    SideEffect,
    TransientBufferMessage,
    TriggerEffect,
)
from navshell.config import AppConfig
from navshell.fs import DirectoryModel
from navshell.interface.completion import index_wanted, suggest
from navshell.interface.context import Services, ShellContext
from navshell.interface.parser import is_blank, split_command, split_partial
from navshell.session import Session

logger = logging.getLogger(__name__)

# Short hint used in unknown command errors
HELP_TEXT = "Type 'help' to list commands."


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """What one submission did, for frontends and tests."""
    command: str | None = None
    output: Output | None = None
    effects: tuple[SideEffect, ...] = ()
    transient: TransientBufferMessage | None = None

    @property
    def closed(self) -> bool:
        return any(isinstance(effect, Close) for effect in self.effects)


class Interpreter:
    """Parser/dispatcher plus the suggestion and key-input entry points."""

    def __init__(
        self,
        registry: CommandRegistry,
        directory: DirectoryModel,
        services: Services,
        config: AppConfig,
        *,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None,
    ) -> None:
        registry.freeze()
        self.registry = registry
        self.directory = directory
        self.services = services
        self.config = config
        self.clock = clock
        self.rng = rng or random.Random()

    # ---------------- Suggestions / keystrokes ----------------

    def suggest(self, raw_input: str, session: Session) -> str:
        return suggest(raw_input, session.cwd, self.directory, self.registry.names())

    def _prefetch(self, raw_input: str, session: Session) -> None:
        command_name, _ = split_partial(raw_input)
        command_obj = self.registry.get(command_name) if command_name else None
        if command_obj is not None and not command_obj.needs_index:
            # Commands that never read the index do not trigger a fetch
            return
        wanted = index_wanted(raw_input, session.cwd, self.directory)
        if wanted is not None:
            future = wanted.load()
            # Recompute the ghost text once titles arrive
            future.add_done_callback(lambda _f: self._refresh_suggestion(session))

    def _refresh_suggestion(self, session: Session) -> None:
        with session.lock:
            if session.transient is not None or session.disposed:
                return
            text = session.buffer
            fresh = self.suggest(text, session)
            if fresh != session.suggestion:
                session.set_buffer(text, fresh)

    def set_input(self, session: Session, text: str) -> str:
        """Replace the input buffer (any edit) and recompute the ghost suggestion."""
        self._prefetch(text, session)
        suggestion = self.suggest(text, session)
        session.set_buffer(text, suggestion)
        return suggestion

    def type_text(self, session: Session, text: str) -> str:
        # Typing over a transient message starts a fresh line
        base = "" if session.transient is not None else session.buffer
        return self.set_input(session, base + text)

    def backspace(self, session: Session) -> str:
        if session.transient is not None:
            return self.set_input(session, "")
        return self.set_input(session, session.buffer[:-1])

    def press_tab(self, session: Session) -> str:
        """Merge the ghost suggestion into the buffer; returns the new buffer."""
        if session.transient is None and session.suggestion:
            self.set_input(session, session.buffer + session.suggestion)
        return session.buffer

    def press_enter(self, session: Session) -> ExecutionResult:
        line = "" if session.transient is not None else session.buffer
        return self.execute(line, session)

    # ---------------- Dispatch ----------------

    def execute(self, raw_line: str, session: Session) -> ExecutionResult:
        """Parse and execute one submitted line against `session`."""
        if is_blank(raw_line):
            if session.transient is None:
                session.clear_buffer()
            return ExecutionResult()

        line = raw_line.strip()
        command_name, argument = split_command(line)
        session.record(line)
        session.clear_buffer()

        command_obj = self.registry.get(command_name)
        if command_obj is None:
            return self._unknown(command_name, session)

        token = session.begin_execution()
        session.cancel_task()
        late_results: list[CommandResult] = []
        running = threading.Event()
        running.set()

        def deliver(result: CommandResult) -> None:
            with session.lock:
                if running.is_set():
                    late_results.append(result)
                    return
            self._deliver(result, session, token)

        ctx = ShellContext(
            session=session,
            directory=self.directory,
            services=self.services,
            config=self.config,
            registry=self.registry,
            token=token,
            deliver=deliver,
            clock=self.clock,
            rng=self.rng,
        )

        logger.debug("dispatch %s %r", command_obj.name, argument)
        try:
            result = command_obj.invoke(ctx, argument)
            if not isinstance(result, CommandResult):
                result = CommandResult(Output.text(str(result)) if result is not None else None)
        except Exception as exc:
            logger.exception("Command '%s' failed", command_obj.name)
            result = CommandResult(Output.error(f"{command_obj.name}: {exc}"))

        try:
            effects = self._apply(result, session)
        finally:
            with session.lock:
                running.clear()
                pending = list(late_results)
            session.end_execution()

        for late in pending:
            self._deliver(late, session, token)

        return ExecutionResult(
            command=command_obj.name,
            output=result.output,
            effects=effects,
            transient=result.transient,
        )

    def _unknown(self, command_name: str, session: Session) -> ExecutionResult:
        if not self.config.unknown_command_error:
            logger.debug("Ignoring unknown command %r", command_name)
            return ExecutionResult()
        output = Output.error(
            f"command not found: {command_name}.{self._suggest_similar_names(command_name)} {HELP_TEXT}")
        session.begin_execution()
        session.cancel_task()
        session.show(output)
        session.end_execution()
        return ExecutionResult(output=output)

    def _suggest_similar_names(self, name: str) -> str:
        """Return a short suggestion string for misspelled commands."""
        matches = difflib.get_close_matches(name, self.registry.names(), n=3, cutoff=0.6)
        return f" Did you mean: {', '.join(matches)}?" if matches else ""

    def _deliver(self, result: CommandResult, session: Session, token: int) -> None:
        """Apply a late result unless a newer submission superseded it."""
        if not session.is_current(token):
            logger.debug("Discarding stale result for request %d", token)
            return
        self._apply(result, session)

    def _apply(self, result: CommandResult, session: Session) -> tuple[SideEffect, ...]:
        if result.cwd is not None:
            session.change_directory(result.cwd)
            self._prefetch("", session)
        if result.transient is not None:
            session.flash_buffer(result.transient)
        if result.output is not None:
            session.show(result.output)
        for effect in result.effects:
            self._run_effect(effect, session)
        return result.effects

    def _run_effect(self, effect: SideEffect, session: Session) -> None:
        try:
            if isinstance(effect, Navigate):
                self.services.router.navigate(effect.path)
            elif isinstance(effect, OpenUrl):
                self.services.opener.open(effect.url)
            elif isinstance(effect, TriggerEffect):
                self.services.effects.trigger(effect.name)
            elif isinstance(effect, Reload):
                # Deliberately not tracked by the session: once issued it runs
                session.scheduler.call_later(effect.delay, self.services.reloader.reload_application)
            elif isinstance(effect, Close):
                session.dismiss()
        except Exception as exc:
            logger.warning("Side effect %r failed: %s", effect, exc)
