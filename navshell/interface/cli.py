#!/usr/bin/env python3
# navshell/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (ghost-text suggestions, Tab to accept, live panel toolbar)
    2) plain input (last resort; panel output is printed below the prompt)

Both drive the same Interpreter/Session pair; the frontend only renders.
"""

import logging
from typing import Callable, Mapping, Optional

from navshell.commands import Output, OutputKind
from navshell.interface.handler import ExecutionResult, Interpreter
from navshell.session import Session
from navshell.ui import paint, print_block, print_line

logger = logging.getLogger(__name__)

GIT_BRANCH = "main"

# Output kind -> palette role
_KIND_ROLES = {
    OutputKind.TEXT: "text",
    OutputKind.LIST: "text",
    OutputKind.HELP: "accent",
    OutputKind.ERROR: "error",
    OutputKind.SUCCESS: "success",
    OutputKind.WARNING: "warning",
    OutputKind.ASCII: "accent",
    OutputKind.LOADING: "muted",
}


def prompt_parts(session: Session, interpreter: Interpreter) -> list[tuple[str, str]]:
    """(role, text) pieces of the prompt: symbol, ~path, optional git branch."""
    display = interpreter.config.display
    parts = [("prompt", f"{display.prompt_symbol} "), ("accent", f"~{session.cwd.path}")]
    if display.show_git_branch:
        parts.append(("muted", f" git:({GIT_BRANCH})"))
    parts.append(("text", " "))
    return parts


def output_lines(output: Optional[Output]) -> list[str]:
    if output is None or not output.visible:
        return []
    return output.lines()


def render_output(output: Optional[Output], palette: Mapping[str, str]) -> list[str]:
    """ANSI-coloured panel lines for plain terminals."""
    role = _KIND_ROLES.get(output.kind, "text") if output is not None else "text"
    return [paint(line, palette, role) for line in output_lines(output)]


class BaseCLI:
    """
    Plain `input()` frontend and base interface for richer ones.

    Subclasses override:
        - setup()
        - get_line()
        - teardown()

    This base also provides context manager support to guarantee teardown.
    """

    def __init__(self, interpreter: Interpreter, session: Session,
                 palette: Callable[[], Mapping[str, str]]) -> None:
        self.interpreter = interpreter
        self.session = session
        self.palette = palette
        self._shown_output: Optional[Output] = None
        self._shown_transient = None

    def setup(self) -> None:
        self.session.subscribe(self._on_session_change)

    def get_line(self) -> str:
        prompt = "".join(paint(text, self.palette(), role)
                         for role, text in prompt_parts(self.session, self.interpreter))
        return input(prompt)

    def teardown(self) -> None:
        pass

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    def submit(self, line: str) -> ExecutionResult:
        self.interpreter.set_input(self.session, line)
        return self.interpreter.press_enter(self.session)

    def run(self) -> None:
        """Read-eval loop until EOF, Ctrl-C or `exit`."""
        while True:
            try:
                line = self.get_line()
            except (EOFError, KeyboardInterrupt):
                print_line()
                break
            if self.submit(line).closed:
                break

    def _on_session_change(self, session: Session) -> None:
        # Late results (fetches, expiring panels) arrive here from worker threads
        with session.lock:
            output, transient = session.output, session.transient
            if output is self._shown_output and transient is self._shown_transient:
                return
            new_output = output is not None and output is not self._shown_output
            new_transient = transient is not None and transient is not self._shown_transient
            self._shown_output, self._shown_transient = output, transient
        palette = self.palette()
        if new_transient:
            print_line(paint(transient.text, palette, "error"))
        if new_output:
            print_block(render_output(output, palette))


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Line editor with inline ghost suggestions and a live output toolbar."""

    def __init__(self, interpreter: Interpreter, session: Session,
                 palette: Callable[[], Mapping[str, str]]) -> None:
        super().__init__(interpreter, session, palette)
        from prompt_toolkit import PromptSession
        from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
        from prompt_toolkit.history import InMemoryHistory
        from prompt_toolkit.key_binding import KeyBindings
        from prompt_toolkit.styles import Style

        shell = self

        class _InterpreterAutoSuggest(AutoSuggest):
            """Every edit flows through the interpreter, which owns the ghost text."""

            def get_suggestion(self, buffer, document):
                if document.cursor_position != len(document.text):
                    return None
                remainder = shell.interpreter.set_input(shell.session, document.text)
                return Suggestion(remainder) if remainder else None

        kb = KeyBindings()

        @kb.add("tab")
        def _(event):
            buf = event.current_buffer
            if buf.suggestion:
                buf.insert_text(buf.suggestion.text)

        self._prompt_session = PromptSession(
            history=InMemoryHistory(),
            auto_suggest=_InterpreterAutoSuggest(),
            key_bindings=kb,
            bottom_toolbar=self._toolbar,
            style=Style.from_dict({"bottom-toolbar": "noreverse"}),
            refresh_interval=0.5,
        )

    def _style(self, role: str) -> str:
        colour = self.palette().get(role)
        return f"fg:{colour}" if colour else ""

    def _message(self):
        return [(self._style(role), text) for role, text in prompt_parts(self.session, self.interpreter)]

    def _toolbar(self):
        with self.session.lock:
            transient, output = self.session.transient, self.session.output
        if transient is not None:
            return [(self._style("error"), transient.text)]
        lines = output_lines(output)
        if not lines:
            return ""
        style = self._style(_KIND_ROLES.get(output.kind, "text"))
        return [(style, "\n".join(lines))]

    def _on_session_change(self, session: Session) -> None:
        app = self._prompt_session.app
        if app.is_running:
            app.invalidate()

    def get_line(self) -> str:
        return self._prompt_session.prompt(self._message)

    def submit(self, line: str) -> ExecutionResult:
        # The auto-suggest hook already mirrored the buffer into the session
        return self.interpreter.execute(line, self.session)


def make_cli(interpreter: Interpreter, session: Session,
             palette: Callable[[], Mapping[str, str]]) -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.
    """
    try:
        return PromptToolkitCLI(interpreter, session, palette)
    except Exception as exc:
        # Missing library or no usable console (e.g. output piped)
        logger.info("prompt_toolkit frontend unavailable (%s); using plain input", exc)
        return BaseCLI(interpreter, session, palette)
