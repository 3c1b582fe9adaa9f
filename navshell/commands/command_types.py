#!/usr/bin/env python3
# navshell/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- OutputKind / Output: the single typed value shown in the output panel.
- Side effects: fire-and-forget requests a handler hands back to the dispatcher.
- CommandResult: what every handler returns.
- CommandCallback: the callable protocol for any command implementation.
- Command: a registered command with metadata and a callable.
"""

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:  # pragma: no cover - typing only
    from navshell.fs import WorkingDirectory
    from navshell.interface.context import ShellContext


class OutputKind(str, enum.Enum):
    TEXT = "text"
    LIST = "list"
    HELP = "help"
    ERROR = "error"
    SUCCESS = "success"
    WARNING = "warning"
    ASCII = "ascii"
    LOADING = "loading"
    NONE = "none"


# Seconds before an output of each kind is dismissed. None = stays until replaced.
DEFAULT_TIMEOUTS: dict[OutputKind, float | None] = {
    OutputKind.TEXT: 5.0,
    OutputKind.LIST: 8.0,
    OutputKind.HELP: 15.0,
    OutputKind.ERROR: 4.0,
    OutputKind.SUCCESS: 3.0,
    OutputKind.WARNING: 3.0,
    OutputKind.ASCII: 10.0,
    OutputKind.LOADING: None,
    OutputKind.NONE: None,
}


@dataclass(frozen=True, slots=True)
class Output:
    """
    Panel output produced by a handler.

    Attributes:
        kind: Rendering/expiry category.
        payload: str for most kinds, list[str] for LIST and HELP.
        timeout: Explicit auto-dismiss delay; None falls back to the kind default.
    """
    kind: OutputKind
    payload: Any = None
    timeout: float | None = None

    @property
    def visible(self) -> bool:
        return self.kind is not OutputKind.NONE

    def lines(self) -> list[str]:
        """Payload flattened to display lines."""
        if self.payload is None:
            return []
        if isinstance(self.payload, (list, tuple)):
            return [str(item) for item in self.payload]
        return str(self.payload).splitlines() or [""]

    # Convenience constructors keep handlers short
    @classmethod
    def text(cls, message: str, timeout: float | None = None) -> "Output":
        return cls(OutputKind.TEXT, message, timeout)

    @classmethod
    def listing(cls, items: list[str], timeout: float | None = None) -> "Output":
        return cls(OutputKind.LIST, list(items), timeout)

    @classmethod
    def help(cls, lines: list[str]) -> "Output":
        return cls(OutputKind.HELP, list(lines))

    @classmethod
    def error(cls, message: str) -> "Output":
        return cls(OutputKind.ERROR, message)

    @classmethod
    def success(cls, message: str) -> "Output":
        return cls(OutputKind.SUCCESS, message)

    @classmethod
    def warning(cls, message: str) -> "Output":
        return cls(OutputKind.WARNING, message)

    @classmethod
    def ascii(cls, art: str) -> "Output":
        return cls(OutputKind.ASCII, art)

    @classmethod
    def loading(cls, message: str = "Loading...") -> "Output":
        return cls(OutputKind.LOADING, message)

    @classmethod
    def none(cls) -> "Output":
        return cls(OutputKind.NONE)


# Output is the panel presentation; cd failures use TransientBufferMessage instead.
PanelOutput = Output


@dataclass(frozen=True, slots=True)
class TransientBufferMessage:
    """Text that temporarily replaces the input line, then resets it to empty."""
    text: str
    duration: float = 2.0


# ---------------- side effects ----------------

@dataclass(frozen=True, slots=True)
class Navigate:
    path: str


@dataclass(frozen=True, slots=True)
class OpenUrl:
    url: str


@dataclass(frozen=True, slots=True)
class Reload:
    delay: float = 0.0


@dataclass(frozen=True, slots=True)
class TriggerEffect:
    name: str


@dataclass(frozen=True, slots=True)
class Close:
    pass


SideEffect = Navigate | OpenUrl | Reload | TriggerEffect | Close


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        output: Replacement panel output; Output.none() clears the panel,
            None leaves it untouched.
        cwd: New working directory, or None to keep the current one.
        effects: Side effects for the dispatcher to run, in order.
        transient: Message to flash in the input line instead of the panel.
    """
    output: Output | None = None
    cwd: "WorkingDirectory | None" = None
    effects: tuple[SideEffect, ...] = ()
    transient: TransientBufferMessage | None = None

    def __str__(self) -> str:
        return "\n".join(self.output.lines()) if self.output else ""


class CommandCallback(Protocol):
    """Protocol for any command function."""

    def __call__(self, ctx: "ShellContext", argument: str) -> CommandResult:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class Command:
    """
    A registered command with metadata and a callable to execute.

    Important fields:
        name: Primary unique command name.
        description: Short, user-facing description.
        example: One-line example usage string (optional).
        callback: Function implementing the command.
        module: Python module path where the command is defined.
        category: Logical group for help menu organization.
        aliases: Extra names resolving to the same command.
        needs_index: True if the handler may consult the record index.
    """

    name: str
    description: str
    example: str
    callback: CommandCallback
    module: str = field(default="", repr=False)
    category: str = "general"
    aliases: list[str] = field(default_factory=list)  # type: ignore
    needs_index: bool = False

    def invoke(self, ctx: "ShellContext", argument: str) -> CommandResult:
        """Execute the underlying command callback."""
        return self.callback(ctx, argument)
