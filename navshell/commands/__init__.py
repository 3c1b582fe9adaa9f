#!/usr/bin/env python3
# navshell/commands/__init__.py
from __future__ import annotations

"""
Package for command management and registration.

Provides:
- Data structures (`Command`, `CommandResult`, `Output`, side effects).
- In-memory registry and decorators (`REGISTRY`, `command`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import (
    DEFAULT_TIMEOUTS,
    Close,
    Command,
    CommandCallback,
    CommandResult,
    Navigate,
    OpenUrl,
    Output,
    OutputKind,
    PanelOutput,
    Reload,
    SideEffect,
    TransientBufferMessage,
    TriggerEffect,
)
from .commands import REGISTRY, CommandRegistry, command

__all__ = [
    "DEFAULT_TIMEOUTS",
    "Close",
    "Command",
    "CommandCallback",
    "CommandResult",
    "Navigate",
    "OpenUrl",
    "Output",
    "OutputKind",
    "PanelOutput",
    "Reload",
    "SideEffect",
    "TransientBufferMessage",
    "TriggerEffect",
    "REGISTRY",
    "CommandRegistry",
    "command",
]
