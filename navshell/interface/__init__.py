#!/usr/bin/env python3
# navshell/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console interface and command dispatch.

Provides:
- Parser helpers splitting a submitted line into command and argument.
- The ghost-text suggestion engine.
- The Interpreter (dispatcher plus keystroke entry points).
- Dynamic command loader for the plugins package.
- CLI frontends (prompt_toolkit / plain input).
"""


# Parser and completion FIRST (handler depends on them)
from .parser import is_blank, split_command, split_partial, build_usage
from .completion import suggest, index_wanted

# Handler context / dispatcher
from .context import Services, ShellContext
from .handler import HELP_TEXT, ExecutionResult, Interpreter

# Loader
from .loader import build_registry, load_commands, make_section_command

# CLI frontends (after the interpreter is available)
from .cli import BaseCLI, PromptToolkitCLI, make_cli, render_output

__all__ = [
    # parser
    "is_blank",
    "split_command",
    "split_partial",
    "build_usage",
    # completion
    "suggest",
    "index_wanted",
    # handler
    "Services",
    "ShellContext",
    "HELP_TEXT",
    "ExecutionResult",
    "Interpreter",
    # loader
    "build_registry",
    "load_commands",
    "make_section_command",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "make_cli",
    "render_output",
]
