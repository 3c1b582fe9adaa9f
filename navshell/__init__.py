#!/usr/bin/env python3
# navshell/__init__.py
from __future__ import annotations
"""
navshell: a shell-like command interpreter for navigating a website.

Avoid eager imports that trigger package initialization cascades: the
interface and boot packages are imported by their users, not here.
"""

from navshell.commands import REGISTRY, Command, CommandResult, Output, OutputKind, command
from navshell.errors import NavshellError

__version__ = "0.1.0"

__all__ = [
    "REGISTRY",
    "Command",
    "CommandResult",
    "Output",
    "OutputKind",
    "command",
    "NavshellError",
    "__version__",
]
