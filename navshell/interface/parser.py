#!/usr/bin/env python3
# navshell/interface/parser.py
from __future__ import annotations

"""
Line parsing helpers for commands.

Responsibilities:
- Split a submitted line into a lower-cased command name and one argument
  string (inner spaces kept, so multi-word titles survive).
- Render compact usage strings for help output.

No quoting, globbing, pipes or redirection: a line is one command.
"""

import re

from navshell.commands import Command

_FIRST_WS = re.compile(r"\s+")


def is_blank(line: str) -> bool:
    return not line.strip()


def split_command(line: str) -> tuple[str, str]:
    """
    Split on the first whitespace run.

    Examples:
        'CD  my post ' -> ('cd', 'my post')
        'ls'           -> ('ls', '')
    """
    stripped = line.strip()
    if not stripped:
        return "", ""
    parts = _FIRST_WS.split(stripped, maxsplit=1)
    command_name = parts[0].lower()
    argument = parts[1].strip() if len(parts) > 1 else ""
    return command_name, argument


def split_partial(raw_input: str) -> tuple[str, str | None]:
    """
    Split in-progress input for completion.

    Returns (command, argument) where argument is None while the command name
    is still being typed. Trailing spaces of the argument are kept.
    """
    match = _FIRST_WS.search(raw_input)
    if match is None:
        return raw_input, None
    return raw_input[:match.start()], raw_input[match.end():]


def build_usage(command_obj: Command) -> str:
    """Usage line: the example when one is declared, else the bare name."""
    return command_obj.example or command_obj.name
