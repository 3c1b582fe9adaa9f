#!/usr/bin/env python3
# navshell/interface/completion.py
from __future__ import annotations

"""
Ghost-text suggestion engine.

`suggest` returns only the characters still missing from what the user typed
(never the typed part itself), for inline display and Tab completion.

Strategy:
  1) No whitespace yet: case-sensitive prefix match against the command
     vocabulary, in registry order.
  2) Only `cd` has argument suggestions.
  3) 'parent/partial': titles of a loaded dynamic parent, case-insensitive.
  4) Bare argument: titles when the cwd is a loaded dynamic section, else the
     static root sections.
First match wins; a query equal to its candidate gets no suggestion.
"""

from typing import Iterable, Optional

from navshell.fs import DirectoryModel, DynamicDirectory, WorkingDirectory
from navshell.interface.parser import split_partial


def _first_prefix_match(query: str, candidates: Iterable[str]) -> str:
    for candidate in candidates:
        if candidate.startswith(query):
            return "" if candidate == query else candidate[len(query):]
    return ""


def _title_remainder(partial: str, directory: DynamicDirectory) -> str:
    entry = directory.first_with_prefix(partial)
    if entry is None or entry.name.lower() == partial.lower():
        return ""
    return entry.name[len(partial):]


def suggest(
    raw_input: str,
    cwd: WorkingDirectory,
    directory: DirectoryModel,
    vocabulary: Iterable[str],
) -> str:
    """Suffix completing `raw_input`, or '' when there is nothing to offer."""
    if not raw_input:
        return ""

    command_name, argument = split_partial(raw_input)

    # First token: command names
    if argument is None:
        return _first_prefix_match(command_name, vocabulary)

    if command_name.lower() != "cd" or not argument:
        return ""

    # cd parent/partial
    if "/" in argument:
        parent, partial = argument.split("/", 1)
        dynamic = directory.dynamic_for(parent.lower())
        if dynamic is None or not dynamic.loaded:
            return ""
        return _title_remainder(partial, dynamic)

    # cd partial inside a dynamic section
    current = directory.current_dynamic(cwd)
    if current is not None and current.loaded:
        return _title_remainder(argument, current)

    return _first_prefix_match(argument, directory.root_names())


def index_wanted(raw_input: str, cwd: WorkingDirectory, directory: DirectoryModel) -> Optional[DynamicDirectory]:
    """
    The dynamic section whose titles would help complete `raw_input`, if it
    still needs fetching. Callers trigger the (coalesced) load.
    """
    current = directory.current_dynamic(cwd)
    if current is not None and not current.ready:
        return current

    command_name, argument = split_partial(raw_input)
    if argument is None or command_name.lower() != "cd" or "/" not in argument:
        return None
    parent = argument.split("/", 1)[0]
    dynamic = directory.dynamic_for(parent.lower())
    if dynamic is not None and not dynamic.ready:
        return dynamic
    return None
