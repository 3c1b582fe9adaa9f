# navshell/plugins/navigation/entrypoint.py
from __future__ import annotations

import logging

from navshell.commands import (
    CommandResult,
    Navigate,
    Output,
    TransientBufferMessage,
    command,
)
from navshell.fs import DynamicDirectory, ResolutionStatus, WorkingDirectory

logger = logging.getLogger(__name__)


# -------------------------- helpers --------------------------

def _cd_failure(ctx, argument: str, *, clear_panel: bool) -> CommandResult:
    message = TransientBufferMessage(
        f"cd: no such directory: {argument}", ctx.config.transient_seconds)
    return CommandResult(Output.none() if clear_panel else None, transient=message)


def _cd_outcome(ctx, argument: str, cwd: WorkingDirectory, *, deferred: bool) -> CommandResult:
    resolution = ctx.directory.resolve(argument, cwd)
    if not resolution.found:
        return _cd_failure(ctx, argument, clear_panel=deferred)

    target = resolution.directory
    if target == cwd:
        return CommandResult(Output.none())
    return CommandResult(Output.none(), cwd=target, effects=(Navigate(target.route),))


def _when_loaded(ctx, directory: DynamicDirectory, build) -> CommandResult:
    """Start (or join) the index fetch and finish through ctx.deliver."""

    def _done(_future) -> None:
        ctx.deliver(build())

    directory.load().add_done_callback(_done)
    return CommandResult(Output.loading(f"Loading {directory.name}..."))


def _listing(ctx, directory: DynamicDirectory) -> CommandResult:
    if directory.error is not None:
        return CommandResult(Output.error(f"ls: could not load {directory.name}: {directory.error}"))
    children = ctx.directory.list_children(directory.name)
    return CommandResult(Output.listing([entry.display() for entry in children]))


# ---------- cd ----------
@command(
    name="cd",
    description="Change directory (navigates the site).",
    example="cd blogs/<title>",
    category="navigation",
    needs_index=True,
)
def cd(ctx, argument: str) -> CommandResult:
    cwd = ctx.cwd
    resolution = ctx.directory.resolve(argument, cwd)
    if resolution.status is ResolutionStatus.NEEDS_INDEX:
        logger.debug("cd %r waits for the '%s' index", argument, resolution.pending.name)
        return _when_loaded(
            ctx, resolution.pending, lambda: _cd_outcome(ctx, argument, cwd, deferred=True))
    return _cd_outcome(ctx, argument, cwd, deferred=False)


# ---------- ls ----------
@command(
    name="ls",
    description="List the current directory.",
    example="ls",
    category="navigation",
    needs_index=True,
)
def ls(ctx, argument: str) -> CommandResult:
    cwd = ctx.cwd
    if cwd.is_root:
        return CommandResult(Output.listing([entry.display() for entry in ctx.directory.list_root()]))

    directory = ctx.directory.current_dynamic(cwd)
    if directory is None:
        return CommandResult(Output.listing([]))
    if not directory.ready:
        return _when_loaded(ctx, directory, lambda: _listing(ctx, directory))
    return _listing(ctx, directory)


# ---------- pwd ----------
@command(
    name="pwd",
    description="Print the working directory.",
    example="pwd",
    category="navigation",
)
def pwd(ctx, argument: str) -> CommandResult:
    return CommandResult(Output.text(ctx.cwd.path))
