#!/usr/bin/env python3
# navshell/interface/context.py
from __future__ import annotations

"""
What a command handler gets to see.

Handlers are plain functions `(ctx, argument) -> CommandResult`. Everything
they may read or call lives on ShellContext; nothing is global.
"""

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from navshell.commands import CommandRegistry, CommandResult
from navshell.config import AppConfig, DisplayConfig
from navshell.fs import DirectoryModel, WorkingDirectory
from navshell.services import (
    Clipboard,
    Reloader,
    Router,
    ThemeEngine,
    UrlOpener,
    VisualEffects,
)
from navshell.session import Session


@dataclass
class Services:
    """The external collaborators, bundled."""
    router: Router
    clipboard: Clipboard
    theme: ThemeEngine
    effects: VisualEffects
    reloader: Reloader
    opener: UrlOpener
    disco_palettes: tuple[dict[str, str], ...] = ()


@dataclass
class ShellContext:
    """
    Per-submission handler context.

    `deliver` hands a late result (e.g. after a fetch) back to the
    interpreter; it is dropped if a newer submission has happened meanwhile.
    """
    session: Session
    directory: DirectoryModel
    services: Services
    config: AppConfig
    registry: CommandRegistry
    token: int
    deliver: Callable[[CommandResult], None]
    clock: Callable[[], datetime] = datetime.now
    rng: random.Random = field(default_factory=random.Random)

    @property
    def display(self) -> DisplayConfig:
        return self.config.display

    @property
    def cwd(self) -> WorkingDirectory:
        return self.session.cwd
