#!/usr/bin/env python3
# navshell/boot/boot.py
from __future__ import annotations
"""
Boot sequence for navshell.

Goals:
- Wire configuration, logging, plugins, collaborators, interpreter and session.
- Keep clear status output for each boot step.
- Leave the record index untouched: it is fetched on first use (`cd blogs/`, `ls` in /blogs).
"""

import logging
import platform
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional

from navshell.commands import REGISTRY
from navshell.config import AppConfig, load_config
from navshell.fs import DirectoryModel, DynamicDirectory
from navshell.interface.context import Services
from navshell.interface.handler import Interpreter
from navshell.interface.loader import build_registry, load_commands
from navshell.services import (
    BrowserOpener,
    ConsoleEffects,
    ConsoleRouter,
    HttpRecordIndex,
    ProcessReloader,
    SystemClipboard,
    TerminalTheme,
    UnconfiguredRecordIndex,
)
from navshell.services.base import RecordIndex
from navshell.services.theme import DISCO_PALETTES
from navshell.session import Session
from navshell.ui import colorize, enable_windows_vt, init_logger, print_line


@dataclass(slots=True)
class BootState:
    config: AppConfig
    logger: logging.Logger
    interpreter: Interpreter
    session: Session
    services: Services
    executor: ThreadPoolExecutor
    loaded_count: int

    def shutdown(self) -> None:
        """Stop timers and the fetch worker; safe to call twice."""
        self.session.dispose()
        self.executor.shutdown(wait=False, cancel_futures=True)


def _step(label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red"))
        raise
    if not quiet:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def _record_index(config: AppConfig) -> RecordIndex:
    if not config.site_url:
        return UnconfiguredRecordIndex()
    return HttpRecordIndex(
        config.site_url,
        path=config.record_index_path,
        timeout_seconds=config.fetch_timeout,
    )


def build_services(config: AppConfig, announce: Optional[Callable[[str], None]] = None) -> Services:
    """Default terminal collaborators for `config`."""
    opener = BrowserOpener()
    theme = TerminalTheme(config.theme)
    effects = ConsoleEffects(announce)
    return Services(
        router=ConsoleRouter(config.site_url, open_browser=config.open_browser, opener=opener),
        clipboard=SystemClipboard(),
        theme=theme,
        effects=effects,
        reloader=ProcessReloader(),
        opener=opener,
        disco_palettes=DISCO_PALETTES,
    )


def build_directory(config: AppConfig, executor: ThreadPoolExecutor,
                    index: Optional[RecordIndex] = None) -> DirectoryModel:
    dynamic = []
    if config.dynamic_section:
        dynamic.append(DynamicDirectory(config.dynamic_section, index or _record_index(config), executor))
    return DirectoryModel(config.sections, dynamic)


def boot_sequence(
    config: Optional[AppConfig] = None,
    *,
    quiet: bool = False,
    announce: Optional[Callable[[str], None]] = None,
) -> BootState:
    # ---------- console + env ----------
    _step("Enable ANSI sequences", enable_windows_vt, quiet=quiet)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        quiet=quiet,
    )

    # ---------- config ----------
    if config is None:
        config = _step("Load configuration", load_config, quiet=quiet)

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger("navshell", level=config.log_level or logging.WARNING,
                            logfile=config.log_file_path),
        quiet=quiet,
    )

    # ---------- commands ----------
    _step("Load command plugins", load_commands, quiet=quiet)
    registry = _step(
        "Register section shortcuts",
        lambda: build_registry(config.sections, REGISTRY),
        quiet=quiet,
    )
    loaded_count = len(registry)

    # ---------- collaborators ----------
    executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="navshell-index")
    services = _step("Start collaborators", lambda: build_services(config, announce), quiet=quiet)
    directory = _step("Mount site sections", lambda: build_directory(config, executor), quiet=quiet)

    interpreter = _step(
        "Build interpreter",
        lambda: Interpreter(registry, directory, services, config),
        quiet=quiet,
    )
    session = _step("Open session", Session.create, quiet=quiet)
    _step(f"Boot complete ({loaded_count} commands)", lambda: None, quiet=quiet)

    logger.debug("Booted with sections %s", ", ".join(config.sections))
    return BootState(
        config=config,
        logger=logger,
        interpreter=interpreter,
        session=session,
        services=services,
        executor=executor,
        loaded_count=loaded_count,
    )
