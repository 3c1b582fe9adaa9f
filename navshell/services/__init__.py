#!/usr/bin/env python3
# navshell/services/__init__.py
from __future__ import annotations

"""
External collaborators: protocols plus the default terminal adapters.
"""

from .base import (
    Clipboard,
    RecordIndex,
    Reloader,
    Router,
    ThemeEngine,
    TitledRecord,
    UrlOpener,
    VisualEffects,
)
from .clipboard import MemoryClipboard, SystemClipboard
from .record_index import HttpRecordIndex, StaticRecordIndex, UnconfiguredRecordIndex
from .system import BrowserOpener, ConsoleEffects, ConsoleRouter, ProcessReloader
from .theme import DISCO_PALETTES, PALETTES, VARIANTS, TerminalTheme

__all__ = [
    "Clipboard",
    "RecordIndex",
    "Reloader",
    "Router",
    "ThemeEngine",
    "TitledRecord",
    "UrlOpener",
    "VisualEffects",
    "MemoryClipboard",
    "SystemClipboard",
    "HttpRecordIndex",
    "StaticRecordIndex",
    "UnconfiguredRecordIndex",
    "BrowserOpener",
    "ConsoleEffects",
    "ConsoleRouter",
    "ProcessReloader",
    "DISCO_PALETTES",
    "PALETTES",
    "VARIANTS",
    "TerminalTheme",
]
