#!/usr/bin/env python3
# navshell/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    ANSI,
    strip_ansi,
    enable_windows_vt,
    colorize,
    rgb,
    hex_color,
    paint,
)
from .console import PRINT_MUTEX, print_line, print_block

__all__ = [
    "ANSI",
    "strip_ansi",
    "enable_windows_vt",
    "colorize",
    "rgb",
    "hex_color",
    "paint",
    "PRINT_MUTEX",
    "print_line",
    "print_block",
]
