#!/usr/bin/env python3
# navshell/ui/utils/ansi.py
from __future__ import annotations

"""
ANSI escape helpers used by the terminal frontend and the log handler.

Theme palettes are '#RRGGBB' strings; `paint` turns a palette role into a
true-colour SGR sequence so `theme` and `disco` show up in the terminal.
"""

import os
import re
from typing import Mapping, Optional

# Named SGR sequences the renderer and logger need
ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "italic": "\x1b[3m",
    "underline": "\x1b[4m",

    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")
_HEX_RE = re.compile(r"#[0-9A-Fa-f]{6}")

_vt_enabled_cache: Optional[bool] = None


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def enable_windows_vt() -> bool:
    """
    True if ANSI escapes should render on the current console.

    POSIX terminals always qualify; on Windows only terminals known to speak
    VT sequences do (Windows Terminal, ConEmu, ANSICON, xterm-likes).
    """
    global _vt_enabled_cache
    if _vt_enabled_cache is not None:
        return _vt_enabled_cache

    if os.name != "nt":
        _vt_enabled_cache = True
    else:
        _vt_enabled_cache = bool(
            os.environ.get("WT_SESSION")
            or os.environ.get("ANSICON")
            or os.environ.get("ConEmuANSI") == "ON"
            or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
        )
    return _vt_enabled_cache


def rgb(r: int, g: int, b: int, *, background: bool = False) -> str:
    """Return a true-color SGR sequence for (r,g,b)."""
    r, g, b = (max(0, min(255, c)) for c in (r, g, b))
    return f"\x1b[{48 if background else 38};2;{r};{g};{b}m"


def hex_color(hex_code: str, *, background: bool = False) -> str:
    """Return a true-color SGR from '#RRGGBB'."""
    if not _HEX_RE.fullmatch(hex_code):
        raise ValueError("hex_code must be like '#RRGGBB'.")
    return rgb(int(hex_code[1:3], 16), int(hex_code[3:5], 16), int(hex_code[5:7], 16),
               background=background)


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more named SGR styles from ANSI (e.g., 'red', 'bold').
    Always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text


def paint(text: str, palette: Mapping[str, str], role: str, *, bold: bool = False) -> str:
    """Colour `text` with the palette colour for `role`; unknown roles stay plain."""
    colour = palette.get(role)
    if not colour or not _HEX_RE.fullmatch(colour) or not enable_windows_vt():
        return text
    prefix = hex_color(colour) + (ANSI["bold"] if bold else "")
    return f"{prefix}{text}{ANSI['reset']}"
