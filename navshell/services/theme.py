#!/usr/bin/env python3
# navshell/services/theme.py
from __future__ import annotations

"""
Terminal theme engine.

Holds the active variant ('light' or 'dark') and the palette the renderer
paints with. A preview palette temporarily overrides the variant's palette
until the variant is set again or the preview is cleared.
"""

import logging
import threading
from typing import Mapping

logger = logging.getLogger(__name__)

VARIANTS: tuple[str, ...] = ("light", "dark")

# Role -> '#RRGGBB'
PALETTES: dict[str, dict[str, str]] = {
    "dark": {
        "text": "#E6E1E5",
        "muted": "#938F99",
        "accent": "#D0BCFF",
        "prompt": "#10B981",
        "error": "#F2B8B5",
        "success": "#6EE7B7",
        "warning": "#FCD34D",
    },
    "light": {
        "text": "#1C1B1F",
        "muted": "#79747E",
        "accent": "#6750A4",
        "prompt": "#047857",
        "error": "#B3261E",
        "success": "#15803D",
        "warning": "#B45309",
    },
}

# Palettes cycled by the disco command
DISCO_PALETTES: tuple[dict[str, str], ...] = (
    {"text": "#FF00FF", "accent": "#00FFFF", "prompt": "#FFFF00"},
    {"text": "#00FF7F", "accent": "#FF1493", "prompt": "#1E90FF"},
    {"text": "#FFA500", "accent": "#7FFF00", "prompt": "#FF4500"},
    {"text": "#00BFFF", "accent": "#FFD700", "prompt": "#ADFF2F"},
    {"text": "#FF69B4", "accent": "#40E0D0", "prompt": "#BA55D3"},
)


class TerminalTheme:
    """In-process ThemeEngine backing the terminal renderer."""

    def __init__(self, variant: str = "dark") -> None:
        if variant not in PALETTES:
            raise ValueError(f"Unknown theme variant: {variant!r}")
        self._variant = variant
        self._preview: dict[str, str] | None = None
        self._lock = threading.Lock()

    def get_current_variant(self) -> str:
        return self._variant

    def set_variant(self, variant: str) -> None:
        if variant not in PALETTES:
            raise ValueError(f"Unknown theme variant: {variant!r}")
        with self._lock:
            self._variant = variant
            self._preview = None
        logger.debug("Theme variant set to %s", variant)

    def preview_variant(self, colors: Mapping[str, str] | None) -> None:
        with self._lock:
            self._preview = dict(colors) if colors else None

    @property
    def palette(self) -> dict[str, str]:
        """Active palette: variant colours overlaid with any preview."""
        with self._lock:
            merged = dict(PALETTES[self._variant])
            if self._preview:
                merged.update(self._preview)
            return merged
