#!/usr/bin/env python3
# navshell/services/clipboard.py
from __future__ import annotations

"""
Clipboard adapters.

SystemClipboard shells out to the platform tool:
    macOS  -> pbcopy
    Windows-> clip (UTF-16LE input)
    Linux  -> xclip, then xsel
"""

import logging
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)


class SystemClipboard:
    """Write text to the OS clipboard; returns False when no tool is usable."""

    def __init__(self, timeout_seconds: float = 3.0) -> None:
        self.timeout_seconds = timeout_seconds

    def _command(self) -> tuple[list[str], str] | None:
        if sys.platform.startswith("darwin"):
            return ["pbcopy"], "utf-8"
        if sys.platform.startswith("win"):
            return ["clip"], "utf-16le"
        if shutil.which("xclip"):
            return ["xclip", "-selection", "clipboard"], "utf-8"
        if shutil.which("xsel"):
            return ["xsel", "--clipboard"], "utf-8"
        return None

    def write_text(self, text: str) -> bool:
        found = self._command()
        if found is None:
            logger.warning("No clipboard tool available")
            return False
        argv, encoding = found
        try:
            completed = subprocess.run(
                argv, input=text.encode(encoding), timeout=self.timeout_seconds, check=False)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("Clipboard write via %s failed: %s", argv[0], exc)
            return False
        return completed.returncode == 0


class MemoryClipboard:
    """Keeps the last written text; always succeeds."""

    def __init__(self) -> None:
        self.text: str | None = None

    def write_text(self, text: str) -> bool:
        self.text = text
        return True
