#!/usr/bin/env python3
# navshell/services/system.py
from __future__ import annotations

"""
Host-facing adapters: routing, opening URLs, visual effects, reload.
"""

import logging
import os
import sys
import webbrowser
from typing import Callable

from navshell.services.base import UrlOpener

logger = logging.getLogger(__name__)


class BrowserOpener:
    """Open URLs in the user's browser; failures are logged, never raised."""

    def open(self, url: str) -> None:
        try:
            if not webbrowser.open(url, new=2):
                logger.warning("No browser available to open %s", url)
        except webbrowser.Error as exc:
            logger.warning("Opening %s failed: %s", url, exc)


class ConsoleRouter:
    """
    Router for the terminal host.

    The route is always logged; when `site_url` is set and `open_browser` is
    true the page is also opened in the browser.
    """

    def __init__(self, site_url: str = "", *, open_browser: bool = False,
                 opener: UrlOpener | None = None) -> None:
        self.site_url = site_url.rstrip("/")
        self.open_browser = open_browser
        self.opener = opener or BrowserOpener()
        self.current_path = "/"

    def navigate(self, path: str) -> None:
        self.current_path = path
        logger.info("navigate -> %s", path)
        if self.open_browser and self.site_url:
            self.opener.open(f"{self.site_url}{path}")


class ConsoleEffects:
    """Visual effects collaborator; the terminal host can only announce them."""

    def __init__(self, announce: Callable[[str], None] | None = None) -> None:
        self._announce = announce

    def trigger(self, name: str) -> None:
        logger.debug("effect triggered: %s", name)
        if self._announce is not None:
            self._announce(name)


class ProcessReloader:
    """Restart the running interpreter process in place."""

    def __init__(self, argv: list[str] | None = None) -> None:
        self.argv = argv if argv is not None else [sys.executable, *sys.argv]

    def reload_application(self) -> None:
        logger.info("Reloading: %s", " ".join(self.argv))
        sys.stdout.flush()
        sys.stderr.flush()
        os.execv(self.argv[0], self.argv)
