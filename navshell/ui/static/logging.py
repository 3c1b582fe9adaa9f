#!/usr/bin/env python3
# navshell/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from navshell.ui.utils import ANSI, PRINT_MUTEX, enable_windows_vt, strip_ansi


class ColorizingStreamHandler(logging.StreamHandler):
    """
    StreamHandler that colours records by level when the console speaks ANSI
    and writes plain text otherwise. Shares PRINT_MUTEX with the panel output.
    """

    _LEVEL_COLORS = {
        logging.DEBUG: ANSI["bright_black"],
        logging.INFO: "",
        logging.WARNING: ANSI["yellow"],
        logging.ERROR: ANSI["red"],
        logging.CRITICAL: ANSI["magenta"],
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream)
        self._use_ansi = enable_windows_vt()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if self._use_ansi:
                colour = self._LEVEL_COLORS.get(record.levelno, "")
                if colour:
                    message = f"{colour}{message}{ANSI['reset']}"
            else:
                message = strip_ansi(message)
            with PRINT_MUTEX:
                self.stream.write(message + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Formatter that strips ANSI (good for log files)."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def init_logger(
    name: str = "navshell",
    level: Union[int, str] = logging.WARNING,
    logfile: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Initialize a color-safe logger.

    Console: ANSI if available, else plain, on stderr so it never mixes into
    the prompt line. File (optional): rotating, plain text, UTF-8.
    Calling it again only adjusts levels; handlers are not duplicated.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    console_handler = next(
        (h for h in logger.handlers if isinstance(h, ColorizingStreamHandler)), None)
    if console_handler is None:
        console_handler = ColorizingStreamHandler(stream=sys.stderr)
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(console_handler)
    console_handler.setLevel(level)

    if logfile and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        Path(logfile).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            logfile, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            PlainFormatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)

    return logger
