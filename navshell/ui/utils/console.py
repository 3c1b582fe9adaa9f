#!/usr/bin/env python3
# navshell/ui/utils/console.py
from __future__ import annotations

import sys
import threading

# Single shared print mutex for all UI output (panel redraws and logging).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print; timer callbacks print from worker threads."""
    stream = file or sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()


def print_block(lines: list[str], *, file=None) -> None:
    """Print several lines under one lock so they never interleave."""
    stream = file or sys.stdout
    with PRINT_MUTEX:
        for line in lines:
            stream.write(f"{line}\n")
        stream.flush()
