#!/usr/bin/env python3
# navshell/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Orchestrated startup pipeline with Linux-style [ OK ] / [FAILED] lines.
- BootState: Dataclass holding config, logger, interpreter, session and command count.
"""


from .boot import BootState, boot_sequence, build_directory, build_services

__all__ = ["boot_sequence", "BootState", "build_directory", "build_services"]
