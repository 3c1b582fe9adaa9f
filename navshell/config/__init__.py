#!/usr/bin/env python3
# navshell/config/__init__.py
from __future__ import annotations

"""
Package for configuration.

Provides:
- Layered loader (defaults → files in CWD → NAVSHELL_* environment).
- AppConfig for interpreter settings and DisplayConfig for the read-only
  display snapshot handlers consult (username, resume, socials, ...).
"""


from .config import (
    DEFAULTS,
    AppConfig,
    AsciiArt,
    DisplayConfig,
    SocialLink,
    build_config,
    load_config,
)

__all__ = [
    "DEFAULTS",
    "AppConfig",
    "AsciiArt",
    "DisplayConfig",
    "SocialLink",
    "build_config",
    "load_config",
]
