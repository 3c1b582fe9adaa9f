#!/usr/bin/env python3
# navshell/errors.py
from __future__ import annotations

"""
Exception hierarchy for navshell.

Nothing here is fatal: every error is caught at a boundary (dispatcher,
collaborator adapter, boot step) and turned into output or a log line.
"""


class NavshellError(Exception):
    """Base class for all navshell errors."""


class ConfigError(NavshellError, ValueError):
    """Raised when a configuration value fails validation."""


class RecordIndexError(NavshellError):
    """Raised by record index adapters when titled records cannot be fetched."""


class RegistryError(NavshellError):
    """Base class for command registry errors."""


class DuplicateCommandError(RegistryError, ValueError):
    """Raised when a command name or alias is registered twice."""


class RegistryFrozenError(RegistryError):
    """Raised when registering into a registry an interpreter already owns."""
