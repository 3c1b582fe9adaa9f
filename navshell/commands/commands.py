#!/usr/bin/env python3
# navshell/commands/commands.py
from __future__ import annotations

"""
Command registry and decorator utilities.

This module provides:
- CommandRegistry: in-memory registry of commands and aliases.
- command: decorator to register functions as commands with metadata.

The registry keeps registration order: it is the order the suggestion engine
walks when it offers the first matching command name.
"""

from typing import Callable, Dict, Optional

from navshell.commands.command_types import Command, CommandCallback
from navshell.errors import DuplicateCommandError, RegistryFrozenError


class CommandRegistry:
    """Holds all command definitions and provides lookup utilities."""

    def __init__(self) -> None:
        # Primary name -> Command
        self._commands_by_name: Dict[str, Command] = {}
        # Alias name -> primary name
        self._alias_to_primary: Dict[str, str] = {}
        # Category -> description text
        self._category_descriptions: Dict[str, str] = {}
        self._frozen = False

    # ---------------- Registration ----------------

    def register(self, command_obj: Command) -> None:
        """Register a command and its aliases, ensuring no collisions."""
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{command_obj.name}': registry is frozen.")

        primary_key = command_obj.name.lower()

        if primary_key in self._commands_by_name or primary_key in self._alias_to_primary:
            raise DuplicateCommandError(
                f"Command '{command_obj.name}' already registered.")

        self._commands_by_name[primary_key] = command_obj

        # Register alias mappings pointing to the primary name
        for alias in command_obj.aliases:
            alias_key = alias.lower()
            if alias_key in self._commands_by_name or alias_key in self._alias_to_primary:
                raise DuplicateCommandError(
                    f"Alias '{alias}' for '{command_obj.name}' collides with an existing name."
                )
            self._alias_to_primary[alias_key] = primary_key

    def freeze(self) -> None:
        """Reject any further registration. Idempotent."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[Command]:
        """Return the command by primary name or alias, or None if not found."""
        key = name.lower()
        if key in self._commands_by_name:
            return self._commands_by_name[key]
        if key in self._alias_to_primary:
            return self._commands_by_name[self._alias_to_primary[key]]
        return None

    def all(self) -> list[Command]:
        """Return only primary commands (avoid duplicates in UIs)."""
        return list(self._commands_by_name.values())

    def names(self) -> list[str]:
        """Return all primary names then aliases, in registration order."""
        return [*self._commands_by_name.keys(), *self._alias_to_primary.keys()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self._commands_by_name)

    # ---------------- Categories ----------------

    def categories(self) -> dict[str, list[Command]]:
        """Group commands by category for help output."""
        grouped: dict[str, list[Command]] = {}
        for cmd in self._commands_by_name.values():
            grouped.setdefault(cmd.category, []).append(cmd)
        return grouped

    def set_category_description(self, category: str, description: str) -> None:
        """Set display text for a category in help menus."""
        self._category_descriptions[category] = description.strip()

    def get_category_description(self, category: str) -> str:
        """Return display text for a category, or an empty string."""
        return self._category_descriptions.get(category, "")


# Registry the bundled plugins register into
REGISTRY = CommandRegistry()


def command(
    *,
    name: str | None = None,
    description: str | None = None,
    example: str | None = None,
    category: str | None = None,
    aliases: list[str] | None = None,
    needs_index: bool = False,
    registry: CommandRegistry | None = None,
) -> Callable[[CommandCallback], CommandCallback]:
    """
    Decorator to register a function as a shell command with metadata.

    - Function name is transformed from snake_case to kebab-case for `name` if not provided.
    - `registry` defaults to the shared REGISTRY.
    """

    def wrapper(func: CommandCallback) -> CommandCallback:
        command_obj = Command(
            name=(name or func.__name__).replace("_", "-"),  # type: ignore[attr-defined]
            description=(description or (func.__doc__ or "")).strip(),
            example=example or "",
            callback=func,
            category=category or "general",
            aliases=aliases or [],
            needs_index=needs_index,
        )
        command_obj.module = func.__module__  # type: ignore[attr-defined]
        (registry or REGISTRY).register(command_obj)
        return func

    return wrapper
