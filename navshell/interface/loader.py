#!/usr/bin/env python3
# navshell/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports `<category>/entrypoint.py` under a given package (default:
  'navshell.plugins'); importing runs the `@command` registrations.
- Derives categories from module paths if not explicitly set.
- Collects category descriptions from either CATEGORY_DESCRIPTION or module docstring.
- Builds the per-shell registry: bundled commands, then one shortcut per site section.
"""

import importlib
import pkgutil
from typing import Sequence

from navshell.commands import REGISTRY, Command, CommandRegistry, CommandResult
from navshell.errors import DuplicateCommandError

SECTION_CATEGORY = "sections"
DEFAULT_PLUGIN_PACKAGE = "navshell.plugins"


def load_commands(commands_package: str = DEFAULT_PLUGIN_PACKAGE,
                  registry: CommandRegistry | None = None) -> int:
    """
    Import every category entrypoint under the given package and return how
    many were imported.

    Layout: plugins/<category>/entrypoint.py -> import plugins.<category>.entrypoint

    Categories are imported in name order, which fixes the registration order
    of the bundled commands. Importing twice is harmless.
    """
    target = registry or REGISTRY
    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{commands_package}' must be a package (folder) with modules.")

    loaded_count = 0
    categories: set[str] = set()

    for base_path in package_paths:
        for modinfo in sorted(pkgutil.iter_modules([base_path]), key=lambda m: m.name):
            if modinfo.name.startswith("_") or not modinfo.ispkg:
                continue
            categories.add(modinfo.name)
            importlib.import_module(f"{commands_package}.{modinfo.name}.entrypoint")
            loaded_count += 1

    _assign_categories_from_modules(commands_package, target)
    _collect_category_descriptions(commands_package, categories, target)
    return loaded_count


def _assign_categories_from_modules(commands_package: str, registry: CommandRegistry) -> None:
    """
    Derive category from first subpackage segment (e.g. 'contact.entrypoint')
    if not explicitly set (default 'general').
    """
    prefix = f"{commands_package}."
    for command_obj in registry.all():
        if command_obj.category != "general" or not command_obj.module.startswith(prefix):
            continue
        segments = command_obj.module[len(prefix):].split(".")
        if len(segments) >= 2:
            command_obj.category = segments[0]


def _collect_category_descriptions(commands_package: str, subpackages: set[str],
                                   registry: CommandRegistry) -> None:
    """
    Category description is taken from:
      1) <package>.<category>.CATEGORY_DESCRIPTION (string), or
      2) <package>.<category> module docstring (__doc__), else "".
    """
    for category in subpackages:
        module = importlib.import_module(f"{commands_package}.{category}")

        description_text = ""
        value = getattr(module, "CATEGORY_DESCRIPTION", None)
        if isinstance(value, str):
            description_text = value.strip()
        elif isinstance(getattr(module, "__doc__", None), str):
            description_text = (module.__doc__ or "").strip()

        registry.set_category_description(category, description_text)


# ---------------- Section shortcuts ----------------

def make_section_command(section: str) -> Command:
    """`<section>` behaves exactly like `cd /<section>`."""

    def _shortcut(ctx, argument: str) -> CommandResult:
        cd = ctx.registry.get("cd")
        if cd is None:
            raise RuntimeError("cd is not registered")
        return cd.invoke(ctx, f"/{section}")

    return Command(
        name=section.lower(),
        description=f"Go to /{section}",
        example=section.lower(),
        callback=_shortcut,
        module=__name__,
        category=SECTION_CATEGORY,
        needs_index=True,
    )


def build_registry(sections: Sequence[str], source: CommandRegistry | None = None) -> CommandRegistry:
    """
    Fresh registry for one shell: a copy of `source` (the bundled commands)
    followed by the section shortcuts in configured order.

    A section that collides with a command name raises DuplicateCommandError.
    """
    source = source or REGISTRY
    registry = CommandRegistry()
    for command_obj in source.all():
        registry.register(command_obj)
    for category in source.categories():
        registry.set_category_description(category, source.get_category_description(category))
    registry.set_category_description(SECTION_CATEGORY, "Jump straight to a site section")

    for section in sections:
        if section.lower() in registry:
            raise DuplicateCommandError(f"Section '{section}' collides with a command name.")
        registry.register(make_section_command(section))
    return registry
