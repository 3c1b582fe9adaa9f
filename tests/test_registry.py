import pytest

from navshell.commands import Command, CommandRegistry, CommandResult, Output, command
from navshell.errors import DuplicateCommandError, RegistryFrozenError
from navshell.interface import build_registry


def _noop(ctx, argument):
    return CommandResult(Output.none())


def test_register_and_lookup_case_insensitive():
    registry = CommandRegistry()
    registry.register(Command("theme", "", "", _noop, aliases=["colours"]))

    assert registry.get("THEME").name == "theme"
    assert registry.get("Colours").name == "theme"
    assert registry.get("nope") is None
    assert "theme" in registry
    assert len(registry) == 1


def test_duplicates_rejected():
    registry = CommandRegistry()
    registry.register(Command("ls", "", "", _noop))

    with pytest.raises(DuplicateCommandError):
        registry.register(Command("LS", "", "", _noop))
    with pytest.raises(DuplicateCommandError):
        registry.register(Command("dir", "", "", _noop, aliases=["ls"]))


def test_frozen_registry_rejects_registration():
    registry = CommandRegistry()
    registry.freeze()
    with pytest.raises(RegistryFrozenError):
        registry.register(Command("ls", "", "", _noop))


def test_names_keep_registration_order_aliases_last():
    registry = CommandRegistry()
    registry.register(Command("b", "", "", _noop, aliases=["bee"]))
    registry.register(Command("a", "", "", _noop))
    assert registry.names() == ["b", "a", "bee"]


def test_decorator_registers_into_given_registry():
    registry = CommandRegistry()

    @command(description="Say hi.", example="say-hi", registry=registry)
    def say_hi(ctx, argument):
        return CommandResult(Output.text("hi"))

    registered = registry.get("say-hi")
    assert registered.description == "Say hi."
    assert registered.module == __name__
    assert registered.category == "general"


def test_bundled_commands_load_in_category_order(plugin_registry):
    names = plugin_registry.names()
    for expected in ("cd", "ls", "pwd", "whoami", "date", "echo", "history",
                     "resume", "email", "socials", "theme", "reboot", "ascii", "disco",
                     "help", "clear", "exit"):
        assert expected in names
    assert names.index("theme") < names.index("help") < names.index("cd")
    assert plugin_registry.get("cd").needs_index
    assert plugin_registry.get("cd").category == "navigation"
    assert plugin_registry.get_category_description("contact")


def test_build_registry_appends_sections(plugin_registry):
    registry = build_registry(["about-me", "projects"], plugin_registry)

    assert registry.names()[-2:] == ["about-me", "projects"]
    assert registry.get("projects").category == "sections"
    assert not plugin_registry.frozen
    assert "projects" not in plugin_registry


def test_build_registry_rejects_section_named_like_command(plugin_registry):
    with pytest.raises(DuplicateCommandError):
        build_registry(["ls"], plugin_registry)
