# navshell/plugins/info/entrypoint.py
from __future__ import annotations

from navshell.commands import Close, CommandResult, Output, command
from navshell.interface.parser import build_usage
from navshell.session import HISTORY_DISPLAY_LIMIT
from navshell.ui import format_columns

DATE_FORMAT = "%a %b %d %Y %H:%M:%S"


def _help_overview(registry) -> list[str]:
    lines: list[str] = []
    for category, commands in registry.categories().items():
        if lines:
            lines.append("")
        description = registry.get_category_description(category)
        lines.append(f"{category}: {description}" if description else category)
        rows = [(cmd.name, cmd.description) for cmd in commands]
        lines.extend(format_columns(rows, indent=2))
    lines.append("")
    lines.append("Type 'help <command>' for usage.")
    return lines


def _help_for(command_obj) -> list[str]:
    lines = [f"{command_obj.name} - {command_obj.description}", f"usage: {build_usage(command_obj)}"]
    if command_obj.aliases:
        lines.append(f"aliases: {', '.join(command_obj.aliases)}")
    return lines


@command(name="help", description="List commands, or show usage for one.", example="help cd", category="info")
def help_(ctx, argument: str) -> CommandResult:
    if not argument:
        return CommandResult(Output.help(_help_overview(ctx.registry)))
    command_obj = ctx.registry.get(argument.split()[0])
    if command_obj is None:
        return CommandResult(Output.error(f"help: no such command: {argument}"))
    return CommandResult(Output.help(_help_for(command_obj)))


@command(name="clear", description="Clear the output panel.", example="clear", category="info")
def clear(ctx, argument: str) -> CommandResult:
    return CommandResult(Output.none())


@command(name="whoami", description="Show who you are.", example="whoami", category="info")
def whoami(ctx, argument: str) -> CommandResult:
    return CommandResult(Output.text(ctx.display.username))


@command(name="date", description="Show the local date and time.", example="date", category="info")
def date(ctx, argument: str) -> CommandResult:
    if not ctx.display.show_date:
        return CommandResult(Output.error("date: disabled"))
    return CommandResult(Output.text(ctx.clock().strftime(DATE_FORMAT)))


@command(name="echo", description="Print the argument back.", example="echo hello world", category="info")
def echo(ctx, argument: str) -> CommandResult:
    return CommandResult(Output.text(argument))


@command(name="history", description="Show recent commands, newest first.", example="history", category="info")
def history(ctx, argument: str) -> CommandResult:
    # The 'history' line itself was already recorded
    lines = ctx.session.recent_history(HISTORY_DISPLAY_LIMIT, skip_last=1)
    return CommandResult(Output.listing(lines))


@command(name="exit", description="Close the terminal.", example="exit", category="info")
def exit_(ctx, argument: str) -> CommandResult:
    return CommandResult(Output.none(), effects=(Close(),))
