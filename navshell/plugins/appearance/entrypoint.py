# navshell/plugins/appearance/entrypoint.py
from __future__ import annotations

from navshell.commands import CommandResult, Output, Reload, command
from navshell.config import AsciiArt
from navshell.services.theme import DISCO_PALETTES, VARIANTS
from navshell.session import DiscoTask

REBOOT_DELAY_SECONDS = 1.5
DISCO_INTERVAL_SECONDS = 0.15
DISCO_DURATION_SECONDS = 3.0
DISCO_EFFECT = "confetti"

BUILT_IN_ARTS: tuple[AsciiArt, ...] = (
    AsciiArt("cat", r"""
 /\_/\
( o.o )
 > ^ <
""".strip("\n")),
    AsciiArt("coffee", r"""
   ( (
    ) )
  ........
  |      |]
  \      /
   `----'
""".strip("\n")),
    AsciiArt("rocket", r"""
    /\
   /  \
  |    |
  | () |
  |    |
 /|/\/\|\
/_||  ||_\
""".strip("\n")),
    AsciiArt("terminal", r"""
 _____________
| >_          |
|             |
|_____________|
    _|___|_
""".strip("\n")),
)


# ---------- theme ----------
@command(
    name="theme",
    description="Show or switch the colour theme.",
    example="theme dark",
    category="appearance",
)
def theme(ctx, argument: str) -> CommandResult:
    engine = ctx.services.theme
    if not argument:
        return CommandResult(Output.text(f"Current theme: {engine.get_current_variant()}"))
    variant = argument.lower()
    if variant not in VARIANTS:
        return CommandResult(Output.error(
            f"theme: unknown theme '{argument}'. Use one of: {', '.join(VARIANTS)}"))
    engine.set_variant(variant)
    return CommandResult(Output.success(f"Theme set to {variant}"))


# ---------- ascii ----------
@command(
    name="ascii",
    description="Show a random piece of ASCII art.",
    example="ascii",
    category="appearance",
)
def ascii_(ctx, argument: str) -> CommandResult:
    arts = [*BUILT_IN_ARTS, *ctx.display.ascii_arts]
    return CommandResult(Output.ascii(ctx.rng.choice(arts).art))


# ---------- disco ----------
@command(
    name="disco",
    description="Party mode for a few seconds.",
    example="disco",
    category="appearance",
)
def disco(ctx, argument: str) -> CommandResult:
    session = ctx.session
    task = DiscoTask(
        session.scheduler,
        ctx.services.theme,
        ctx.services.effects,
        ctx.services.disco_palettes or DISCO_PALETTES,
        interval=DISCO_INTERVAL_SECONDS,
        duration=DISCO_DURATION_SECONDS,
        effect_name=DISCO_EFFECT,
        rng=ctx.rng,
        on_finish=session.release_task,
    )
    session.start_task(task)
    task.start()
    return CommandResult(Output.success("Disco mode on!"))


# ---------- reboot ----------
@command(
    name="reboot",
    description="Restart the terminal.",
    example="reboot",
    category="appearance",
)
def reboot(ctx, argument: str) -> CommandResult:
    return CommandResult(Output.warning("Rebooting..."), effects=(Reload(REBOOT_DELAY_SECONDS),))
