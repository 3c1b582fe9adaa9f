# navshell/plugins/contact/entrypoint.py
from __future__ import annotations

import logging

from navshell.commands import CommandResult, OpenUrl, Output, command

logger = logging.getLogger(__name__)

NO_EMAIL_TEXT = "No email address has been published yet."
NO_SOCIALS_TEXT = "No social links have been published yet."


@command(name="resume", description="Open the resume.", example="resume", category="contact")
def resume(ctx, argument: str) -> CommandResult:
    url = ctx.display.resume_url
    if not url:
        return CommandResult(Output.error("Resume not available"))
    return CommandResult(Output.success("Opening resume..."), effects=(OpenUrl(url),))


@command(name="email", description="Copy the contact email to the clipboard.", example="email", category="contact")
def email(ctx, argument: str) -> CommandResult:
    address = ctx.display.email
    if not address:
        return CommandResult(Output.text(NO_EMAIL_TEXT))
    try:
        copied = ctx.services.clipboard.write_text(address)
    except Exception as exc:
        logger.warning("Clipboard write failed: %s", exc)
        copied = False
    if copied:
        return CommandResult(Output.success(f"Copied {address} to clipboard"))
    return CommandResult(Output.text(f"Email: {address}"))


@command(name="socials", description="List social links.", example="socials", category="contact")
def socials(ctx, argument: str) -> CommandResult:
    links = ctx.display.visible_socials()
    if not links:
        return CommandResult(Output.text(NO_SOCIALS_TEXT))
    return CommandResult(Output.listing([f"{link.name}: {link.url}" for link in links]))
