#!/usr/bin/env python3
# navshell/__main__.py
from __future__ import annotations
"""
`python -m navshell` / `navshell`: boot, then run the interactive prompt.
"""

import argparse
import sys
from typing import Optional, Sequence

from navshell import __version__
from navshell.boot import boot_sequence
from navshell.errors import ConfigError
from navshell.interface import make_cli
from navshell.ui import colorize, print_line


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="navshell", description="Navigate a website like a shell.")
    parser.add_argument("--quiet", action="store_true", help="hide the boot status lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    def announce(effect: str) -> None:
        print_line(colorize(f"*** {effect}! ***", "magenta", "bold"))

    try:
        state = boot_sequence(quiet=args.quiet, announce=announce)
    except ConfigError as exc:
        print_line(f"navshell: configuration error: {exc}", file=sys.stderr)
        return 2

    theme = state.services.theme
    try:
        with make_cli(state.interpreter, state.session, lambda: theme.palette) as cli:
            cli.run()
    finally:
        state.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
