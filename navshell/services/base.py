#!/usr/bin/env python3
# navshell/services/base.py
from __future__ import annotations

"""
Boundary protocols for the collaborators the interpreter talks to.

Every call here is in-process. Adapters translate them to whatever the host
actually does (HTTP, subprocess, browser, terminal palette).
"""

from dataclasses import dataclass
from typing import Mapping, Protocol


@dataclass(frozen=True, slots=True)
class TitledRecord:
    id: str
    title: str


class Router(Protocol):
    def navigate(self, path: str) -> None:  # pragma: no cover - protocol
        ...


class RecordIndex(Protocol):
    def fetch_titled_records(self) -> list[TitledRecord]:  # pragma: no cover - protocol
        ...


class Clipboard(Protocol):
    def write_text(self, text: str) -> bool:  # pragma: no cover - protocol
        ...


class ThemeEngine(Protocol):
    def get_current_variant(self) -> str:  # pragma: no cover - protocol
        ...

    def set_variant(self, variant: str) -> None:  # pragma: no cover - protocol
        ...

    def preview_variant(self, colors: Mapping[str, str] | None) -> None:  # pragma: no cover - protocol
        ...


class VisualEffects(Protocol):
    def trigger(self, name: str) -> None:  # pragma: no cover - protocol
        ...


class UrlOpener(Protocol):
    def open(self, url: str) -> None:  # pragma: no cover - protocol
        ...


class Reloader(Protocol):
    def reload_application(self) -> None:  # pragma: no cover - protocol
        ...
