#!/usr/bin/env python3
# navshell/fs/directory.py
from __future__ import annotations

"""
Virtual directory tree mirroring the site's navigable sections.

Shape:
- Root holds a fixed, ordered list of static sections.
- Exactly the sections registered as dynamic have children; those are fetched
  once from the record index and never invalidated afterwards.
- Nothing deeper than one level below a dynamic section is modelled.
"""

import enum
import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from navshell.services.base import RecordIndex

logger = logging.getLogger(__name__)


class EntryKind(str, enum.Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    name: str
    kind: EntryKind = EntryKind.STATIC
    ident: str | None = None

    def display(self) -> str:
        """Listing form: static sections are marked as directories."""
        return f"{self.name}/" if self.kind is EntryKind.STATIC else self.name


@dataclass(frozen=True, slots=True)
class PathSegment:
    name: str
    ident: str | None = None

    @property
    def route_part(self) -> str:
        return self.ident if self.ident is not None else self.name


@dataclass(frozen=True, slots=True)
class WorkingDirectory:
    """Immutable sequence of path segments; empty means root."""

    segments: tuple[PathSegment, ...] = ()

    @classmethod
    def root(cls) -> "WorkingDirectory":
        return cls()

    @classmethod
    def of(cls, *names: str) -> "WorkingDirectory":
        return cls(tuple(PathSegment(n) for n in names))

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def leaf(self) -> Optional[PathSegment]:
        return self.segments[-1] if self.segments else None

    def names(self) -> list[str]:
        return [s.name for s in self.segments]

    def parent(self) -> "WorkingDirectory":
        """Drop the last segment; root is its own parent."""
        return WorkingDirectory(self.segments[:-1])

    def child(self, segment: PathSegment) -> "WorkingDirectory":
        return WorkingDirectory((*self.segments, segment))

    @property
    def path(self) -> str:
        """Human-readable path built from display names."""
        return "/" + "/".join(self.names())

    @property
    def route(self) -> str:
        """Router path; dynamic segments contribute their identifier."""
        return "/" + "/".join(s.route_part for s in self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return self.path


class IndexState(str, enum.Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class DynamicDirectory:
    """
    A section whose children come from the record index.

    `load()` is idempotent: the first call submits the fetch to the executor,
    every later call returns the same future. A failed fetch settles as an
    empty listing plus `error`, and is not retried.
    """

    def __init__(self, name: str, index: RecordIndex, executor: Executor) -> None:
        self.name = name
        self._index = index
        self._executor = executor
        self._lock = threading.Lock()
        self._future: Future | None = None
        self._state = IndexState.NOT_LOADED
        self._entries: tuple[DirectoryEntry, ...] = ()
        self._error: str | None = None

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def ready(self) -> bool:
        return self._state in (IndexState.LOADED, IndexState.FAILED)

    @property
    def loaded(self) -> bool:
        return self._state is IndexState.LOADED

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def entries(self) -> tuple[DirectoryEntry, ...]:
        return self._entries

    def load(self) -> Future:
        with self._lock:
            if self._future is None:
                self._state = IndexState.LOADING
                logger.debug("Fetching children of '%s'", self.name)
                self._future = self._executor.submit(self._fetch)
            return self._future

    def _fetch(self) -> tuple[DirectoryEntry, ...]:
        try:
            records = self._index.fetch_titled_records()
            entries = tuple(
                DirectoryEntry(r.title, EntryKind.DYNAMIC, str(r.id)) for r in records
            )
        except Exception as exc:
            logger.warning("Record index fetch for '%s' failed: %s", self.name, exc)
            with self._lock:
                self._error = str(exc) or type(exc).__name__
                self._state = IndexState.FAILED
            return ()

        with self._lock:
            self._entries = entries
            self._state = IndexState.LOADED
        logger.debug("Loaded %d entries into '%s'", len(entries), self.name)
        return entries

    def find(self, title: str) -> Optional[DirectoryEntry]:
        """Case-insensitive exact title match."""
        wanted = title.lower()
        for entry in self._entries:
            if entry.name.lower() == wanted:
                return entry
        return None

    def first_with_prefix(self, prefix: str) -> Optional[DirectoryEntry]:
        """First entry whose title starts with `prefix`, ignoring case."""
        wanted = prefix.lower()
        for entry in self._entries:
            if entry.name.lower().startswith(wanted):
                return entry
        return None


class ResolutionStatus(str, enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    NEEDS_INDEX = "needs_index"


@dataclass(frozen=True, slots=True)
class Resolution:
    status: ResolutionStatus
    directory: WorkingDirectory | None = None
    pending: DynamicDirectory | None = field(default=None, compare=False)

    @property
    def found(self) -> bool:
        return self.status is ResolutionStatus.FOUND


_NOT_FOUND = Resolution(ResolutionStatus.NOT_FOUND)


class DirectoryModel:
    """Static root listing plus lazily populated dynamic sections."""

    def __init__(
        self,
        sections: Sequence[str],
        dynamic: Iterable[DynamicDirectory] = (),
    ) -> None:
        self._root = tuple(DirectoryEntry(name) for name in sections)
        self._dynamic: dict[str, DynamicDirectory] = {d.name.lower(): d for d in dynamic}
        unknown = set(self._dynamic) - {e.name.lower() for e in self._root}
        if unknown:
            raise ValueError(f"Dynamic sections missing from root: {sorted(unknown)}")

    # ---------------- Listing ----------------

    def list_root(self) -> list[DirectoryEntry]:
        return list(self._root)

    def root_names(self) -> list[str]:
        return [e.name for e in self._root]

    def dynamic_for(self, name: str) -> Optional[DynamicDirectory]:
        return self._dynamic.get(name.lower())

    def list_children(self, name: str) -> list[DirectoryEntry]:
        """
        Children of a root section. For a dynamic section this kicks off the
        fetch when needed and returns whatever is loaded so far.
        """
        directory = self.dynamic_for(name)
        if directory is None:
            return []
        if not directory.ready:
            directory.load()
        return list(directory.entries)

    def find_static(self, name: str) -> Optional[str]:
        """Canonical root section for `name`, case-insensitive, one leading '/' allowed."""
        if name.startswith("/"):
            name = name[1:]
        wanted = name.lower()
        for entry in self._root:
            if entry.name.lower() == wanted:
                return entry.name
        return None

    def current_dynamic(self, cwd: WorkingDirectory) -> Optional[DynamicDirectory]:
        """The dynamic section when `cwd` is exactly that section's directory."""
        if len(cwd) != 1:
            return None
        return self.dynamic_for(cwd.segments[0].name)

    # ---------------- Resolution ----------------

    def resolve(self, expression: str, cwd: WorkingDirectory) -> Resolution:
        """
        Resolve a `cd` argument against `cwd`.

        Accepted forms: '' / '~' / '/' (root), '..' (parent), a bare name,
        or 'parent/child' where parent is a dynamic root section.
        """
        expr = expression.strip()
        if expr in ("", "~"):
            return Resolution(ResolutionStatus.FOUND, WorkingDirectory.root())
        if expr == "..":
            return Resolution(ResolutionStatus.FOUND, cwd.parent())

        absolute = expr.startswith("/")
        body = expr[1:] if absolute else expr
        if body.endswith("/"):
            body = body[:-1]
        if not body:
            return Resolution(ResolutionStatus.FOUND, WorkingDirectory.root())

        if "/" in body:
            return self._resolve_compound(body)
        return self._resolve_bare(body, cwd, absolute)

    def _resolve_compound(self, body: str) -> Resolution:
        parent_raw, child = body.split("/", 1)
        parent = self.find_static(parent_raw)
        if parent is None:
            return _NOT_FOUND
        directory = self.dynamic_for(parent)
        if directory is None:
            return _NOT_FOUND
        if not directory.ready:
            return Resolution(ResolutionStatus.NEEDS_INDEX, pending=directory)
        entry = directory.find(child)
        if entry is None:
            return _NOT_FOUND
        return Resolution(
            ResolutionStatus.FOUND,
            WorkingDirectory((PathSegment(parent), PathSegment(entry.name, entry.ident))),
        )

    def _resolve_bare(self, name: str, cwd: WorkingDirectory, absolute: bool) -> Resolution:
        directory = None if absolute else self.current_dynamic(cwd)
        if directory is not None:
            if not directory.ready:
                return Resolution(ResolutionStatus.NEEDS_INDEX, pending=directory)
            entry = directory.find(name)
            if entry is not None:
                return Resolution(
                    ResolutionStatus.FOUND,
                    cwd.child(PathSegment(entry.name, entry.ident)),
                )

        static = self.find_static(name)
        if static is not None:
            return Resolution(ResolutionStatus.FOUND, WorkingDirectory.of(static))
        return _NOT_FOUND
