#!/usr/bin/env python3
# navshell/fs/__init__.py
from __future__ import annotations

"""
Virtual filesystem: the site's sections as directories.
"""

from .directory import (
    DirectoryEntry,
    DirectoryModel,
    DynamicDirectory,
    EntryKind,
    IndexState,
    PathSegment,
    Resolution,
    ResolutionStatus,
    WorkingDirectory,
)

__all__ = [
    "DirectoryEntry",
    "DirectoryModel",
    "DynamicDirectory",
    "EntryKind",
    "IndexState",
    "PathSegment",
    "Resolution",
    "ResolutionStatus",
    "WorkingDirectory",
]
