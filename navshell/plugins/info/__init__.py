# navshell/plugins/info/__init__.py
from __future__ import annotations

"""
Session information commands (help, history, whoami, date, ...).
"""

CATEGORY_DESCRIPTION = "About this shell and session."
