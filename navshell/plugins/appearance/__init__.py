# navshell/plugins/appearance/__init__.py
from __future__ import annotations

"""
Look and feel: theme switching, ASCII art, disco, reboot.
"""

CATEGORY_DESCRIPTION = "Change how the terminal looks (and have some fun)."
