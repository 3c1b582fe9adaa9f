# navshell/plugins/navigation/__init__.py
from __future__ import annotations

"""
Navigation command group:
- cd / ls / pwd over the site's sections
- lazily fetched titles inside the dynamic section
"""

CATEGORY_DESCRIPTION = "Move around the site like a filesystem."
