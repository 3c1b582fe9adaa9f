# navshell/plugins/contact/__init__.py
from __future__ import annotations

"""
Contact details of the site owner: resume, email, social links.
"""

CATEGORY_DESCRIPTION = "Get in touch with the site owner."
