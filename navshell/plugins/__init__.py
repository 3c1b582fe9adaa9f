# navshell/plugins/__init__.py
"""Bundled command handlers, one subpackage per help category."""
