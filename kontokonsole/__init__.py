"""Kontokonsole package entry.

This lightweight package provides a stable module entrypoint
(python -m kontokonsole) while keeping the top-level packages (app/, core/,
domain/, services/, ...) as they are.
"""

from kontokonsole.version import __version__  # single source of truth

__all__ = ["__version__"]
