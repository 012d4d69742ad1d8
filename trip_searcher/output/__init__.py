"""Plain-text render layer used by the command-line viewer."""

from .console import ConsoleRenderer, format_snapshot

__all__ = ["ConsoleRenderer", "format_snapshot"]
