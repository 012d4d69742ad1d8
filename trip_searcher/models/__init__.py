"""Typed models used across the application."""

from .content import ContentItem, ContentKind, ContentSequence, Snapshot
from .fetch import FetchError, FetchErrorKind, FetchOk, FetchResult

__all__ = [
    "ContentItem",
    "ContentKind",
    "ContentSequence",
    "Snapshot",
    "FetchError",
    "FetchErrorKind",
    "FetchOk",
    "FetchResult",
]
