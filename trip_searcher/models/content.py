from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class ContentKind(str, Enum):
    SLIDE = "slide"
    STORY = "story"
    UNKNOWN = "unknown"

    @classmethod
    def from_type(cls, value: str) -> "ContentKind":
        """Map a payload ``type`` string to a kind. Matching is case-sensitive."""
        if value == "slide":
            return cls.SLIDE
        if value == "story":
            return cls.STORY
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class ContentItem:
    kind: ContentKind
    title: str
    body: str
    raw_type: Optional[str] = None


ContentSequence = Tuple[ContentItem, ...]


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the store handed to the render layer."""

    items: ContentSequence = ()
    is_loading: bool = False
    last_updated: Optional[datetime] = None
