from __future__ import annotations

import sys
from typing import Iterable, List, TextIO

from ..models import ContentItem, ContentKind, Snapshot

_KIND_TO_HEADING = {
    ContentKind.SLIDE: "Slide",
    ContentKind.STORY: "Story",
}


def visible_items(items: Iterable[ContentItem]) -> List[ContentItem]:
    return [item for item in items if item.kind in _KIND_TO_HEADING]


def format_item(item: ContentItem) -> str:
    return f"[{_KIND_TO_HEADING[item.kind]}] {item.title}\n{item.body}\n"


def format_snapshot(snapshot: Snapshot) -> str:
    """Render a snapshot as plain text. Unknown blocks are left out."""
    blocks = [format_item(item) for item in visible_items(snapshot.items)]
    status = "Loading..." if snapshot.is_loading else f"{len(blocks)} item(s)"
    body = "\n".join(blocks) if blocks else "(no content)\n"
    return f"=== Trip Searcher | {status} ===\n\n{body}"


class ConsoleRenderer:
    """Render layer for the command-line viewer."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    def render(self, snapshot: Snapshot) -> None:
        self.stream.write(format_snapshot(snapshot))
        self.stream.write("\n")
        self.stream.flush()

    __call__ = render
