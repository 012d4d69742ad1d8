from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional

from ..models import ContentItem, ContentKind, ContentSequence
from ..utils.logging import get_logger
from .errors import ErrorObserver, ItemSkipped, StructuralParseFailure

logger = get_logger("ts.processors.parsing")

REQUIRED_FIELDS = ("type", "title", "content")


@dataclass(frozen=True, slots=True)
class ParseOutcome:
    items: ContentSequence
    skipped: tuple[ItemSkipped, ...] = ()
    failure: Optional[StructuralParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def _failure(reason: str) -> ParseOutcome:
    return ParseOutcome(items=(), failure=StructuralParseFailure(reason))


def _decode_item(index: int, entry: Any) -> ContentItem | ItemSkipped:
    if not isinstance(entry, dict):
        return ItemSkipped(index, f"expected an object, got {type(entry).__name__}")
    for field_name in REQUIRED_FIELDS:
        if field_name not in entry:
            return ItemSkipped(index, f"missing '{field_name}'")
        if not isinstance(entry[field_name], str):
            return ItemSkipped(index, f"'{field_name}' must be a string")
    return ContentItem(
        kind=ContentKind.from_type(entry["type"]),
        title=entry["title"],
        body=entry["content"],
        raw_type=entry["type"],
    )


def parse_content_detailed(raw_text: str) -> ParseOutcome:
    """Decode a ``{"data": [...]}`` payload into a tagged outcome.

    Malformed elements are dropped and listed in ``skipped``; the rest keep
    their payload order. A payload that is not JSON, not an object, or has no
    ``data`` array yields no items and a ``failure``.
    """
    try:
        obj = json.loads(raw_text)
    except (TypeError, ValueError, RecursionError) as exc:
        # RecursionError: nesting deeper than the decoder can follow
        return _failure(f"invalid JSON: {exc}")

    if not isinstance(obj, dict):
        return _failure(f"top-level value must be an object, got {type(obj).__name__}")
    if "data" not in obj:
        return _failure("missing 'data' field")
    data = obj["data"]
    if not isinstance(data, list):
        return _failure(f"'data' must be an array, got {type(data).__name__}")

    items: List[ContentItem] = []
    skipped: List[ItemSkipped] = []
    for index, entry in enumerate(data):
        decoded = _decode_item(index, entry)
        if isinstance(decoded, ItemSkipped):
            skipped.append(decoded)
        else:
            items.append(decoded)

    logger.debug("Parsed %d item(s), skipped %d", len(items), len(skipped))
    return ParseOutcome(items=tuple(items), skipped=tuple(skipped))


def parse_content(raw_text: str, observer: ErrorObserver | None = None) -> ContentSequence:
    """Parse a payload, reporting skips and structural failures to ``observer``."""
    outcome = parse_content_detailed(raw_text)
    if observer is not None:
        if outcome.failure is not None:
            observer.report(outcome.failure)
        for skip in outcome.skipped:
            observer.report(skip)
    else:
        if outcome.failure is not None:
            logger.warning("%s", outcome.failure.describe())
        for skip in outcome.skipped:
            logger.warning("%s", skip.describe())
    return outcome.items
