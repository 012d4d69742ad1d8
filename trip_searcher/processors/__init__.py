"""Payload decoding and the error events it reports."""

from .errors import (
    ContentError,
    ErrorObserver,
    FetchFailed,
    ItemSkipped,
    ManifestLoadFailed,
    StructuralParseFailure,
)
from .parsing import ParseOutcome, parse_content, parse_content_detailed

__all__ = [
    "ContentError",
    "ErrorObserver",
    "FetchFailed",
    "ItemSkipped",
    "ManifestLoadFailed",
    "StructuralParseFailure",
    "ParseOutcome",
    "parse_content",
    "parse_content_detailed",
]
