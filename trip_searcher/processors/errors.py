"""Error events raised by the fetch/parse cycle and the channel that carries them.

Nothing here is fatal. Every failure in the content pipeline is recovered
where it happens and surfaced as one of these events on an ``ErrorObserver``,
which also writes it to the log.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List

from ..models import FetchError
from ..utils.logging import get_logger

logger = get_logger("ts.errors")


@dataclass(frozen=True, slots=True)
class ContentError:
    def describe(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, slots=True)
class FetchFailed(ContentError):
    error: FetchError

    def describe(self) -> str:
        return f"Fetch failed ({self.error.describe()})"


@dataclass(frozen=True, slots=True)
class StructuralParseFailure(ContentError):
    reason: str

    def describe(self) -> str:
        return f"Malformed payload: {self.reason}"


@dataclass(frozen=True, slots=True)
class ItemSkipped(ContentError):
    index: int
    reason: str

    def describe(self) -> str:
        return f"Skipped item {self.index}: {self.reason}"


@dataclass(frozen=True, slots=True)
class ManifestLoadFailed(ContentError):
    source: str
    reason: str

    def describe(self) -> str:
        return f"Could not load manifest {self.source}: {self.reason}"


ErrorCallback = Callable[[ContentError], None]


class ErrorObserver:
    """Fan-out channel for ``ContentError`` events with a bounded history."""

    def __init__(self, *, history_size: int = 100) -> None:
        self._callbacks: List[ErrorCallback] = []
        self._history: Deque[ContentError] = deque(maxlen=history_size)

    @property
    def history(self) -> List[ContentError]:
        return list(self._history)

    def subscribe(self, callback: ErrorCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def _unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _unsubscribe

    def report(self, event: ContentError) -> None:
        self._history.append(event)
        logger.warning("%s", event.describe())
        for cb in list(self._callbacks):
            try:
                cb(event)
            except Exception as exc:  # noqa: BLE001 - observer must not break the cycle
                logger.exception("Error observer callback failed: %s", exc)

    def clear(self) -> None:
        self._history.clear()
