from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional

from .fetchers import DEFAULT_CONNECT_TIMEOUT_MS, DEFAULT_READ_TIMEOUT_MS, fetch_content
from .models import ContentSequence, FetchError, FetchErrorKind, FetchResult, Snapshot
from .processors.errors import ErrorObserver, FetchFailed, ManifestLoadFailed
from .processors.parsing import parse_content_detailed
from .utils.config_loader import AppConfig
from .utils.logging import get_logger
from .utils.manifest import read_manifest

logger = get_logger("ts.store")

Fetcher = Callable[..., FetchResult]
SnapshotListener = Callable[[Snapshot], None]


class ContentStore:
    """Observable holder of the content sequence shown by the render layer.

    State is owned by the event loop that drives ``refresh()``. Only the
    network call leaves the loop (``asyncio.to_thread``); decoding and the
    snapshot swap run on the loop, and the snapshot is always replaced as a
    whole frozen value.

    Overlapping refreshes are neither deduplicated nor cancelled: each runs to
    completion and the last one to finish successfully wins. ``is_loading``
    stays true while any cycle is in flight.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS,
        read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS,
        observer: Optional[ErrorObserver] = None,
        fetcher: Fetcher = fetch_content,
        manifest_reader: Callable[[Path | str], List[str]] = read_manifest,
    ) -> None:
        if connect_timeout_ms <= 0 or read_timeout_ms <= 0:
            raise ValueError("connect_timeout_ms and read_timeout_ms must be > 0")
        self.endpoint = endpoint
        self.connect_timeout_ms = connect_timeout_ms
        self.read_timeout_ms = read_timeout_ms
        self.observer = observer or ErrorObserver()
        self._fetcher = fetcher
        self._manifest_reader = manifest_reader
        self._snapshot = Snapshot()
        self._in_flight = 0
        self._listeners: List[SnapshotListener] = []
        self.assets: List[str] = []

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs) -> "ContentStore":
        return cls(
            config.endpoint,
            connect_timeout_ms=config.connect_timeout_ms,
            read_timeout_ms=config.read_timeout_ms,
            **kwargs,
        )

    # -- reads -------------------------------------------------------------

    def current_snapshot(self) -> Snapshot:
        return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register ``listener`` for every snapshot change; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # -- writes ------------------------------------------------------------

    def load_asset_manifest(self, source: Path | str) -> List[str]:
        try:
            assets = list(self._manifest_reader(source))
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error loading asset manifest %s: %s", source, exc)
            self.observer.report(ManifestLoadFailed(str(source), str(exc)))
            assets = []
        self.assets = assets
        logger.info("Loaded %d asset(s) from %s", len(assets), source)
        return assets

    def refresh(self) -> "asyncio.Task[None]":
        """Schedule one refresh cycle on the running loop and return immediately.

        The returned task may be ignored; it never raises for fetch or parse
        problems.
        """
        return asyncio.get_running_loop().create_task(self.run_refresh())

    async def run_refresh(self) -> None:
        """Run one fetch → parse → replace cycle to completion."""
        self._begin_loading()
        try:
            result = await self._fetch()
            if isinstance(result, FetchError):
                self.observer.report(FetchFailed(result))
                return

            outcome = parse_content_detailed(result.text)
            for skip in outcome.skipped:
                self.observer.report(skip)
            if outcome.failure is not None:
                self.observer.report(outcome.failure)
                return

            self._replace(outcome.items)
        finally:
            self._end_loading()

    async def _fetch(self) -> FetchResult:
        try:
            return await asyncio.to_thread(
                self._fetcher,
                self.endpoint,
                connect_timeout_ms=self.connect_timeout_ms,
                read_timeout_ms=self.read_timeout_ms,
            )
        except Exception as exc:  # noqa: BLE001 - a refresh cycle is never fatal
            logger.exception("Unexpected error fetching %s: %s", self.endpoint, exc)
            return FetchError(FetchErrorKind.NETWORK_FAILURE, detail=str(exc))

    def _begin_loading(self) -> None:
        self._in_flight += 1
        if not self._snapshot.is_loading:
            self._publish(Snapshot(self._snapshot.items, True, self._snapshot.last_updated))

    def _end_loading(self) -> None:
        self._in_flight -= 1
        if self._in_flight == 0 and self._snapshot.is_loading:
            self._publish(Snapshot(self._snapshot.items, False, self._snapshot.last_updated))

    def _replace(self, items: ContentSequence) -> None:
        logger.info("Content updated: %d item(s)", len(items))
        self._publish(Snapshot(items, self._in_flight > 0, datetime.now(timezone.utc)))

    def _publish(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:  # noqa: BLE001 - one bad listener must not starve the rest
                logger.exception("Snapshot listener failed: %s", exc)
