"""Command-line entrypoint for the Trip Searcher content viewer.

Flow:
1) load configuration
2) read the bundled asset manifest
3) fetch and render remote content, optionally re-fetching on demand
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from .output import ConsoleRenderer
from .store import ContentStore
from .utils.config_loader import ConfigError, load_app_config, validate_endpoint
from .utils.logging import configure_logging, get_logger

logger = get_logger("ts.main")

DEFAULT_CONFIG_PATH = "config/viewer.yaml"


def resolve_config_path(explicit: Optional[str]) -> Optional[Path]:
    """Use an explicit path as given; otherwise the bundled file, if it exists."""
    if explicit:
        return Path(explicit)
    default = Path(DEFAULT_CONFIG_PATH)
    return default if default.exists() else None


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Trip Searcher – fetch and display slides and stories")
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to a YAML configuration file (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument(
        "--endpoint",
        default=None,
        help="Override the content endpoint URL",
    )
    parser.add_argument(
        "--manifest",
        default=None,
        help="Override the asset manifest path",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Keep running; press Enter to re-fetch content, 'q' to quit",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


async def run_viewer(store: ContentStore, renderer: ConsoleRenderer, *, interactive: bool = False) -> None:
    store.subscribe(renderer)
    await store.refresh()

    while interactive:
        line = await asyncio.to_thread(input, "[Enter] refresh, [q] quit > ")
        if line.strip().lower() == "q":
            break
        await store.refresh()


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        config_path = resolve_config_path(args.config)
        config = load_app_config(config_path)
        if args.endpoint:
            config.endpoint = validate_endpoint(args.endpoint)
    except ConfigError as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1
    if args.manifest:
        config.manifest_path = args.manifest

    logger.info("Using content endpoint %s (config: %s)", config.endpoint, config_path or "defaults")
    store = ContentStore.from_config(config)
    assets = store.load_asset_manifest(config.manifest_path)
    logger.info("Manifest lists %d asset(s)", len(assets))

    try:
        asyncio.run(run_viewer(store, ConsoleRenderer(), interactive=args.interactive))
    except (KeyboardInterrupt, EOFError):
        logger.info("Viewer stopped")
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
