from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional
from urllib.parse import urlparse

import yaml


class ConfigError(Exception):
    """Raised when the configuration file or environment is invalid."""


DEFAULT_ENDPOINT = "https://test-iws.s3.ir-thr-at1.arvanstorage.ir/iws1402_api/home.json"
DEFAULT_MANIFEST_PATH = "assets/assets.txt"

# YAML key -> environment variable that overrides it
_ENV_OVERRIDES = {
    "endpoint": "TRIP_SEARCHER_ENDPOINT",
    "connect_timeout_ms": "TRIP_SEARCHER_CONNECT_TIMEOUT_MS",
    "read_timeout_ms": "TRIP_SEARCHER_READ_TIMEOUT_MS",
    "manifest_path": "TRIP_SEARCHER_MANIFEST",
}


@dataclass(slots=True)
class AppConfig:
    endpoint: str = DEFAULT_ENDPOINT
    connect_timeout_ms: int = 5000
    read_timeout_ms: int = 5000
    manifest_path: str = DEFAULT_MANIFEST_PATH


def validate_endpoint(value: Any) -> str:
    url_str = str(value).strip()
    parsed = urlparse(url_str)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid endpoint '{url_str}'. Must be absolute http(s) URL.")
    return url_str


def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a positive integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{key}' must be a positive integer, got {value!r}")
    if number <= 0:
        raise ConfigError(f"'{key}' must be > 0, got {number}")
    return number


def _read_yaml(config_path: Path) -> Mapping[str, Any]:
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}")
    if not isinstance(data, dict):
        raise ConfigError("Top-level configuration must be a mapping")
    return data


def load_app_config(
    path: Path | str | None = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Load viewer settings from an optional YAML file plus the environment.

    YAML structure (all keys optional):
      - endpoint: http/https URL of the content document
      - connect_timeout_ms: positive int
      - read_timeout_ms: positive int
      - manifest_path: path to the bundled asset list

    ``TRIP_SEARCHER_*`` environment variables take precedence over the file.
    Unknown keys are ignored for forward compatibility.
    """
    env = os.environ if environ is None else environ
    raw: dict[str, Any] = dict(_read_yaml(Path(path))) if path is not None else {}

    for key, var in _ENV_OVERRIDES.items():
        if env.get(var):
            raw[key] = env[var]

    cfg = AppConfig()
    if raw.get("endpoint") is not None:
        cfg.endpoint = validate_endpoint(raw["endpoint"])
    if raw.get("connect_timeout_ms") is not None:
        cfg.connect_timeout_ms = _positive_int("connect_timeout_ms", raw["connect_timeout_ms"])
    if raw.get("read_timeout_ms") is not None:
        cfg.read_timeout_ms = _positive_int("read_timeout_ms", raw["read_timeout_ms"])
    if raw.get("manifest_path") is not None:
        cfg.manifest_path = str(raw["manifest_path"]).strip()
    return cfg
