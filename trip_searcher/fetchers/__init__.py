"""Content fetching layer for the remote content endpoint."""

from .http import DEFAULT_CONNECT_TIMEOUT_MS, DEFAULT_READ_TIMEOUT_MS, fetch_content

__all__ = ["fetch_content", "DEFAULT_CONNECT_TIMEOUT_MS", "DEFAULT_READ_TIMEOUT_MS"]
