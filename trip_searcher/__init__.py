"""Top-level package for the Trip Searcher content viewer.

Fetches a remote JSON document of slide and story blocks, decodes it into
typed content items and keeps the latest result in an observable store for
the render layer.
"""

from .store import ContentStore

__all__ = ["ContentStore"]
