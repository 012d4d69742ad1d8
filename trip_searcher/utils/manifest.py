from __future__ import annotations

from pathlib import Path
from typing import List


def read_manifest(source: Path | str) -> List[str]:
    """Read a bundled asset manifest: one identifier per line, blanks dropped.

    Raises ``OSError`` or ``UnicodeDecodeError`` on read failure; callers decide
    whether that is fatal.
    """
    text = Path(source).read_text(encoding="utf-8")
    return [line.rstrip() for line in text.splitlines() if line.strip()]
