from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class FetchErrorKind(str, Enum):
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK_FAILURE = "network_failure"


@dataclass(frozen=True, slots=True)
class FetchOk:
    text: str


@dataclass(frozen=True, slots=True)
class FetchError:
    kind: FetchErrorKind
    status_code: Optional[int] = None
    detail: str = ""

    def describe(self) -> str:
        if self.kind is FetchErrorKind.HTTP_STATUS:
            return f"HTTP {self.status_code}"
        return f"{self.kind.value}: {self.detail}" if self.detail else self.kind.value


FetchResult = Union[FetchOk, FetchError]
