"""Single-slot transient notifications.

At most one message is visible. Posting replaces the previous message
immediately, and a message expires ``ttl`` seconds after it was posted.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

DEFAULT_TTL = 3.0


class NotificationKind(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    kind: NotificationKind
    posted_at: float


class Notifier:

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._slot: Notification | None = None

    def success(self, message: str) -> None:
        self._post(message, NotificationKind.SUCCESS)

    def error(self, message: str) -> None:
        self._post(message, NotificationKind.ERROR)

    def current(self) -> Notification | None:
        """Return the visible notification, dropping it once expired."""
        if self._slot is None:
            return None
        if self._clock() - self._slot.posted_at >= self._ttl:
            self._slot = None
        return self._slot

    def dismiss(self) -> None:
        self._slot = None

    def _post(self, message: str, kind: NotificationKind) -> None:
        self._slot = Notification(message=message, kind=kind, posted_at=self._clock())
