"""Hands store callbacks over to the thread that owns the session.

Store adapters may receive pushes on a background thread. They post
the callback here and the owning thread runs it from ``run_pending()``,
so session state is only ever touched from one thread, in the order the
store emitted the events.
"""

from __future__ import annotations

import queue
from typing import Any, Callable


class EventDispatcher:

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[tuple[Callable[..., Any], tuple[Any, ...]]] = (
            queue.SimpleQueue()
        )

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        """Queue *callback* for the owning thread. Safe from any thread."""
        self._queue.put((callback, args))

    def run_pending(self) -> int:
        """Run the callbacks queued so far on the calling thread.

        Callbacks posted while these run wait for the next call.
        """
        ran = 0
        for _ in range(self._queue.qsize()):
            try:
                callback, args = self._queue.get_nowait()
            except queue.Empty:
                break
            callback(*args)
            ran += 1
        return ran

    @property
    def has_pending(self) -> bool:
        return not self._queue.empty()
