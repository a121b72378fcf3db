"""Run blocking HTTP calls and deliver their completions on the event stream.

Engine state is only ever touched from completion callbacks, and those are
always invoked on the thread that owns the event stream: immediately for
``InlineScheduler``, through ``post`` or ``drain()`` for ``ThreadedScheduler``.
"""
from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
Post = Callable[[Callable[[], None]], None]


class Scheduler(Protocol):
    def submit(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None: ...


class InlineScheduler:
    """Runs the call and its completion synchronously."""

    def submit(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        try:
            result = work()
        except Exception as exc:
            on_error(exc)
            return
        on_success(result)


class ThreadedScheduler:
    """Runs each call on a daemon thread.

    Completions are handed to ``post`` (for Tk: ``lambda fn: root.after(0, fn)``).
    Without ``post`` they are queued and applied by ``drain()``, which the
    event loop calls from its own thread.
    """

    def __init__(self, post: Post | None = None) -> None:
        self._completions: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._post: Post = post or self._completions.put

    def submit(
        self,
        work: Callable[[], T],
        on_success: Callable[[T], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        def worker() -> None:
            try:
                result = work()
            except Exception as exc:
                error = exc
                self._post(lambda: on_error(error))
                return
            self._post(lambda: on_success(result))

        threading.Thread(target=worker, daemon=True).start()

    def drain(self, timeout: float | None = None) -> int:
        """Apply queued completions; optionally wait up to ``timeout`` for the first one."""
        applied = 0
        block = timeout is not None
        while True:
            try:
                completion = self._completions.get(block=block, timeout=timeout)
            except queue.Empty:
                return applied
            block = False
            completion()
            applied += 1
