"""Trailing-edge debounce over a single logical timeline."""

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Delay a callback until calls stop arriving for `wait_seconds`.

    Every call restarts the window and replaces the pending arguments, so
    only the latest call fires. At most one invocation is ever pending.

    Usage:
        debounced = Debouncer(apply_term, wait_seconds=0.3)
        debounced("l"); debounced("le"); debounced("lee")  # apply_term("lee") once
        debounced.cancel()  # on teardown, drops anything still pending
    """

    def __init__(self, callback: Callable[..., Any], wait_seconds: float):
        if wait_seconds < 0:
            raise ValueError("wait_seconds must be >= 0")
        self._callback = callback
        self._wait_seconds = wait_seconds
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: tuple[tuple, dict] | None = None
        self._generation = 0

    def __call__(self, *args, **kwargs) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._generation += 1
            self._timer = threading.Timer(self._wait_seconds, self._expire, args=(self._generation,))
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        """Whether an invocation is waiting for its window to elapse."""
        with self._lock:
            return self._pending is not None

    def _take_pending(self, generation: int | None = None) -> tuple[tuple, dict] | None:
        # Caller must hold the lock
        if generation is not None and generation != self._generation:
            return None
        pending = self._pending
        self._pending = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return pending

    def _expire(self, generation: int) -> None:
        # A timer superseded after it started running must not fire the newer call
        with self._lock:
            pending = self._take_pending(generation)
        self._run(pending)

    def _run(self, pending: tuple[tuple, dict] | None) -> None:
        if pending is None:
            return
        args, kwargs = pending
        self._callback(*args, **kwargs)

    def flush(self) -> None:
        """Run the pending invocation now instead of waiting out the window."""
        with self._lock:
            pending = self._take_pending()
        self._run(pending)

    def cancel(self) -> None:
        """Drop the pending invocation, if any. Safe to call repeatedly."""
        with self._lock:
            pending = self._take_pending()
        if pending is not None:
            logger.debug("Pending debounced call cancelled")
