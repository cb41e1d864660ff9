from __future__ import annotations

import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any


def _wait_on_event(event: threading.Event, timeout_s: float) -> None:
    event.wait(timeout_s)


@dataclass
class RateLimiter:
    """FIFO limiter allowing at most `max_per_window` dispatches per rolling window.

    Callers queue a ticket and block in `acquire()` until a dispatch pass
    releases it. A dispatch pass forgets timestamps older than the window and
    releases queued tickets head-first while the window has room. Tickets left
    in the queue sleep until the oldest timestamp ages out, then run another
    pass. `acquire()` never raises; it only delays.
    """

    max_per_window: int = 3
    window_s: float = 1.0

    _monotonic: Any = field(default=time.monotonic, repr=False)
    _wait: Any = field(default=_wait_on_event, repr=False)

    def __post_init__(self) -> None:
        if self.max_per_window < 1:
            raise ValueError("max_per_window must be >= 1")
        if self.window_s <= 0:
            raise ValueError("window_s must be > 0")
        self._lock = threading.Lock()
        self._queue: deque[threading.Event] = deque()
        self._dispatched: deque[float] = deque()

    def acquire(self) -> None:
        ticket = threading.Event()
        with self._lock:
            self._queue.append(ticket)
            delay = self._dispatch()

        while not ticket.is_set():
            self._wait(ticket, delay)
            with self._lock:
                delay = self._dispatch()

    def pending(self) -> int:
        with self._lock:
            return len(self._queue)

    def _dispatch(self) -> float:
        """Release what the window allows; return seconds until the next pass."""
        now = float(self._monotonic())
        while self._dispatched and now - self._dispatched[0] >= self.window_s:
            self._dispatched.popleft()

        while self._queue and len(self._dispatched) < self.max_per_window:
            self._queue.popleft().set()
            self._dispatched.append(now)

        if not self._queue:
            return 0.0
        return max(self.window_s - (now - self._dispatched[0]), 0.0)
