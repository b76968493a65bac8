"""Timer-based coalescing of rapid input events."""

import time
from collections.abc import Callable
from typing import Any


class Debouncer:
    """Run only the last submitted call, once input has been quiet for *delay*.

    Every ``submit`` cancels the pending call and restarts the timer. Nothing
    runs in the background: the owner calls ``poll`` from its event loop (or a
    test advances a fake clock) and the pending call fires once it is due.

    Usage::

        debounce = Debouncer(0.12)
        debounce.submit(controller.set_query, "vec")
        debounce.poll()  # fires only if 120ms passed since the last submit
    """

    def __init__(self, delay: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._delay = delay
        self._clock = clock
        self._pending: tuple[Callable[..., Any], tuple[Any, ...]] | None = None
        self._due: float = 0.0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def due_at(self) -> float | None:
        return self._due if self._pending is not None else None

    def submit(self, fn: Callable[..., Any], *args: Any, now: float | None = None) -> None:
        """Schedule ``fn(*args)``, replacing anything already pending."""
        start = self._clock() if now is None else now
        self._pending = (fn, args)
        self._due = start + self._delay

    def poll(self, now: float | None = None) -> bool:
        """Fire the pending call if its quiet period has elapsed.

        Returns True when a call was made.
        """
        if self._pending is None:
            return False
        current = self._clock() if now is None else now
        if current < self._due:
            return False
        return self.flush()

    def flush(self) -> bool:
        """Fire the pending call immediately."""
        if self._pending is None:
            return False
        fn, args = self._pending
        self._pending = None
        fn(*args)
        return True

    def cancel(self) -> None:
        self._pending = None
