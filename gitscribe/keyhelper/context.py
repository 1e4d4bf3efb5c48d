"""Deadline and cancellation carrier for API key helper calls."""

import threading
import time
from collections.abc import Callable
from typing import Optional


class HelperContext:
    """Carries an optional deadline and a cancellation flag.

    A context can be shared with another thread, which may call cancel()
    to stop a running helper early. Cancellation is reported to the caller
    the same way as a reached deadline.

    Example:
        ctx = HelperContext(timeout=5)
        key = resolve_api_key("op read op://vault/openai/key", ctx=ctx)
    """

    def __init__(self, timeout: Optional[float] = None):
        self._timeout = timeout
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []
        self._lock = threading.Lock()

    @property
    def timeout(self) -> Optional[float]:
        """The timeout this context was created with, in seconds."""
        return self._timeout

    @property
    def has_deadline(self) -> bool:
        return self._deadline is not None

    @property
    def cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._cancelled

    @property
    def expired(self) -> bool:
        """True if the context was cancelled or its deadline has passed."""
        if self._cancelled:
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def cancel(self) -> None:
        """Cancel the context and run registered callbacks once."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback to run when the context is cancelled.

        If the context is already cancelled the callback runs immediately.

        Returns:
            A function that unregisters the callback.
        """
        with self._lock:
            already_cancelled = self._cancelled
            if not already_cancelled:
                self._callbacks.append(callback)
        if already_cancelled:
            callback()

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._callbacks:
                    self._callbacks.remove(callback)

        return unsubscribe
