"""
Cooperative cancellation token shared by the crawl loop and in-flight requests.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TypeVar

from app.scraping.errors import CancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationToken:
    """
    One-shot cancellation signal.

    Callbacks registered with `on_cancel` run once, on the thread that calls
    `cancel()`. A callback registered after cancellation runs immediately.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: dict[int, Callable[[], None]] = {}
        self._next_handle = 0

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> bool:
        """
        Set the signal. Returns False when it was already set.
        """

        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()

        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Cancellation callback failed")
        return True

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register `callback` and return a function that unregisters it.
        """

        with self._lock:
            if not self._event.is_set():
                handle = self._next_handle
                self._next_handle += 1
                self._callbacks[handle] = callback

                def _unregister() -> None:
                    with self._lock:
                        self._callbacks.pop(handle, None)

                return _unregister

        callback()
        return lambda: None

    def wait(self, timeout: float) -> bool:
        """
        Block up to `timeout` seconds; True if cancelled meanwhile.
        """

        return self._event.wait(timeout=max(0.0, timeout))

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError("Run was cancelled")


def call_cancellable(
    func: Callable[[], T],
    *,
    token: CancellationToken | None,
    on_abandon: Callable[[T], None] | None = None,
) -> T:
    """
    Run the blocking `func` so that cancelling `token` ends the wait at once.

    The call runs on a helper thread. When the token fires first the caller
    gets `CancelledError` immediately; the helper finishes in the background
    and `on_abandon` receives its late result.
    """

    if token is None:
        return func()
    token.raise_if_cancelled()

    wake = threading.Event()
    lock = threading.Lock()
    outcome: dict[str, object] = {}

    def _target() -> None:
        result: T | None = None
        error: BaseException | None = None
        try:
            result = func()
        except BaseException as exc:
            error = exc
        with lock:
            abandoned = bool(outcome.get("abandoned"))
            outcome["done"] = True
            outcome["result"] = result
            outcome["error"] = error
        wake.set()
        if abandoned and result is not None and on_abandon is not None:
            try:
                on_abandon(result)
            except Exception:
                logger.exception("Abandoned request cleanup failed")

    unregister = token.on_cancel(wake.set)
    worker = threading.Thread(target=_target, name="crawl-request", daemon=True)
    worker.start()
    try:
        wake.wait()
    finally:
        unregister()

    with lock:
        if not outcome.get("done"):
            outcome["abandoned"] = True
            raise CancelledError("Request was cancelled while in flight")
        error = outcome["error"]
        result = outcome["result"]
    if error is not None:
        raise error
    return result  # type: ignore[return-value]
