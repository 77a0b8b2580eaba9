# storefront/services/debounce.py
import threading
from typing import Any, Callable

from storefront.utils.settings import SEARCH_DEBOUNCE_MS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class Debouncer:
    """
    Keyed cancellable timer: scheduling under a key cancels whatever was
    pending for that key. Only the most recently scheduled call runs.
    """

    def __init__(
        self,
        delay: float = SEARCH_DEBOUNCE_MS / 1000,
        timer_factory: Callable[..., Any] = threading.Timer,
    ):
        self.delay = delay
        self.timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timers: dict[str, Any] = {}
        self._generation: dict[str, int] = {}

    def schedule(self, key: str, fn: Callable[..., Any], *args: Any) -> None:
        with self._lock:
            previous = self._timers.pop(key, None)
            if previous is not None:
                previous.cancel()

            generation = self._generation.get(key, 0) + 1
            self._generation[key] = generation

            timer = self.timer_factory(self.delay, self._fire, args=(key, generation, fn, args))
            timer.daemon = True
            self._timers[key] = timer

        timer.start()

    def _fire(self, key: str, generation: int, fn: Callable[..., Any], args: tuple) -> None:
        with self._lock:
            # the timer may have started before it was cancelled
            if self._generation.get(key) != generation:
                return
            self._timers.pop(key, None)

        try:
            fn(*args)
        except Exception:
            logger.exception(f"Debounced call for {key!r} failed")

    def cancel(self, key: str) -> None:
        with self._lock:
            timer = self._timers.pop(key, None)
            # bump the generation so an already running timer does nothing
            self._generation[key] = self._generation.get(key, 0) + 1
        if timer is not None:
            timer.cancel()

    def cancel_all(self) -> None:
        with self._lock:
            keys = list(self._timers)
        for key in keys:
            self.cancel(key)

    def pending(self, key: str) -> bool:
        with self._lock:
            return key in self._timers
