"""
Debounced search.

Rapid query changes are collapsed so that only the most recent one is
evaluated. States:

    IDLE -> DEBOUNCED     submit() arms a timer
    DEBOUNCED -> DEBOUNCED  submit() again: old timer cancelled, new one armed
    DEBOUNCED -> EVALUATING timer fires for the current generation
    EVALUATING -> IDLE     evaluation done, nothing newer pending
    EVALUATING -> DEBOUNCED  a newer query arrived meanwhile

Every submit bumps a generation counter. A timer callback whose generation
is no longer current does nothing, and an evaluation can ask whether it is
still current before publishing its result.
"""

import logging
import threading
from enum import StrEnum
from typing import Callable, Optional, Protocol

from ..config import SEARCH_DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)


class SearchState(StrEnum):
    IDLE = "idle"
    DEBOUNCED = "debounced"
    EVALUATING = "evaluating"


class Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]

# evaluate(query, is_current) -> None
Evaluator = Callable[[str, Callable[[], bool]], None]


def thread_timer(interval: float, callback: Callable[[], None]) -> Timer:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


class DebouncedSearch:
    """
    Delays ``evaluate`` until queries stop arriving for ``interval`` seconds.

    The evaluator receives the query and an ``is_current`` callable. It is
    responsible for reading the latest graph at call time; this class only
    decides *when* and *for which query* it runs.
    """

    def __init__(
        self,
        evaluate: Evaluator,
        interval: float = SEARCH_DEBOUNCE_SECONDS,
        timer_factory: Optional[TimerFactory] = None,
    ):
        self.interval = interval
        self._evaluate = evaluate
        self._timer_factory = timer_factory or thread_timer
        self._lock = threading.Lock()
        self._settled = threading.Condition(self._lock)
        self._generation = 0
        self._timer: Optional[Timer] = None
        self._pending: Optional[str] = None
        self._evaluating = False
        self._state = SearchState.IDLE

    @property
    def state(self) -> SearchState:
        with self._lock:
            return self._state

    @property
    def pending_query(self) -> Optional[str]:
        with self._lock:
            return self._pending

    def submit(self, query: str) -> None:
        """Arm (or re-arm) the timer for ``query``."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._timer is not None:
                self._timer.cancel()
            self._pending = query
            self._state = SearchState.DEBOUNCED
            self._timer = self._timer_factory(self.interval, lambda: self._fire(generation))
            self._timer.start()
        logger.debug(f"Search debounced: {query!r} (generation {generation})")

    def flush(self) -> None:
        """Evaluate the pending query now, if there is one."""
        with self._lock:
            if self._timer is None:
                return
            self._timer.cancel()
            generation = self._generation
        self._fire(generation)

    def cancel(self) -> None:
        """Drop the pending query and invalidate any running evaluation."""
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
            self._state = SearchState.EVALUATING if self._evaluating else SearchState.IDLE
            self._settled.notify_all()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until nothing is pending or running. Returns False on timeout."""
        with self._lock:
            return self._settled.wait_for(lambda: self._state == SearchState.IDLE, timeout)

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending is None:
                logger.debug(f"Dropping stale search timer (generation {generation})")
                return
            query = self._pending
            self._pending = None
            self._timer = None
            self._evaluating = True
            self._state = SearchState.EVALUATING

        try:
            self._evaluate(query, lambda: self.is_current(generation))
        finally:
            with self._lock:
                self._evaluating = False
                self._state = SearchState.DEBOUNCED if self._timer is not None else SearchState.IDLE
                self._settled.notify_all()
