import asyncio
import logging
import threading
from typing import Callable, Optional

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

QUESTION_TIME_LIMIT = 30
TICK_INTERVAL = 1
WARNING_THRESHOLD = 10


class ThreadScheduler:
    """
    ``call_later`` backed by daemon timer threads, for callers that run
    without an event loop. The returned ``threading.Timer`` has ``cancel()``.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class Countdown:
    """
    Cancellable per-question countdown driven by an event-loop scheduler.

    The scheduler only needs ``call_later(delay, callback)`` returning a handle
    with ``cancel()``, which is what an asyncio loop provides; without a
    running loop a ``ThreadScheduler`` is used. Every ``start``
    is tagged with a generation number; a tick carrying a generation other
    than the current one is dropped, so a timer that fires after the question
    moved on never touches the new question.
    """

    def __init__(
        self,
        on_tick: Callable[[int, int], None],
        on_expire: Callable[[int], None],
        scheduler=None,
        duration: int = QUESTION_TIME_LIMIT,
        interval: float = TICK_INTERVAL,
    ):
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._scheduler = scheduler
        self.duration = duration
        self.interval = interval
        self.remaining = duration
        self._generation: Optional[int] = None
        self._handle = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def is_warning(self) -> bool:
        return self.remaining <= WARNING_THRESHOLD

    def _get_scheduler(self):
        if self._scheduler is None:
            try:
                self._scheduler = asyncio.get_running_loop()
            except RuntimeError:
                # No loop to drive the ticks from synchronous code
                self._scheduler = ThreadScheduler()
        return self._scheduler

    def start(self, generation: int) -> None:
        """Reset to the full duration and start ticking for ``generation``"""
        self.cancel()
        self._generation = generation
        self.remaining = self.duration
        self._schedule(generation)

    def _schedule(self, generation: int) -> None:
        self._handle = self._get_scheduler().call_later(
            self.interval, lambda: self._tick(generation)
        )

    def _tick(self, generation: int) -> None:
        if generation != self._generation or self._handle is None:
            logger.debug(f"Ignoring stale countdown tick for generation {generation}")
            return

        self._handle = None
        self.remaining = max(0, self.remaining - 1)
        self._on_tick(generation, self.remaining)

        if self.remaining <= 0:
            self._generation = None
            self._on_expire(generation)
        elif generation == self._generation:
            self._schedule(generation)

    def cancel(self) -> None:
        """Stop the countdown; calling it again is a no-op"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation = None
