# bounce_client/scheduler.py
import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# returning False from the callback stops the scheduler
TickCallback = Callable[[], Optional[bool]]


class TickScheduler:
    """
    Fixed-interval tick thread.

    - one callback at a time, never reentrant
    - overdue ticks are skipped, not queued
    - stop() is synchronous: once it returns no callback is running or will run
    """

    def __init__(self, interval: float, clock: Callable[[], float] = time.monotonic):
        if interval <= 0:
            raise ValueError(f"tick interval must be positive, got {interval!r}")
        self.interval = float(interval)
        self._clock = clock

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._lock = threading.Lock()

        self.ticks: int = 0
        self.skipped: int = 0

    @property
    def running(self) -> bool:
        t = self._thread
        return t is not None and t.is_alive() and not self._stop_event.is_set()

    def start(self, callback: TickCallback) -> bool:
        with self._lock:
            if self.running:
                return False
            self._stop_event = threading.Event()
            self.ticks = 0
            self.skipped = 0
            self._thread = threading.Thread(
                target=self._run, args=(callback, self._stop_event), name="tick-scheduler", daemon=True
            )
            self._thread.start()
        logger.debug("tick scheduler started (interval=%.3fs)", self.interval)
        return True

    def stop(self):
        with self._lock:
            thread = self._thread
            self._stop_event.set()
            self._thread = None

        if thread is None:
            return
        # a callback may stop its own scheduler; joining itself would deadlock
        if thread is not threading.current_thread():
            thread.join()

    def _run(self, callback: TickCallback, stop_event: threading.Event):
        next_due = self._clock() + self.interval
        while not stop_event.is_set():
            delay = next_due - self._clock()
            if delay > 0 and stop_event.wait(delay):
                break

            try:
                keep_going = callback()
            except Exception:
                logger.exception("tick callback failed; stopping scheduler")
                stop_event.set()
                break

            self.ticks += 1
            if keep_going is False:
                stop_event.set()
                break

            next_due += self.interval
            now = self._clock()
            if now > next_due:
                missed = int((now - next_due) // self.interval) + 1
                next_due += missed * self.interval
                self.skipped += missed
                logger.debug("tick overran, skipping %d tick(s)", missed)

        logger.debug("tick scheduler stopped after %d ticks (%d skipped)", self.ticks, self.skipped)
