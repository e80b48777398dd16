"""
services/timer.py

Exam countdown with a one-shot forced-submit callback.
Default exam duration: 30 minutes (1800 s).

The countdown is a monotonic deadline. Expiry is delivered either by a single
cancellable task scheduled on the asyncio loop (arm) or by polling (check),
whichever comes first; the callback runs at most once.
"""

import asyncio
import logging
import math
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

EXAM_DURATION_SECONDS = 1800  # 30 min


class ExamTimer:

    def __init__(
        self,
        on_expire: Callable[[], None],
        duration: int = EXAM_DURATION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            on_expire: Called once when the deadline passes while running.
            duration:  Countdown length in seconds.
            clock:     Monotonic clock (seconds).
        """
        if duration <= 0:
            raise ValueError("duration must be positive")
        self.duration = duration
        self._on_expire = on_expire
        self._clock = clock
        self._deadline: Optional[float] = None
        self._frozen: Optional[int] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._expired = False

    # ── state ────────────────────────────────────────────────────────────────

    @property
    def started(self) -> bool:
        return self._deadline is not None

    @property
    def running(self) -> bool:
        return self.started and self._frozen is None

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def scheduled(self) -> bool:
        """True while a call_later task is pending."""
        return self._handle is not None

    @property
    def remaining(self) -> int:
        """Whole seconds left. Frozen once the timer stops."""
        if self._frozen is not None:
            return self._frozen
        if self._deadline is None:
            return self.duration
        return max(0, math.ceil(self._deadline - self._clock()))

    # ── control ──────────────────────────────────────────────────────────────

    def start(self) -> None:
        if self.started:
            raise RuntimeError("timer already started")
        self._deadline = self._clock() + self.duration
        logger.info(f"Timer started ({self.duration}s)")

    def arm(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """
        Schedule the expiry on the event loop.

        Uses the running loop when none is given. Replaces any previously
        scheduled task.
        """
        if not self.running:
            return
        if loop is None:
            loop = asyncio.get_running_loop()
        self._cancel_handle()
        delay = max(0.0, self._deadline - self._clock())
        self._handle = loop.call_later(delay, self._on_deadline)
        self._loop = loop

    def check(self) -> bool:
        """Poll the deadline. Returns True if the timer has expired."""
        if self.running and self._clock() >= self._deadline:
            self._expire()
        return self._expired

    def stop(self) -> None:
        """Freeze the countdown and drop the scheduled task. Idempotent."""
        self._cancel_handle()
        if self.running:
            self._frozen = self.remaining

    # ── internals ────────────────────────────────────────────────────────────

    def _cancel_handle(self) -> None:
        """Cancel the scheduled task. Safe to call from any thread."""
        handle, loop = self._handle, self._loop
        self._handle = None
        self._loop = None
        if handle is None:
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop or loop.is_closed():
            handle.cancel()
        else:
            # off-loop caller (cleanup thread)
            try:
                loop.call_soon_threadsafe(handle.cancel)
            except RuntimeError:
                logger.debug("Loop closed before cancel; scheduled expiry is gone with it")

    def _on_deadline(self) -> None:
        self._handle = None
        self._loop = None
        self._expire()

    def _expire(self) -> None:
        if self._expired or not self.running:
            return
        self._expired = True
        self._frozen = 0
        self._cancel_handle()
        logger.info("Timer expired")
        self._on_expire()
