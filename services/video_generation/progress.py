"""
Rotating progress messages shown while a job is running.

The messages are cosmetic and carry no job state. The ticker runs as its own
asyncio task next to the poll loop: the first message goes out immediately,
then one message per interval, cycling through the list.
"""

import asyncio
import logging
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]


class ProgressTicker:
    """
    Emits messages[i % len(messages)] every `interval` seconds until stopped.

    Usage:
        ticker = ProgressTicker(print, LOADING_MESSAGES, interval=5.0)
        ticker.start()
        try:
            ...
        finally:
            ticker.stop()
    """

    def __init__(
        self,
        on_progress: Optional[ProgressCallback],
        messages: Sequence[str],
        interval: float,
    ):
        if interval <= 0:
            raise ValueError("progress interval must be positive")
        self.on_progress = on_progress
        self.messages = list(messages)
        self.interval = interval
        self.emitted = 0
        self._stopped = False
        self._task: Optional[asyncio.Task] = None

    @property
    def enabled(self) -> bool:
        return self.on_progress is not None and bool(self.messages)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        """Emit the first message and schedule the rest."""
        if not self.enabled or self._stopped or self._task is not None:
            return
        self._emit()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self):
        """Stop emitting. No callback fires after this returns."""
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _run(self):
        loop = asyncio.get_running_loop()
        started_at = loop.time()
        tick = 1
        while not self._stopped:
            # Anchor to the start time so slow callbacks don't drift the cadence
            delay = started_at + tick * self.interval - loop.time()
            await asyncio.sleep(max(0.0, delay))
            if self._stopped:
                break
            self._emit()
            tick += 1

    def _emit(self):
        message = self.messages[self.emitted % len(self.messages)]
        self.emitted += 1
        try:
            self.on_progress(message)
        except Exception as e:
            logger.warning(f"Progress callback failed: {e}")
