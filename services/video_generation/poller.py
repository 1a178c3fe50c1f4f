"""
Operation Poller - drives a pending operation to `done`.

Polling is a fixed-delay loop: wait `poll_interval`, query the status, repeat.
There is no backoff and no retry on errors; only "not done yet" causes another
attempt. While the loop runs, a ProgressTicker emits rotating messages on its
own cadence and is torn down on every exit path.
"""

import asyncio
import logging
from typing import Optional, Sequence

from .errors import (
    CredentialErrorPredicate,
    OperationCancelledError,
    OperationTimeoutError,
    classify_error,
    signature_predicate,
)
from .models import LOADING_MESSAGES, AspectRatio, Operation, VideoReference
from .progress import ProgressCallback, ProgressTicker
from .service import VideoService

logger = logging.getLogger(__name__)


class OperationPoller:
    """
    Polls a Veo operation until it completes.

    Usage:
        poller = OperationPoller(service, poll_interval=10, progress_interval=5)
        operation = await poller.await_completion(operation, on_progress=print)
    """

    def __init__(
        self,
        service: VideoService,
        poll_interval: float = 10.0,
        progress_interval: float = 5.0,
        timeout: Optional[float] = None,
        is_credential_error: Optional[CredentialErrorPredicate] = None,
    ):
        """
        Args:
            service: Remote service exposing get_job_status
            poll_interval: Seconds between status queries
            progress_interval: Seconds between progress messages
            timeout: Overall limit in seconds, None for no limit
            is_credential_error: Predicate flagging invalid-key failures
        """
        if poll_interval <= 0:
            raise ValueError("poll interval must be positive")
        if progress_interval <= 0:
            raise ValueError("progress interval must be positive")
        self.service = service
        self.poll_interval = poll_interval
        self.progress_interval = progress_interval
        self.timeout = timeout
        self.is_credential_error = is_credential_error or signature_predicate()

    async def await_completion(
        self,
        operation: Operation,
        on_progress: Optional[ProgressCallback] = None,
        messages: Optional[Sequence[str]] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Operation:
        """
        Poll until the operation reports done and return it.

        An operation that is already done is returned untouched, without a
        remote call or any progress message.

        Raises:
            CredentialError: A poll failed with the invalid-key signature
            VideoGenerationError: Any other poll failure
            OperationTimeoutError: The timeout elapsed first
            OperationCancelledError: cancel_event was set
        """
        if operation.done:
            logger.debug(f"Operation {operation.name} already done, not polling")
            return operation

        ticker = ProgressTicker(
            on_progress,
            LOADING_MESSAGES if messages is None else messages,
            self.progress_interval,
        )
        ticker.start()
        try:
            if self.timeout is None:
                await self._poll_until_done(operation, cancel_event)
            else:
                try:
                    await asyncio.wait_for(
                        self._poll_until_done(operation, cancel_event),
                        timeout=self.timeout,
                    )
                except asyncio.TimeoutError as e:
                    logger.error(f"Operation {operation.name} timed out after {self.timeout}s")
                    raise OperationTimeoutError(
                        f"Job did not complete within {self.timeout:g} seconds"
                    ) from e
        finally:
            ticker.stop()

        return operation

    async def _wait(self, cancel_event: Optional[asyncio.Event]):
        """Sleep one poll interval, waking early if cancelled."""
        if cancel_event is None:
            await asyncio.sleep(self.poll_interval)
            return

        if cancel_event.is_set():
            raise OperationCancelledError()
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=self.poll_interval)
        except asyncio.TimeoutError:
            pass
        if cancel_event.is_set():
            raise OperationCancelledError()

    async def _poll_until_done(
        self,
        operation: Operation,
        cancel_event: Optional[asyncio.Event],
    ):
        attempt = 0
        while True:
            await self._wait(cancel_event)
            attempt += 1

            try:
                status = await self.service.get_job_status(operation.name)
            except Exception as e:
                error = classify_error(e, self.is_credential_error)
                logger.error(
                    f"Poll {attempt} for {operation.name} failed ({error.kind.value}): {e}"
                )
                raise error from e

            logger.debug(f"Poll {attempt} for {operation.name}: done={status.done}")
            if not status.done:
                continue

            operation.done = True
            operation.error = status.error
            if status.video_uri:
                operation.result = VideoReference(
                    uri=status.video_uri,
                    aspect_ratio=(
                        status.aspect_ratio
                        or operation.aspect_ratio
                        or AspectRatio.LANDSCAPE
                    ),
                )
            logger.info(
                f"Operation {operation.name} done after {attempt} polls "
                f"(result={'yes' if operation.result else 'no'})"
            )
            return
