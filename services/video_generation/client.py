"""
Veo Video Generation Client

Single interface the presentation layer calls:
- generate: submit a new job and wait for the finished video
- extend: continue a finished video with a follow-on job
- download_video: fetch a finished video to disk

Features:
- Two-stage flow: JobSubmitter -> OperationPoller
- Rotating progress messages through a caller callback
- Failures classified as credential-error or generic-error
- Configurable poll timeout and cooperative cancellation
"""

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from core.config import Config, get_config

from .errors import VideoGenerationError, CredentialError, signature_predicate
from .models import ExtensionRequest, GenerationRequest, Operation, VideoReference
from .poller import OperationPoller
from .progress import ProgressCallback
from .service import GeminiVideoService, VideoService
from .submitter import JobSubmitter

logger = logging.getLogger(__name__)


def _is_retriable(exc: BaseException) -> bool:
    """Return True only for transient download errors (429, 5xx, network)."""
    if isinstance(exc, httpx.HTTPStatusError):
        code = exc.response.status_code
        return code == 429 or code >= 500
    return isinstance(exc, (httpx.TimeoutException, httpx.TransportError))


class VideoGenerationClient:
    """
    Caller-facing client for Veo jobs.

    Usage:
        client = VideoGenerationClient.from_config()

        operation = await client.generate(
            GenerationRequest(prompt="A neon hologram of a cat driving at top speed"),
            on_progress=print,
        )

        longer = await client.extend(
            ExtensionRequest(prompt="The cat drifts around a corner", prior_operation=operation),
            on_progress=print,
        )

        path = await client.download_video(longer.result)
    """

    def __init__(
        self,
        service: VideoService,
        config: Optional[Config] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            service: Remote video service (GeminiVideoService in production)
            config: Optional config override
            http_client: Optional HTTP client used for downloads
        """
        self.config = config or get_config()
        self.service = service

        is_credential_error = signature_predicate(self.config.errors.credential_error_signatures)
        self.is_credential_error = is_credential_error
        self.submitter = JobSubmitter(
            service,
            is_credential_error=is_credential_error,
            extension_model=self.config.models.extension_model,
        )
        self.poller = OperationPoller(
            service,
            poll_interval=self.config.polling.poll_interval,
            progress_interval=self.config.polling.progress_interval,
            timeout=self.config.polling.timeout_or_none,
            is_credential_error=is_credential_error,
        )

        self._http_client = http_client
        self._owns_http_client = http_client is None

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "VideoGenerationClient":
        """Build a client talking to the Gemini API with the configured key."""
        config = config or get_config()
        return cls(GeminiVideoService(api_key=config.api.gemini_api_key), config=config)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.download.timeout)
        return self._http_client

    async def close(self):
        """Close the HTTP client if we created it."""
        if self._http_client and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "VideoGenerationClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    @staticmethod
    def _require_result(operation: Operation, failure: str) -> Operation:
        if operation.result is None:
            detail = f" ({operation.error})" if operation.error else ""
            logger.error(f"{failure}: operation {operation.name} finished without a video{detail}")
            raise VideoGenerationError(
                f"{failure}: no result produced{detail}",
                error_code="NO_RESULT",
            )
        return operation

    async def generate(
        self,
        request: GenerationRequest,
        on_progress: Optional[ProgressCallback] = None,
        messages: Optional[Sequence[str]] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Operation:
        """
        Generate a video and wait for it to finish.

        Args:
            request: Prompt, aspect ratio, resolution, model and effect
            on_progress: Called with each rotating progress message
            messages: Progress messages to rotate through (defaults to LOADING_MESSAGES)
            cancel_event: Set it to stop polling early

        Returns:
            The done Operation, with its result populated

        Raises:
            CredentialError: The API key was rejected
            VideoGenerationError: Any other failure
        """
        operation = await self.submitter.submit_generation(request)
        operation = await self.poller.await_completion(
            operation, on_progress=on_progress, messages=messages, cancel_event=cancel_event
        )
        return self._require_result(operation, "Video generation failed")

    async def extend(
        self,
        request: ExtensionRequest,
        on_progress: Optional[ProgressCallback] = None,
        messages: Optional[Sequence[str]] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Operation:
        """
        Extend a finished video with `request.duration_seconds` more footage.

        Same contract as generate(); fails with a generic error, before any
        remote call, if the prior operation has no result.
        """
        operation = await self.submitter.submit_extension(request)
        operation = await self.poller.await_completion(
            operation, on_progress=on_progress, messages=messages, cancel_event=cancel_event
        )
        return self._require_result(operation, "Video extension failed")

    async def download_video(
        self,
        reference: VideoReference,
        output_dir: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> Path:
        """
        Download a finished video to local storage.

        Args:
            reference: The operation's result
            output_dir: Target directory (defaults to the configured one)
            filename: Custom filename (timestamped if not provided)

        Returns:
            Local path to the downloaded file
        """
        base_dir = Path(output_dir or self.config.download.output_dir)
        base_dir.mkdir(parents=True, exist_ok=True)

        if not filename:
            stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
            filename = f"veo-generated-video-{stamp}.mp4"
        output_path = base_dir / filename

        client = await self._get_client()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max(1, self.config.download.max_attempts)),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
                retry=retry_if_exception(_is_retriable),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(
                        reference.uri,
                        params={"key": self.config.api.gemini_api_key},
                        follow_redirects=True,
                    )
                    response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if self.is_credential_error(e) or self.is_credential_error(Exception(e.response.text)):
                raise CredentialError() from e
            raise VideoGenerationError(
                f"Download failed: HTTP {e.response.status_code}",
                error_code=f"HTTP_{e.response.status_code}",
            ) from e
        except httpx.HTTPError as e:
            raise VideoGenerationError(
                f"Download failed: {type(e).__name__}: {e}",
                error_code="DOWNLOAD_ERROR",
            ) from e

        partial_path = output_path.with_name(output_path.name + ".part")
        try:
            partial_path.write_bytes(response.content)
            partial_path.replace(output_path)
        except OSError as e:
            partial_path.unlink(missing_ok=True)
            raise VideoGenerationError(
                f"Download failed: cannot write {output_path}: {e}",
                error_code="WRITE_ERROR",
            ) from e
        logger.info(f"Video downloaded: {output_path} ({len(response.content) / 1024 / 1024:.1f} MB)")
        return output_path
