"""
Remote boundary for Veo jobs.

The orchestration core only needs two calls from the remote service:
- create_job(model, prompt, config) -> operation handle
- get_job_status(handle) -> JobStatus

GeminiVideoService implements them over the google-genai SDK. It is a plain
value built from an API key and handed to the submitter and poller, so tests
can swap in any object with the same two coroutines.
"""

import logging
from typing import Any, Optional, Protocol

from google import genai
from google.genai import types

from .models import AspectRatio, JobConfig, JobStatus

logger = logging.getLogger(__name__)


class VideoService(Protocol):
    """What the submitter and poller need from the remote service."""

    async def create_job(self, model: str, prompt: str, config: JobConfig) -> str:
        ...

    async def get_job_status(self, handle: str) -> JobStatus:
        ...


def _error_text(error: Any) -> Optional[str]:
    """Operation.error is a dict on the wire; pull a readable message out of it."""
    if not error:
        return None
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)


class GeminiVideoService:
    """
    Veo job calls through the Gemini API.

    Usage:
        service = GeminiVideoService(api_key="...")
        handle = await service.create_job(model, prompt, JobConfig(...))
        status = await service.get_job_status(handle)
    """

    def __init__(self, api_key: Optional[str] = None, client: Optional[genai.Client] = None):
        if client is None:
            if not api_key:
                raise ValueError("GEMINI_API_KEY environment variable not set")
            client = genai.Client(api_key=api_key)
        self._client = client

    async def create_job(self, model: str, prompt: str, config: JobConfig) -> str:
        video_config = types.GenerateVideosConfig(
            number_of_videos=config.number_of_videos,
            resolution=config.resolution.value,
            aspect_ratio=config.aspect_ratio.value,
        )
        if config.duration_seconds is not None:
            video_config.duration_seconds = config.duration_seconds

        video = types.Video(uri=config.video.uri) if config.video else None

        logger.info(
            f"Veo request: model={model}, resolution={config.resolution.value}, "
            f"aspect_ratio={config.aspect_ratio.value}, extension={video is not None}, "
            f"prompt={prompt[:50]}..."
        )

        operation = await self._client.aio.models.generate_videos(
            model=model,
            prompt=prompt,
            video=video,
            config=video_config,
        )
        if not operation.name:
            raise ValueError("No operation name in Veo response")

        return operation.name

    async def get_job_status(self, handle: str) -> JobStatus:
        operation = await self._client.aio.operations.get(
            operation=types.GenerateVideosOperation(name=handle)
        )

        if not operation.done:
            return JobStatus(done=False)

        error = _error_text(operation.error)
        response = operation.response or getattr(operation, "result", None)
        videos = list(response.generated_videos or []) if response else []

        if not videos or not videos[0].video or not videos[0].video.uri:
            reasons = getattr(response, "rai_media_filtered_reasons", None) if response else None
            if not error and reasons:
                error = "; ".join(reasons)
            return JobStatus(done=True, error=error)

        return JobStatus(
            done=True,
            video_uri=videos[0].video.uri,
            aspect_ratio=_aspect_ratio_of(videos[0].video),
            error=error,
        )


def _aspect_ratio_of(video: Any) -> Optional[AspectRatio]:
    # Not every SDK release exposes this on Video
    value = getattr(video, "aspect_ratio", None)
    if not value:
        return None
    try:
        return AspectRatio(value)
    except ValueError:
        logger.warning(f"Unknown aspect ratio in Veo response: {value}")
        return None
