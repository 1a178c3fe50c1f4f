"""
Job Submitter - turns a request into exactly one job-creation call.

No retries: a failed submission is terminal for the attempt and is classified
before it leaves this module.
"""

import logging
from typing import Optional

from .errors import (
    CredentialErrorPredicate,
    VideoGenerationError,
    classify_error,
    signature_predicate,
)
from .models import (
    EXTENSION_RESOLUTION,
    ExtensionRequest,
    GenerationRequest,
    JobConfig,
    Operation,
    VideoModel,
)
from .service import VideoService

logger = logging.getLogger(__name__)

NO_PRIOR_RESULT_MESSAGE = "No previous video found to extend."


class JobSubmitter:
    """
    Submits new generation and extension jobs.

    Usage:
        submitter = JobSubmitter(service)
        operation = await submitter.submit_generation(request)
    """

    def __init__(
        self,
        service: VideoService,
        is_credential_error: Optional[CredentialErrorPredicate] = None,
        extension_model: str = VideoModel.VEO_3_1.value,
    ):
        self.service = service
        self.is_credential_error = is_credential_error or signature_predicate()
        self.extension_model = extension_model

    async def _create(self, model: str, prompt: str, config: JobConfig) -> Operation:
        try:
            handle = await self.service.create_job(model, prompt, config)
        except Exception as e:
            error = classify_error(e, self.is_credential_error)
            logger.error(f"Job submission failed ({error.kind.value}): {e}")
            raise error from e

        logger.info(f"Veo job created: {handle}")
        return Operation(name=handle, aspect_ratio=config.aspect_ratio)

    async def submit_generation(self, request: GenerationRequest) -> Operation:
        """Submit a new generation job and return it in `pending` state."""
        config = JobConfig(
            resolution=request.resolution,
            aspect_ratio=request.aspect_ratio,
        )
        return await self._create(request.model.value, request.final_prompt, config)

    async def submit_extension(self, request: ExtensionRequest) -> Operation:
        """
        Submit a job continuing the prior operation's video.

        The prior operation must be done and carry a result; otherwise this
        fails without contacting the service. Aspect ratio comes from the
        prior video and resolution is fixed at 720p.
        """
        prior = request.prior_operation
        if not prior.done or prior.result is None:
            raise VideoGenerationError(NO_PRIOR_RESULT_MESSAGE, error_code="NO_PRIOR_RESULT")

        config = JobConfig(
            resolution=EXTENSION_RESOLUTION,
            aspect_ratio=prior.result.aspect_ratio,
            video=prior.result,
            duration_seconds=request.duration_seconds,
        )
        logger.info(f"Extending {prior.name} by {request.duration_seconds}s")
        return await self._create(self.extension_model, request.prompt, config)
