"""
Video Generation Service

Drives Veo jobs end to end:
- JobSubmitter: one job-creation call per request
- OperationPoller: fixed-interval polling with rotating progress messages
- VideoGenerationClient: generate / extend / download for callers

Failures surface as CredentialError or VideoGenerationError.
"""

from .client import VideoGenerationClient
from .errors import (
    CredentialError,
    ErrorKind,
    OperationCancelledError,
    OperationTimeoutError,
    VideoGenerationError,
    classify_error,
    signature_predicate,
)
from .models import (
    LOADING_MESSAGES,
    AspectRatio,
    ExtensionRequest,
    GenerationRequest,
    JobConfig,
    JobStatus,
    Operation,
    Resolution,
    VideoEffect,
    VideoModel,
    VideoReference,
)
from .poller import OperationPoller
from .progress import ProgressTicker
from .service import GeminiVideoService, VideoService
from .submitter import JobSubmitter

__all__ = [
    "VideoGenerationClient",
    "CredentialError",
    "ErrorKind",
    "OperationCancelledError",
    "OperationTimeoutError",
    "VideoGenerationError",
    "classify_error",
    "signature_predicate",
    "LOADING_MESSAGES",
    "AspectRatio",
    "ExtensionRequest",
    "GenerationRequest",
    "JobConfig",
    "JobStatus",
    "Operation",
    "Resolution",
    "VideoEffect",
    "VideoModel",
    "VideoReference",
    "OperationPoller",
    "ProgressTicker",
    "GeminiVideoService",
    "VideoService",
    "JobSubmitter",
]
