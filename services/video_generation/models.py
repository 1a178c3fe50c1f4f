"""
Data model for Veo generation jobs.

Caller input (GenerationRequest, ExtensionRequest) is validated with Pydantic
and immutable once built. Runtime state (Operation, VideoReference) lives in
plain dataclasses that the poller updates in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AspectRatio(str, Enum):
    """Supported output aspect ratios."""
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class Resolution(str, Enum):
    """Supported output resolutions."""
    HD = "720p"
    FULL_HD = "1080p"


class VideoModel(str, Enum):
    """Veo model variants."""
    VEO_3_1_FAST = "veo-3.1-fast-generate-preview"  # fast, used for new generations
    VEO_3_1 = "veo-3.1-generate-preview"            # high quality, required for extensions


class VideoEffect(str, Enum):
    """Style suffixes appended to the prompt."""
    NONE = "none"
    SLOW_MOTION = "in slow motion"
    FAST_FORWARD = "in fast forward"
    BLACK_AND_WHITE = "black and white"
    SEPIA = "sepia tone"
    VINTAGE_FILM = "vintage film look"
    CINEMATIC = "cinematic"


# Extensions are always rendered at 720p
EXTENSION_RESOLUTION = Resolution.HD

MIN_EXTENSION_SECONDS = 1
MAX_EXTENSION_SECONDS = 10
DEFAULT_EXTENSION_SECONDS = 7

LOADING_MESSAGES = [
    "Warming up the digital director's chair...",
    "Assembling pixels into a masterpiece...",
    "Teaching virtual actors their lines...",
    "Scouting for the perfect digital location...",
    "Adjusting the virtual camera focus...",
    "This can take a few minutes, hang tight!",
    "Rendering cinematic brilliance...",
    "Adding a touch of digital stardust...",
    "Finalizing the special effects...",
    "The epic saga is almost ready for its premiere...",
]


@dataclass(frozen=True)
class VideoReference:
    """A generated video: where to fetch it and the aspect ratio produced."""
    uri: str
    aspect_ratio: AspectRatio


@dataclass
class Operation:
    """
    Handle to a remote generation job.

    `name` is assigned by the remote service and never changes. `done`,
    `result` and `error` are only updated by the poller.
    """
    name: str
    done: bool = False
    result: Optional[VideoReference] = None
    error: Optional[str] = None  # job-level failure text reported by the service
    aspect_ratio: Optional[AspectRatio] = None  # as requested at submission

    @property
    def succeeded(self) -> bool:
        return self.done and self.result is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "done": self.done,
            "error": self.error,
            "aspect_ratio": self.aspect_ratio.value if self.aspect_ratio else None,
        }
        if self.result is not None:
            data["result"] = {
                "uri": self.result.uri,
                "aspect_ratio": self.result.aspect_ratio.value,
            }
        else:
            data["result"] = None
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Operation":
        result = data.get("result")
        return cls(
            name=data["name"],
            done=bool(data.get("done", False)),
            result=(
                VideoReference(uri=result["uri"], aspect_ratio=AspectRatio(result["aspect_ratio"]))
                if result
                else None
            ),
            error=data.get("error"),
            aspect_ratio=AspectRatio(data["aspect_ratio"]) if data.get("aspect_ratio") else None,
        )


@dataclass
class JobConfig:
    """Per-job settings sent alongside the prompt to the remote service."""
    resolution: Resolution
    aspect_ratio: AspectRatio
    video: Optional[VideoReference] = None  # continuation input for extensions
    duration_seconds: Optional[int] = None
    number_of_videos: int = 1


@dataclass
class JobStatus:
    """
    One poll response.

    The service may not echo the aspect ratio of the produced video; the
    poller then falls back to the ratio requested at submission.
    """
    done: bool
    video_uri: Optional[str] = None
    aspect_ratio: Optional[AspectRatio] = None
    error: Optional[str] = None


class GenerationRequest(BaseModel):
    """Inputs for a new generation job."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    prompt: str = Field(min_length=1, description="Free-text description of the video")
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    resolution: Resolution = Resolution.HD
    model: VideoModel = VideoModel.VEO_3_1_FAST
    effect: VideoEffect = VideoEffect.NONE

    @property
    def final_prompt(self) -> str:
        """Prompt with the selected effect appended."""
        if self.effect == VideoEffect.NONE:
            return self.prompt
        return f"{self.prompt}, {self.effect.value}"


class ExtensionRequest(BaseModel):
    """Inputs for a job that continues a previously generated video."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    prompt: str = Field(min_length=1, description="What happens next in the video")
    duration_seconds: int = Field(
        default=DEFAULT_EXTENSION_SECONDS,
        ge=MIN_EXTENSION_SECONDS,
        le=MAX_EXTENSION_SECONDS,
        description="Seconds of footage to add",
    )
    prior_operation: Operation

    @property
    def resolution(self) -> Resolution:
        return EXTENSION_RESOLUTION
