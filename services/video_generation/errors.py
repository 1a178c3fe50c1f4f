"""
Error classification for Veo jobs.

Every failure is classified exactly once, where it happens, into one of two
kinds:
- credential-error: the service rejected the API key; the caller has to
  re-authenticate
- generic-error: anything else, carrying the original message

Credential detection is an injectable predicate so the matching strategy can
be swapped per service or mocked in tests.
"""

from enum import Enum
from typing import Callable, Iterable, Optional

CredentialErrorPredicate = Callable[[BaseException], bool]

DEFAULT_CREDENTIAL_SIGNATURES = ("Requested entity was not found.",)

CREDENTIAL_ERROR_MESSAGE = "API Key is invalid or not found. Please select a valid API key."


class ErrorKind(str, Enum):
    CREDENTIAL = "credential-error"
    GENERIC = "generic-error"


class VideoGenerationError(Exception):
    """Raised when a generation job fails."""

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.error_code = error_code
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class CredentialError(VideoGenerationError):
    """The remote service did not recognise the API key."""

    kind = ErrorKind.CREDENTIAL

    def __init__(self, message: str = CREDENTIAL_ERROR_MESSAGE, error_code: Optional[str] = "INVALID_API_KEY"):
        super().__init__(message, error_code=error_code)


class OperationTimeoutError(VideoGenerationError):
    """The operation did not reach `done` within the configured timeout."""

    def __init__(self, message: str):
        super().__init__(message, error_code="TIMEOUT")


class OperationCancelledError(VideoGenerationError):
    """The caller cancelled polling before the operation finished."""

    def __init__(self, message: str = "Polling was cancelled"):
        super().__init__(message, error_code="CANCELLED")


def signature_predicate(signatures: Iterable[str] = DEFAULT_CREDENTIAL_SIGNATURES) -> CredentialErrorPredicate:
    """Build a predicate matching any of `signatures` in an exception message."""
    if isinstance(signatures, str):
        signatures = (signatures,)
    needles = tuple(s for s in signatures if s)

    def is_credential_error(exc: BaseException) -> bool:
        text = str(exc)
        return any(needle in text for needle in needles)

    return is_credential_error


def classify_error(
    exc: BaseException,
    is_credential_error: CredentialErrorPredicate,
) -> VideoGenerationError:
    """Map a raw failure onto the two-kind taxonomy."""
    if isinstance(exc, VideoGenerationError):
        return exc

    if is_credential_error(exc):
        return CredentialError()

    message = str(exc) or type(exc).__name__
    return VideoGenerationError(message, error_code=type(exc).__name__)
