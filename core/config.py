"""
Configuration management for Veo Studio.

Centralizes all configuration including:
- API key for the Gemini video service
- Model selections
- Polling cadence and timeout
- Credential-error detection signatures
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return int(value)


@dataclass
class APIConfig:
    """API configuration for the Gemini video service."""

    # GEMINI_API_KEY wins, API_KEY / GOOGLE_API_KEY kept for older setups
    gemini_api_key: str = field(
        default_factory=lambda: (
            os.getenv("GEMINI_API_KEY")
            or os.getenv("API_KEY")
            or os.getenv("GOOGLE_API_KEY", "")
        )
    )


@dataclass
class ModelConfig:
    """Model selection configuration."""

    # Model for new generations when the caller doesn't pick one
    default_model: str = field(
        default_factory=lambda: os.getenv("VEO_DEFAULT_MODEL", "veo-3.1-fast-generate-preview")
    )
    # Extensions always run on the quality model
    extension_model: str = field(
        default_factory=lambda: os.getenv("VEO_EXTENSION_MODEL", "veo-3.1-generate-preview")
    )


@dataclass
class PollingConfig:
    """Cadence of the operation poll loop and the progress ticker."""

    poll_interval: float = field(
        default_factory=lambda: _env_float("VEO_POLL_INTERVAL_SECONDS", 10.0)
    )
    progress_interval: float = field(
        default_factory=lambda: _env_float("VEO_PROGRESS_INTERVAL_SECONDS", 5.0)
    )
    # 0 disables the upper bound
    timeout: float = field(
        default_factory=lambda: _env_float("VEO_POLL_TIMEOUT_SECONDS", 1200.0)
    )

    @property
    def timeout_or_none(self) -> Optional[float]:
        return self.timeout if self.timeout > 0 else None


@dataclass
class ErrorConfig:
    """How remote failures are classified."""

    # Substrings that mark an invalid or missing API key, "|" separated in env
    credential_error_signatures: list[str] = field(
        default_factory=lambda: [
            s.strip()
            for s in os.getenv(
                "VEO_CREDENTIAL_ERROR_SIGNATURES", "Requested entity was not found."
            ).split("|")
            if s.strip()
        ]
    )


@dataclass
class DownloadConfig:
    """Download settings for finished videos."""

    output_dir: str = field(default_factory=lambda: os.getenv("VEO_OUTPUT_DIR", "output"))
    timeout: float = field(default_factory=lambda: _env_float("VEO_DOWNLOAD_TIMEOUT_SECONDS", 300.0))
    max_attempts: int = field(default_factory=lambda: _env_int("VEO_DOWNLOAD_ATTEMPTS", 3))


@dataclass
class Config:
    """Main configuration class."""

    api: APIConfig = field(default_factory=APIConfig)
    models: ModelConfig = field(default_factory=ModelConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    errors: ErrorConfig = field(default_factory=ErrorConfig)
    download: DownloadConfig = field(default_factory=DownloadConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration and return list of issues."""
        issues = []

        if not self.api.gemini_api_key:
            issues.append("GEMINI_API_KEY not configured")

        if self.polling.poll_interval <= 0:
            issues.append("VEO_POLL_INTERVAL_SECONDS must be positive")

        if self.polling.progress_interval <= 0:
            issues.append("VEO_PROGRESS_INTERVAL_SECONDS must be positive")

        if self.polling.timeout < 0:
            issues.append("VEO_POLL_TIMEOUT_SECONDS must be 0 (unbounded) or positive")

        if not self.errors.credential_error_signatures:
            issues.append("No credential error signatures configured")

        return issues


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reload_config():
    """Reload configuration from environment."""
    global _config
    _config = Config.from_env()
