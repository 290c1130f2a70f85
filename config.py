"""Configuration settings for the applicant intake engine."""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List


class Settings(BaseSettings):
    """Global settings for the intake engine.

    Settings can be overridden via environment variables with APPLICANT_INTAKE_ prefix.
    Example: APPLICANT_INTAKE_SUCCESS_RESET_DELAY_SECONDS=2.5
    """

    # Submission lifecycle
    success_reset_delay_seconds: float = Field(
        default=5.0,
        ge=0.0,
        description="Seconds the success state is shown before the form resets to idle"
    )
    sink_timeout_seconds: float = Field(
        default=30.0,
        gt=0.0,
        description="Maximum seconds to wait for the submission sink"
    )
    simulated_sink_delay_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Artificial latency of the simulated sink"
    )
    default_sink: str = Field(
        default="simulated",
        description="Sink used when none is requested explicitly"
    )

    # Attachment rules
    max_attachment_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=0,
        description="Largest accepted CV/brochure upload in bytes"
    )
    allowed_attachment_extensions: List[str] = Field(
        default_factory=lambda: ["pdf", "doc", "docx"],
        description="Accepted attachment extensions (lowercase, no dot)"
    )

    # Field rules
    summary_min_length: int = Field(
        default=100,
        ge=0,
        description="Minimum characters for summary/description fields"
    )
    summary_max_length: int = Field(
        default=1000,
        ge=1,
        description="Maximum characters for summary/description fields"
    )
    phone_min_length: int = Field(
        default=10,
        ge=0,
        description="Minimum raw characters for phone numbers"
    )

    # Diagnostics
    log_level: str = Field(
        default="WARNING",
        description="Logging level used by the CLI"
    )

    model_config = {
        "env_prefix": "APPLICANT_INTAKE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def allowed_extensions_label(self) -> str:
        """Human-readable list of accepted attachment types, e.g. 'PDF, DOC, DOCX'."""
        return ", ".join(ext.upper() for ext in self.allowed_attachment_extensions)

    def max_attachment_mb(self) -> float:
        """Attachment ceiling in MiB."""
        return self.max_attachment_bytes / (1024 * 1024)


# Create singleton instance
settings = Settings()
