"""Configuration Management - Harness Settings.

Settings load from ``CODEC_TESTER_*`` environment variables and an optional
``.env`` file, with validation. Command-line flags override per run.
"""

from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from codec_tester.core.fuzz import DEFAULT_FUZZ_SEED


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class HarnessSettings(BaseSettings):
    """Harness settings.

    The sink for each case holds
    ``size + floor(size * inflation_headroom) + inflation_slack`` bytes.
    Compressed output that does not fit is an inflation error, so the
    defaults flag anything more than 25% (plus 10 bytes) larger than its
    input.

    Usage:
        from codec_tester.core.config import get_settings
        settings = get_settings()
    """

    model_config = SettingsConfigDict(
        env_prefix="CODEC_TESTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Input limits
    max_file_size: int = Field(
        default=1024 * 1024 * 1024,
        ge=1,
        description="Largest accepted input file in bytes",
    )

    # Sink sizing
    inflation_headroom: float = Field(
        default=0.25,
        ge=0.0,
        le=16.0,
        description="Extra sink capacity as a fraction of the input size",
    )
    inflation_slack: int = Field(
        default=10, ge=0, description="Constant extra sink capacity in bytes"
    )

    # Fuzzing
    fuzz_seed: int = Field(
        default=DEFAULT_FUZZ_SEED,
        ge=0,
        lt=1 << 64,
        description="Initial 64-bit corruption generator state",
    )

    # Codec and logging
    default_codec: str = Field(default="zlib", description="Codec used by default")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    log_format: str = Field(default="console", description="console or json")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        if isinstance(v, str):
            v = v.upper()
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("console", "json"):
            raise ValueError("log_format must be 'console' or 'json'")
        return v

    @property
    def inflation_percent(self) -> int:
        """Inflation tolerance rendered for reports (e.g. 25)."""
        return round(self.inflation_headroom * 100)

    def sink_capacity(self, size: int) -> int:
        """Bytes to allocate for compressing ``size`` input bytes."""
        return size + int(size * self.inflation_headroom) + self.inflation_slack


# Global settings instance (singleton pattern)
_settings: HarnessSettings | None = None


def get_settings(force_reload: bool = False) -> HarnessSettings:
    """Get harness settings (singleton).

    Args:
        force_reload: Force reload settings from environment

    Returns:
        HarnessSettings instance

    """
    global _settings
    if _settings is None or force_reload:
        _settings = HarnessSettings()
    return _settings
