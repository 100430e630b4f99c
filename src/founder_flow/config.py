"""
Configuration - Environment-driven settings for the link engine

Values come from the process environment, with a local .env file loaded
first when present.

Environment variables:
- FOUNDER_FLOW_LOG_LEVEL: Logging level for the CLI (default: INFO)
- FOUNDER_FLOW_LOG_VALIDATION: Log every URL verdict in the CLI (default: false)
- FOUNDER_FLOW_EXTRA_BLOCKED_PATTERNS: Comma-separated patterns added to the
  default URL denylist
- FOUNDER_FLOW_PREVIEW_TIMEOUT: Link preview request timeout in seconds (default: 5)
"""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class Settings(BaseModel):
    """Validated runtime settings"""

    log_level: str = Field(default="INFO", description="Logging level name")
    log_validation: bool = Field(default=False, description="Log every URL verdict")
    extra_blocked_patterns: list[str] = Field(
        default_factory=list, description="Patterns appended to the URL denylist"
    )
    preview_timeout: float = Field(
        default=5.0, gt=0, le=60, description="Link preview request timeout (seconds)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name"""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}, got '{v}'")
        return level

    @field_validator("extra_blocked_patterns", mode="before")
    @classmethod
    def split_patterns(cls, v: object) -> object:
        """Accept a comma-separated string as well as a list"""
        if isinstance(v, str):
            return [p.strip().lower() for p in v.split(",") if p.strip()]
        return v

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def _env_flag(key: str) -> bool:
    return os.getenv(key, "").strip().lower() in TRUE_VALUES


def load_settings() -> Settings:
    """
    Load settings from the environment

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value
    """
    load_dotenv()

    return Settings(
        log_level=os.getenv("FOUNDER_FLOW_LOG_LEVEL", "INFO"),
        log_validation=_env_flag("FOUNDER_FLOW_LOG_VALIDATION"),
        extra_blocked_patterns=os.getenv("FOUNDER_FLOW_EXTRA_BLOCKED_PATTERNS", ""),
        preview_timeout=os.getenv("FOUNDER_FLOW_PREVIEW_TIMEOUT", "5"),
    )
