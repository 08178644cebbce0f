"""
Configuration for ContractGuard.

Runtime settings come from ``CONTRACTGUARD_*`` environment variables.
Provider API keys are read by the providers themselves
(``ANTHROPIC_API_KEY``, ``OPENAI_API_KEY``). Call ``load_dotenv()`` first
to pick values up from a ``.env`` file.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .providers import DEFAULT_MODEL, MODELS, list_models, list_providers

ENV_PREFIX = "CONTRACTGUARD_"

_TRUE_VALUES = {"1", "true", "yes", "on"}

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Runtime settings for analysis."""

    model: str = DEFAULT_MODEL
    max_retries: int = Field(3, ge=1)
    max_tokens: int = Field(4096, gt=0)
    temperature: float = Field(0.1, ge=0.0, le=2.0)
    log_level: str = "WARNING"
    allow_unredacted_images: bool = False

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level: {value}. Use one of: {', '.join(LOG_LEVELS)}"
            )
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, keeping defaults for unset ones."""
        environ = os.environ if environ is None else environ
        values = {}

        for name in ("model", "max_retries", "max_tokens", "temperature", "log_level"):
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw:
                values[name] = raw

        allow_images = environ.get(f"{ENV_PREFIX}ALLOW_IMAGES")
        if allow_images:
            values["allow_unredacted_images"] = allow_images.lower() in _TRUE_VALUES

        return cls(**values)


__all__ = [
    "Settings",
    "MODELS",
    "DEFAULT_MODEL",
    "list_models",
    "list_providers",
]
