"""Environment-based configuration for vmhealth."""

import logging
from collections.abc import Mapping

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vmhealth.errors import ConfigError
from vmhealth.estimators import DEFAULT_SAMPLE_INTERVAL
from vmhealth.health import DEFAULT_THRESHOLD

ENV_PREFIX = "VMHEALTH_"


class Settings(BaseSettings):
    """Runtime settings for a health check, read from VMHEALTH_* variables."""

    threshold: float = Field(DEFAULT_THRESHOLD, ge=0, le=100, allow_inf_nan=False)
    sample_interval: float = Field(DEFAULT_SAMPLE_INTERVAL, gt=0, allow_inf_nan=False)
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper() or "WARNING"
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"not a logging level: {value!r}")
        return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from instead of os.environ.

    Raises:
        ConfigError: If a variable is set to an invalid value.
    """
    try:
        if environ is None:
            return Settings()
        overrides = {
            key[len(ENV_PREFIX):].lower(): value
            for key, value in environ.items()
            if key.startswith(ENV_PREFIX) and value
        }
        return Settings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(
            f"{ENV_PREFIX}{'.'.join(map(str, err['loc'])).upper()}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigError(problems) from None
