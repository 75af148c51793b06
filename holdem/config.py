"""Engine settings from the environment (and a local .env file)."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "HOLDEM_"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


class EngineSettings(BaseModel):
    """Tunables for equity estimation and logging."""

    equity_iterations: int = Field(default=10_000, gt=0)
    equity_workers: int = Field(default=4, gt=0)
    equity_batch_size: int = Field(default=1_000, gt=0)
    exact_threshold: int = Field(default=2_000, ge=0)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Build settings from HOLDEM_* environment variables."""
        load_dotenv()
        values = {}
        for name in cls.model_fields:
            env_var = f"{ENV_PREFIX}{name.upper()}"
            if env_var in os.environ:
                values[name] = os.environ[env_var]
        return cls(**values)


# Global settings instance
_settings: EngineSettings | None = None


def get_settings() -> EngineSettings:
    """Get or create the global settings."""
    global _settings
    if _settings is None:
        _settings = EngineSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the global settings so the next call re-reads the environment."""
    global _settings
    _settings = None


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for applications embedding the engine."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
