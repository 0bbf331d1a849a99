"""
Settings for the kengine-directory command line

Loaded with pydantic-settings from KENGINE_DIRECTORY_* variables and an
optional .env file. Backend connection variables are not read here; see env.py.
"""

import logging
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class DirectorySettings(BaseSettings):
    """Command line and logging settings"""

    model_config = SettingsConfigDict(
        env_prefix="KENGINE_DIRECTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    output_format: Literal["yaml", "json"] = "yaml"
    show_secrets: bool = Field(
        default=False, description="Print passwords instead of masking them"
    )


def configure_logging(settings: DirectorySettings) -> None:
    """Configure root logging from settings"""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=settings.log_format)


def load_settings() -> DirectorySettings:
    """Load settings, falling back to defaults when the environment is invalid"""
    try:
        return DirectorySettings()
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        logger.warning(f"Invalid KENGINE_DIRECTORY_* settings ({fields}), using defaults")
        return DirectorySettings.model_construct()
