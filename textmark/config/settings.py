# textmark/config/settings.py
# Responsibility: Runtime defaults for highlighting and context windows, overridable via environment.

import logging
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "<b>%s</b>"
DEFAULT_PLACEHOLDER = "%s"
DEFAULT_MODE = "stem"
DEFAULT_UNIT = "chars"


class HighlightSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TEXTMARK_HIGHLIGHT_", validate_assignment=True)

    TEMPLATE: str = DEFAULT_TEMPLATE
    PLACEHOLDER: str = DEFAULT_PLACEHOLDER
    MODE: Literal["stem", "exact"] = DEFAULT_MODE

    @field_validator("MODE", mode="before")
    @classmethod
    def _known_mode(cls, value):
        if value not in ("stem", "exact"):
            logger.warning("Unknown highlight mode %r, using %r", value, DEFAULT_MODE)
            return DEFAULT_MODE
        return value


class WindowSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TEXTMARK_WINDOW_", validate_assignment=True)

    AFFIX: str = ".."
    DEFAULT_CONTEXT: int = 30
    UNIT: Literal["chars", "words"] = DEFAULT_UNIT
    STRIP_TAGS: bool = True

    @field_validator("UNIT", mode="before")
    @classmethod
    def _known_unit(cls, value):
        if value not in ("chars", "words"):
            logger.warning("Unknown window unit %r, using %r", value, DEFAULT_UNIT)
            return DEFAULT_UNIT
        return value


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TEXTMARK_", env_file=".env", extra="ignore")

    HIGHLIGHT: HighlightSettings = HighlightSettings()
    WINDOW: WindowSettings = WindowSettings()


settings = AppSettings()
