"""Process-wide defaults, read from ``FIELDCALC_*`` environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldcalc.core.models.base import NullValueMode


class Settings(BaseSettings):
    """Defaults used when field display options leave a value unset.

    Example:
        FIELDCALC_DISPLAY_VALUES_LIMIT=100 FIELDCALC_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(env_prefix="FIELDCALC_", env_file=".env", extra="ignore")

    display_values_limit: int = Field(
        default=25,
        gt=0,
        description="Raw values emitted in values mode when the options set no limit",
    )
    null_value_mode: NullValueMode = Field(
        default=NullValueMode.NULL,
        description="Null policy for reductions when neither field nor options set one",
    )

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"


@lru_cache
def get_settings() -> Settings:
    """Settings are read once; call ``get_settings.cache_clear()`` to reload."""
    return Settings()
