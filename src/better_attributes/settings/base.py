from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BetterAttributesSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BETTER_ATTRIBUTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level used by setup_logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(
        default=True,
        description="Emit JSON log lines. When disabled a plain text format is used."
    )

    include_private: bool = Field(
        default=True,
        description="Include single-underscore members when introspecting a class. "
                    "Dunder members are never included."
    )
    match_subclasses: bool = Field(
        default=False,
        description="Let an instance of a marker subclass satisfy a query for its base marker. "
                    "When disabled markers match by exact type."
    )
    validate_markers: bool = Field(
        default=True,
        description="Reject query markers that are not declared with @attribute "
                    "instead of letting them silently match nothing."
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Expected one of {', '.join(_LOG_LEVELS)}.")
        return level


_settings: Optional[BetterAttributesSettings] = None


def get_settings(force_reload: bool = False) -> BetterAttributesSettings:
    """Get the singleton settings instance.

    Settings are read from ``BETTER_ATTRIBUTES_*`` environment variables
    (and a local ``.env`` file) on first access.

    Args:
        force_reload: Create a new instance even if one already exists.
            Useful for testing or when environment variables have changed.

    Returns:
        The singleton BetterAttributesSettings instance
    """
    global _settings

    if _settings is None or force_reload:
        _settings = BetterAttributesSettings()

    return _settings


def reload_settings() -> BetterAttributesSettings:
    """Force reload of settings, mainly for tests."""
    global _settings
    _settings = None
    return get_settings(force_reload=True)
