"""Settings for better-attributes, built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Environment Variables (highest priority), prefixed ``BETTER_ATTRIBUTES_``
    2. A ``.env`` file in the working directory
    3. Default Values in code (lowest priority)

Quick Start:
    >>> from better_attributes.settings import get_settings
    >>> settings = get_settings()
    >>> settings.match_subclasses
    False
"""

from .base import BetterAttributesSettings, get_settings, reload_settings

__all__ = [
    "BetterAttributesSettings",
    "get_settings",
    "reload_settings",
]
