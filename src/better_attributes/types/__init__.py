"""Type definitions for better-attributes."""

from .base import AttributesBaseModel
from .metadata import AttributeMetadata, Member

__all__ = [
    'AttributesBaseModel',
    'AttributeMetadata',
    'Member',
]
