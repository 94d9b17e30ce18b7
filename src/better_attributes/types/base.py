"""Base model class for all better-attributes models with serialization support."""

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict


class AttributesBaseModel(BaseModel):
    """Base model for better-attributes records.

    Enum fields are stored as their values, so a dump is already JSON-safe.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=True,
        validate_assignment=True
    )

    def to_dict(self) -> Dict[str, Any]:
        """Dump the model with unset optional fields left out."""
        return self.model_dump(mode="json", exclude_none=True)
