"""Base model for the MoMo SDK."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class MomoModel(BaseModel):
    """Base model with common configuration.

    Field names are snake_case in Python; wire names are declared as aliases.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to its JSON wire representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
