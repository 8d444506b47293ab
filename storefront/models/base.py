"""Shared model configuration"""

from pydantic import BaseModel, ConfigDict


class StorefrontModel(BaseModel):
    """
    Base for models exchanged with the backend.

    The backend speaks camelCase with Mongo-style `_id`; fields are declared
    snake_case with the wire name as alias, and either spelling is accepted.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        """Serialize with wire names, JSON-safe"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
