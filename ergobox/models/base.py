"""Base model for all Ergobox Pydantic models.

This module provides a base model class that enforces consistent serialization
behavior across all Ergobox models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ErgoboxBaseModel(BaseModel):
    """Base model class for all Ergobox Pydantic models.

    This class enforces consistent serialization behavior:
    - by_alias=True: Use field aliases for serialization (the save file uses camelCase)
    - populate_by_name=True: Python code may use the snake_case field names
    - mode="json": Use JSON-compatible serialization
    """

    model_config = ConfigDict(
        # Allow extra fields so newer save files still load
        extra="allow",
        populate_by_name=True,
        # Use enum values in serialization
        use_enum_values=True,
        # Validate assignment after model creation
        validate_assignment=True,
    )

    def to_dict_full(self) -> dict[str, Any]:
        """Convert model to dictionary including all fields (even unset ones).

        Returns:
            Dictionary representation including all fields
        """
        return self.model_dump(by_alias=True, exclude_unset=False, mode="json")
