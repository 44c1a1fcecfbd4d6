"""Shared base model for engine value objects."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """Immutable value object with camelCase contract aliases.

    Attributes use snake_case; ``to_contract()`` emits the camelCase field
    names consumed by presentation and the advice collaborator
    (``monthlyNet``, ``daysUntilDue``, ``totalInterest``, ...). Models accept
    either spelling on input.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_contract(self) -> dict[str, Any]:
        """Serialize to the JSON-compatible contract shape."""
        return self.model_dump(mode="json", by_alias=True)
