"""Base model configuration for filter criteria and test trees."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model that rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
