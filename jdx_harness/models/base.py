"""Base pydantic model shared by configuration and stored dataset documents."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model rejecting unknown keys; instances compare by field."""

    model_config = ConfigDict(frozen=True, extra="forbid")
