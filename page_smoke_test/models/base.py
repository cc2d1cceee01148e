"""Base model configuration for all configuration structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model that rejects unknown keys, so config typos fail loudly."""

    model_config = ConfigDict(frozen=True, extra="forbid")
