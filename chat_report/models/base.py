"""Immutable base model shared by results, options and payloads."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Frozen model; composition never mutates what it is given."""

    model_config = ConfigDict(frozen=True)
