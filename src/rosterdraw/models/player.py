"""Canonical player model consumed by the team distributor."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class RosterPlayer(BaseModel):
    """Tournament player eligible for team assignment."""

    player_id: str = Field(..., min_length=1)
    name: Optional[str] = None
    category: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category_is_none(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @property
    def display_name(self) -> str:
        return self.name or self.player_id
