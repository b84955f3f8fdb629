"""Team shapes produced by the distributor and the team builder."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import RosterPlayer


class TeamAllocation(BaseModel):
    """One bucket of a partition, as returned by the distributor."""

    team_index: int = Field(..., ge=0, alias="teamIndex")
    player_ids: List[str] = Field(default_factory=list, alias="playerIds")

    model_config = ConfigDict(populate_by_name=True)

    def __len__(self) -> int:
        return len(self.player_ids)


class GeneratedTeam(BaseModel):
    """Team ready to be persisted: display name, colour and members."""

    team_index: int = Field(..., ge=0)
    name: str
    color: str
    players: List[RosterPlayer] = Field(default_factory=list)

    @property
    def player_ids(self) -> List[str]:
        return [player.player_id for player in self.players]
