"""Turn a distributor partition into named, coloured teams."""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Union

from rosterdraw.config.palette import default_team_name, team_color
from rosterdraw.config.rules import RawRules
from rosterdraw.distribution import DistributionMode, ShuffleSource, distribute
from rosterdraw.models import GeneratedTeam, RosterPlayer, TeamAllocation


logger = logging.getLogger(__name__)


def _team_name(index: int, team_names: Optional[Sequence[Optional[str]]]) -> str:
    if team_names and index < len(team_names):
        candidate = team_names[index]
        if candidate and candidate.strip():
            return candidate.strip()
    return default_team_name(index)


def build_teams(
    players: Sequence[RosterPlayer],
    allocations: Sequence[TeamAllocation],
    team_names: Optional[Sequence[Optional[str]]] = None,
) -> List[GeneratedTeam]:
    """Attach display names, palette colours and player records to a partition."""

    lookup: Mapping[str, RosterPlayer] = {player.player_id: player for player in players}
    teams: List[GeneratedTeam] = []
    for allocation in sorted(allocations, key=lambda item: item.team_index):
        members: List[RosterPlayer] = []
        for player_id in allocation.player_ids:
            if player_id not in lookup:
                raise KeyError(f"Allocated player {player_id!r} is not on the roster")
            members.append(lookup[player_id])
        teams.append(
            GeneratedTeam(
                team_index=allocation.team_index,
                name=_team_name(allocation.team_index, team_names),
                color=team_color(allocation.team_index),
                players=members,
            )
        )
    if team_names and len(team_names) > len(teams):
        logger.info("Ignoring %d unused team name(s)", len(team_names) - len(teams))
    return teams


def generate_teams(
    players: Sequence[RosterPlayer],
    number_of_teams: int,
    mode: Union[DistributionMode, str] = DistributionMode.UNIFORM,
    category_rules: RawRules = None,
    team_names: Optional[Sequence[Optional[str]]] = None,
    *,
    rng: Optional[ShuffleSource] = None,
    seed: Optional[int] = None,
) -> List[GeneratedTeam]:
    """Distribute a roster and return persistence-ready teams.

    The caller owns persistence and is expected to replace any existing teams
    for the tournament with the returned ones in a single transaction.
    """

    allocations = distribute(
        players,
        number_of_teams,
        mode,
        category_rules,
        rng=rng,
        seed=seed,
    )
    return build_teams(players, allocations, team_names)
