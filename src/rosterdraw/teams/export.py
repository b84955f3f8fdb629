"""CSV and JSON export helpers for generated teams."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Any, Dict, List, Sequence

from rosterdraw.models import GeneratedTeam


TEAM_EXPORT_HEADERS = ("team_index", "team_name", "color", "player_id", "name", "category")


def export_teams_to_csv(teams: Sequence[GeneratedTeam]) -> str:
    """One row per team member, ordered by team index."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(TEAM_EXPORT_HEADERS)
    for team in sorted(teams, key=lambda item: item.team_index):
        for player in team.players:
            writer.writerow([
                team.team_index,
                team.name,
                team.color,
                player.player_id,
                player.name or "",
                player.category or "",
            ])
    return buffer.getvalue()


def teams_to_payload(teams: Sequence[GeneratedTeam]) -> List[Dict[str, Any]]:
    return [
        {
            "teamIndex": team.team_index,
            "name": team.name,
            "color": team.color,
            "playerIds": team.player_ids,
        }
        for team in sorted(teams, key=lambda item: item.team_index)
    ]


__all__ = [
    "TEAM_EXPORT_HEADERS",
    "export_teams_to_csv",
    "teams_to_payload",
]
