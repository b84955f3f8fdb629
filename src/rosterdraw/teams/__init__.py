"""Team building and export utilities."""

from .builder import build_teams, generate_teams
from .export import TEAM_EXPORT_HEADERS, export_teams_to_csv, teams_to_payload

__all__ = [
    "TEAM_EXPORT_HEADERS",
    "build_teams",
    "generate_teams",
    "export_teams_to_csv",
    "teams_to_payload",
]
