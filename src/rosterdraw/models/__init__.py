"""Roster and team models shared across ingest, distribution and export."""

from .player import RosterPlayer
from .team import GeneratedTeam, TeamAllocation

__all__ = ["RosterPlayer", "TeamAllocation", "GeneratedTeam"]
