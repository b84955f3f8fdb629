"""Precondition errors raised before any team distribution work starts."""

from __future__ import annotations


class DistributionError(ValueError):
    """Base class for caller-correctable distribution input problems."""


class InvalidTeamCount(DistributionError):
    """Raised when fewer than two teams (or a non-integer count) are requested."""

    def __init__(self, number_of_teams: object):
        super().__init__(f"number_of_teams must be an integer >= 2, got {number_of_teams!r}")
        self.number_of_teams = number_of_teams


class InsufficientPlayers(DistributionError):
    """Raised when the roster cannot give every team at least one player."""

    def __init__(self, player_count: int, number_of_teams: int):
        super().__init__(
            f"Not enough players: {player_count} players for {number_of_teams} teams"
        )
        self.player_count = player_count
        self.number_of_teams = number_of_teams


class InvalidCategoryRule(DistributionError):
    """Raised when a category rule carries a blank label or a bad minimum."""

    def __init__(self, category: object, message: str):
        super().__init__(f"Invalid rule for category {category!r}: {message}")
        self.category = category


__all__ = [
    "DistributionError",
    "InvalidTeamCount",
    "InsufficientPlayers",
    "InvalidCategoryRule",
]
