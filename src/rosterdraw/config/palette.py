"""Display defaults applied to generated teams."""

from __future__ import annotations

from typing import Tuple


TEAM_COLORS: Tuple[str, ...] = (
    "#ef4444",  # red
    "#3b82f6",  # blue
    "#22c55e",  # green
    "#eab308",  # yellow
    "#a855f7",  # purple
    "#f97316",  # orange
    "#06b6d4",  # cyan
    "#ec4899",  # pink
    "#84cc16",  # lime
    "#6366f1",  # indigo
)


def team_color(index: int) -> str:
    """Return the palette colour for a team index, cycling past the end."""

    if index < 0:
        raise ValueError(f"team index must be >= 0, got {index}")
    return TEAM_COLORS[index % len(TEAM_COLORS)]


def default_team_name(index: int) -> str:
    return f"Team {index + 1}"
