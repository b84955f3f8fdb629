"""Environment-driven defaults for the command-line tooling."""

from __future__ import annotations

import logging
import os
from typing import Optional


logger = logging.getLogger(__name__)

_SEED_ENV = "ROSTERDRAW_SEED"
_DEFAULT_TEAMS_ENV = "ROSTERDRAW_DEFAULT_TEAMS"

_DEFAULT_TEAMS = 2


def _env_int(name: str, default: Optional[int], *, min_value: int | None = None) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %s", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def default_seed() -> Optional[int]:
    """Seed used when the CLI is not given ``--seed``; ``None`` means unseeded."""

    return _env_int(_SEED_ENV, None)


def default_team_count() -> int:
    value = _env_int(_DEFAULT_TEAMS_ENV, _DEFAULT_TEAMS, min_value=2)
    return _DEFAULT_TEAMS if value is None else value
