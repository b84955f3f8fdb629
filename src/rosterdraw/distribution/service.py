"""Randomized team distribution for a tournament roster."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

from rosterdraw.config.rules import CategoryRule, RawRules, parse_category_rules
from rosterdraw.exceptions import InsufficientPlayers, InvalidTeamCount
from rosterdraw.models import RosterPlayer, TeamAllocation


logger = logging.getLogger(__name__)


class ShuffleSource(Protocol):
    def shuffle(self, x: List[Any]) -> None: ...


class DistributionMode(str, Enum):
    UNIFORM = "uniform"
    CATEGORIZED = "categorized"


@dataclass(frozen=True)
class CategoryShortfall:
    """Category whose supply cannot give every team its configured minimum."""

    category: str
    min_per_team: int
    available: int
    required: int
    teams_short: int


PlayerInput = Union[RosterPlayer, Mapping[str, Any]]


def _coerce_player(player: PlayerInput) -> RosterPlayer:
    if isinstance(player, RosterPlayer):
        return player
    if isinstance(player, Mapping):
        data = dict(player)
        if "player_id" not in data and "id" in data:
            data["player_id"] = data.pop("id")
        return RosterPlayer.model_validate(data)
    raise TypeError(f"Unsupported player type: {type(player).__name__}")


def _coerce_players(players: Sequence[PlayerInput]) -> List[RosterPlayer]:
    return [_coerce_player(player) for player in players]


def _check_team_count(number_of_teams: object) -> int:
    if isinstance(number_of_teams, bool) or not isinstance(number_of_teams, int):
        raise InvalidTeamCount(number_of_teams)
    if number_of_teams < 2:
        raise InvalidTeamCount(number_of_teams)
    return number_of_teams


def _check_preconditions(players: Sequence[RosterPlayer], number_of_teams: object) -> int:
    n_teams = _check_team_count(number_of_teams)
    if len(players) < n_teams:
        raise InsufficientPlayers(len(players), n_teams)
    return n_teams


def _resolve_rng(rng: Optional[ShuffleSource], seed: Optional[int]) -> ShuffleSource:
    if rng is not None and seed is not None:
        raise ValueError("Pass either rng or seed, not both")
    if rng is not None:
        return rng
    return random.Random(seed)


def _to_allocations(buckets: List[List[RosterPlayer]]) -> List[TeamAllocation]:
    return [
        TeamAllocation(team_index=index, player_ids=[player.player_id for player in bucket])
        for index, bucket in enumerate(buckets)
    ]


def _group_by_category(players: Sequence[RosterPlayer]) -> Dict[Optional[str], List[RosterPlayer]]:
    # None is the uncategorized group and never matches a rule label.
    pools: Dict[Optional[str], List[RosterPlayer]] = {}
    for player in players:
        pools.setdefault(player.category, []).append(player)
    return pools


def find_category_shortfalls(
    players: Sequence[PlayerInput],
    number_of_teams: int,
    category_rules: RawRules,
) -> List[CategoryShortfall]:
    """List ruled categories that cannot supply ``min * number_of_teams`` players.

    Callers wanting a strict guarantee should reject the request when this
    returns anything; the distributor itself only under-fills later teams.
    """

    n_teams = _check_team_count(number_of_teams)
    rules = parse_category_rules(category_rules)
    pools = _group_by_category(_coerce_players(players))

    shortfalls: List[CategoryShortfall] = []
    for label, rule in rules.items():
        if not rule.is_constraining:
            continue
        available = len(pools.get(label, ()))
        required = rule.min_per_team * n_teams
        if available >= required:
            continue
        full_teams = available // rule.min_per_team
        shortfalls.append(
            CategoryShortfall(
                category=label,
                min_per_team=rule.min_per_team,
                available=available,
                required=required,
                teams_short=n_teams - full_teams,
            )
        )
    return shortfalls


def distribute_uniform(
    players: Sequence[PlayerInput],
    number_of_teams: int,
    *,
    rng: Optional[ShuffleSource] = None,
    seed: Optional[int] = None,
) -> List[TeamAllocation]:
    """Shuffle the roster and deal it round-robin into ``number_of_teams`` teams.

    Team sizes differ by at most one regardless of the shuffle outcome.
    """

    roster = _coerce_players(players)
    n_teams = _check_preconditions(roster, number_of_teams)
    generator = _resolve_rng(rng, seed)

    shuffled = list(roster)
    generator.shuffle(shuffled)

    buckets: List[List[RosterPlayer]] = [[] for _ in range(n_teams)]
    for index, player in enumerate(shuffled):
        buckets[index % n_teams].append(player)

    logger.debug("Distributed %d players uniformly into %d teams", len(roster), n_teams)
    return _to_allocations(buckets)


def _smallest_team(buckets: List[List[RosterPlayer]]) -> int:
    # min() keeps the first minimum, so ties go to the lowest index.
    return min(range(len(buckets)), key=lambda index: len(buckets[index]))


def distribute_by_category(
    players: Sequence[PlayerInput],
    number_of_teams: int,
    category_rules: RawRules,
    *,
    rng: Optional[ShuffleSource] = None,
    seed: Optional[int] = None,
) -> List[TeamAllocation]:
    """Distribute players honouring per-category minimums, then balance sizes.

    Phase one walks the ruled categories in rule order. Each category pool is
    shuffled and up to ``min`` players are handed to each team in index order
    until the pool runs dry, so an under-supplied category leaves the last
    teams short. Phase two shuffles every unassigned player (uncategorized,
    unruled categories and category surplus) and gives each one to the
    currently smallest team.
    """

    roster = _coerce_players(players)
    n_teams = _check_preconditions(roster, number_of_teams)
    rules: Dict[str, CategoryRule] = parse_category_rules(category_rules)
    generator = _resolve_rng(rng, seed)

    for shortfall in find_category_shortfalls(roster, n_teams, rules):
        logger.warning(
            "Category %r has %d players but %d teams need %d each; %d team(s) will be short",
            shortfall.category,
            shortfall.available,
            n_teams,
            shortfall.min_per_team,
            shortfall.teams_short,
        )

    pools = _group_by_category(roster)
    buckets: List[List[RosterPlayer]] = [[] for _ in range(n_teams)]

    for label, rule in rules.items():
        if not rule.is_constraining:
            continue
        pool = pools.get(label)
        if not pool:
            continue
        generator.shuffle(pool)
        for bucket in buckets:
            if not pool:
                break
            bucket.extend(pool[: rule.min_per_team])
            del pool[: rule.min_per_team]

    remaining = [player for pool in pools.values() for player in pool]
    generator.shuffle(remaining)
    for player in remaining:
        buckets[_smallest_team(buckets)].append(player)

    logger.debug(
        "Distributed %d players into %d teams with %d category rule(s)",
        len(roster),
        n_teams,
        len(rules),
    )
    return _to_allocations(buckets)


def _resolve_mode(mode: Union[DistributionMode, str]) -> DistributionMode:
    if isinstance(mode, DistributionMode):
        return mode
    try:
        return DistributionMode(str(mode).lower())
    except ValueError:
        choices = ", ".join(item.value for item in DistributionMode)
        raise ValueError(f"Unknown distribution mode {mode!r}; expected one of: {choices}") from None


def distribute(
    players: Sequence[PlayerInput],
    number_of_teams: int,
    mode: Union[DistributionMode, str] = DistributionMode.UNIFORM,
    category_rules: RawRules = None,
    *,
    rng: Optional[ShuffleSource] = None,
    seed: Optional[int] = None,
) -> List[TeamAllocation]:
    """Partition ``players`` into ``number_of_teams`` teams.

    ``category_rules`` is only consulted in categorized mode.
    """

    resolved = _resolve_mode(mode)
    if resolved is DistributionMode.CATEGORIZED:
        return distribute_by_category(
            players,
            number_of_teams,
            category_rules or {},
            rng=rng,
            seed=seed,
        )
    return distribute_uniform(players, number_of_teams, rng=rng, seed=seed)
