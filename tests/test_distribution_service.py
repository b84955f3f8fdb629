import random
from collections import Counter

import pytest

from rosterdraw.distribution import (
    DistributionMode,
    InsufficientPlayers,
    InvalidCategoryRule,
    InvalidTeamCount,
    distribute,
    distribute_by_category,
    distribute_uniform,
    find_category_shortfalls,
)
from rosterdraw.models import RosterPlayer


class _KeepOrder:
    """Shuffle source that leaves lists untouched."""

    def shuffle(self, items):
        return None


class _RecordingRng:
    def __init__(self):
        self.calls = 0

    def shuffle(self, items):
        self.calls += 1


def _players(count: int, category: str | None = None, prefix: str = "p") -> list[RosterPlayer]:
    return [RosterPlayer(player_id=f"{prefix}{i}", category=category) for i in range(count)]


def _ids(players) -> list[str]:
    return sorted(player.player_id for player in players)


def _assigned_ids(teams) -> list[str]:
    return sorted(player_id for team in teams for player_id in team.player_ids)


def _category_counts(teams, roster, category):
    lookup = {player.player_id: player.category for player in roster}
    return [sum(1 for pid in team.player_ids if lookup[pid] == category) for team in teams]


def test_uniform_nine_players_three_teams():
    roster = _players(9)
    teams = distribute_uniform(roster, 3, seed=1)

    assert [team.team_index for team in teams] == [0, 1, 2]
    assert [len(team) for team in teams] == [3, 3, 3]
    assert _assigned_ids(teams) == _ids(roster)


def test_uniform_ten_players_three_teams():
    teams = distribute_uniform(_players(10), 3, seed=2)
    assert sorted(len(team) for team in teams) == [3, 3, 4]


def test_uniform_deals_round_robin_after_shuffle():
    teams = distribute_uniform(_players(5), 2, rng=_KeepOrder())

    assert teams[0].player_ids == ["p0", "p2", "p4"]
    assert teams[1].player_ids == ["p1", "p3"]


def test_uniform_does_not_mutate_input():
    roster = _players(8)
    before = list(roster)
    distribute_uniform(roster, 2, seed=3)
    assert roster == before


def test_categorized_bowlers_spread_evenly():
    roster = _players(6, "Bowler", prefix="b") + _players(6, None, prefix="u")
    teams = distribute_by_category(roster, 3, {"Bowler": {"min": 2}}, seed=11)

    assert [len(team) for team in teams] == [4, 4, 4]
    assert _category_counts(teams, roster, "Bowler") == [2, 2, 2]
    assert _category_counts(teams, roster, None) == [2, 2, 2]
    assert _assigned_ids(teams) == _ids(roster)


def test_categorized_short_category_fills_first_teams():
    roster = _players(5, "Captain", prefix="c")
    teams = distribute_by_category(roster, 3, {"Captain": {"min": 2}}, seed=5)

    assert [len(team) for team in teams] == [2, 2, 1]
    assert _assigned_ids(teams) == _ids(roster)


def test_categorized_shortfall_is_logged(caplog):
    roster = _players(5, "Captain", prefix="c")
    with caplog.at_level("WARNING", logger="rosterdraw.distribution.service"):
        distribute_by_category(roster, 3, {"Captain": 2}, seed=5)
    assert "Captain" in caplog.text


def test_balancing_goes_to_smallest_team_lowest_index_first():
    roster = [
        RosterPlayer(player_id="a1", category="A"),
        RosterPlayer(player_id="u1"),
        RosterPlayer(player_id="u2"),
    ]
    teams = distribute_by_category(roster, 2, {"A": 1}, rng=_KeepOrder())

    assert teams[0].player_ids == ["a1", "u2"]
    assert teams[1].player_ids == ["u1"]


def test_unruled_and_zero_min_categories_are_only_balanced():
    roster = _players(4, "Keeper", prefix="k") + _players(2, "Batsman", prefix="b")
    teams = distribute_by_category(roster, 2, {"Keeper": 0}, seed=9)

    assert [len(team) for team in teams] == [3, 3]
    assert _assigned_ids(teams) == _ids(roster)


def test_rule_for_missing_category_is_noop():
    roster = _players(4)
    teams = distribute_by_category(roster, 2, {"Captain": 1}, seed=4)
    assert [len(team) for team in teams] == [2, 2]


def test_literal_uncategorized_label_does_not_capture_none():
    roster = _players(2, "uncategorized", prefix="x") + _players(4, None, prefix="n")
    teams = distribute_by_category(roster, 2, {"uncategorized": 1}, seed=8)

    assert _category_counts(teams, roster, "uncategorized") == [1, 1]
    assert _category_counts(teams, roster, None) == [2, 2]


def test_distribute_accepts_contract_dicts():
    payload = [{"id": f"p{i}", "category": "Bowler" if i < 4 else None} for i in range(8)]
    teams = distribute(payload, 2, "categorized", {"Bowler": {"min": 2}}, seed=1)

    assert [len(team) for team in teams] == [4, 4]
    assert [team.model_dump(by_alias=True)["teamIndex"] for team in teams] == [0, 1]


def test_distribute_dispatches_modes():
    roster = _players(6, "Bowler", prefix="b") + _players(1, None, prefix="u")
    uniform = distribute(roster, 2, DistributionMode.UNIFORM, {"Bowler": 3}, rng=_KeepOrder())
    assert uniform[0].player_ids == ["b0", "b2", "b4", "u0"]

    categorized = distribute(roster, 2, "CATEGORIZED", {"Bowler": 3}, rng=_KeepOrder())
    assert categorized[0].player_ids == ["b0", "b1", "b2", "u0"]
    assert categorized[1].player_ids == ["b3", "b4", "b5"]


def test_categorized_without_rules_balances_everyone():
    teams = distribute(_players(7), 3, "categorized", seed=3)
    assert sorted(len(team) for team in teams) == [2, 2, 3]


def test_unknown_mode_rejected():
    with pytest.raises(ValueError, match="Unknown distribution mode"):
        distribute(_players(4), 2, "snake")


@pytest.mark.parametrize("count", [1, 0, -3, True, 2.5, "3"])
def test_invalid_team_count(count):
    rng = _RecordingRng()
    with pytest.raises(InvalidTeamCount):
        distribute_uniform(_players(6), count, rng=rng)
    assert rng.calls == 0


def test_insufficient_players():
    rng = _RecordingRng()
    with pytest.raises(InsufficientPlayers) as excinfo:
        distribute_by_category(_players(3), 5, {}, rng=rng)
    assert excinfo.value.player_count == 3
    assert rng.calls == 0


def test_negative_rule_rejected_before_shuffling():
    rng = _RecordingRng()
    with pytest.raises(InvalidCategoryRule):
        distribute_by_category(_players(6, "Bowler"), 2, {"Bowler": {"min": -1}}, rng=rng)
    assert rng.calls == 0


def test_rng_and_seed_are_exclusive():
    with pytest.raises(ValueError):
        distribute_uniform(_players(4), 2, rng=random.Random(1), seed=1)


def test_seed_makes_draw_reproducible():
    roster = _players(12, "Bowler", prefix="b") + _players(9, None, prefix="u")
    first = distribute(roster, 4, "categorized", {"Bowler": 2}, seed=1234)
    second = distribute(roster, 4, "categorized", {"Bowler": 2}, rng=random.Random(1234))
    assert first == second


def test_unseeded_draws_vary():
    roster = _players(9)
    placements = set()
    for _ in range(100):
        teams = distribute_uniform(roster, 3)
        placements.add(next(team.team_index for team in teams if "p0" in team.player_ids))
    assert len(placements) > 1


def test_partition_properties_over_random_rosters():
    gen = random.Random(2024)
    labels = ["Bowler", "Batsman", "Keeper", None]
    for trial in range(60):
        n_teams = gen.randint(2, 6)
        size = gen.randint(n_teams, 30)
        roster = [
            RosterPlayer(player_id=f"t{trial}-{i}", category=gen.choice(labels))
            for i in range(size)
        ]

        uniform = distribute_uniform(roster, n_teams, seed=trial)
        sizes = [len(team) for team in uniform]
        assert len(uniform) == n_teams
        assert max(sizes) - min(sizes) <= 1
        assert _assigned_ids(uniform) == _ids(roster)

        rules = {"Bowler": gen.randint(0, 2), "Keeper": gen.randint(0, 1)}
        categorized = distribute_by_category(roster, n_teams, rules, seed=trial)
        assert len(categorized) == n_teams
        assert _assigned_ids(categorized) == _ids(roster)

        supply = Counter(player.category for player in roster)
        for label, minimum in rules.items():
            if minimum and supply[label] >= minimum * n_teams:
                assert all(count >= minimum for count in _category_counts(categorized, roster, label))


def test_find_category_shortfalls_reports_captain_case():
    roster = _players(5, "Captain", prefix="c") + _players(6, "Bowler", prefix="b")
    shortfalls = find_category_shortfalls(roster, 3, {"Captain": {"min": 2}, "Bowler": 2})

    assert len(shortfalls) == 1
    shortfall = shortfalls[0]
    assert shortfall.category == "Captain"
    assert shortfall.available == 5
    assert shortfall.required == 6
    assert shortfall.teams_short == 1


def test_find_category_shortfalls_missing_category():
    shortfalls = find_category_shortfalls(_players(4), 2, {"Keeper": 1})
    assert shortfalls[0].available == 0
    assert shortfalls[0].teams_short == 2


def test_find_category_shortfalls_validates_team_count():
    with pytest.raises(InvalidTeamCount):
        find_category_shortfalls(_players(4), 1, {"Keeper": 1})


def test_short_category_can_leave_later_teams_empty():
    # Phase one hands the whole pool to team 0 and nothing remains to balance.
    roster = _players(3, "Captain", prefix="c")
    teams = distribute_by_category(roster, 3, {"Captain": 3}, seed=1)

    assert [len(team) for team in teams] == [3, 0, 0]
    assert _assigned_ids(teams) == _ids(roster)
    assert find_category_shortfalls(roster, 3, {"Captain": 3})[0].teams_short == 2
