"""Command-line interface for splitting a roster CSV into teams."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from rosterdraw.config import default_seed, default_team_count, parse_category_rules
from rosterdraw.config_loader import RulesProfile
from rosterdraw.distribution import (
    DistributionError,
    DistributionMode,
    distribute,
    find_category_shortfalls,
)
from rosterdraw.ingest import load_players_from_csv
from rosterdraw.teams import build_teams, export_teams_to_csv, teams_to_payload


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split a tournament roster into teams")
    parser.add_argument("roster", type=Path, help="Path to roster CSV")
    parser.add_argument(
        "--teams",
        type=int,
        default=None,
        help="Number of teams to generate (default from ROSTERDRAW_DEFAULT_TEAMS, else 2)",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in DistributionMode],
        default=None,
        help="Distribution mode (defaults to categorized when rules are given)",
    )
    parser.add_argument(
        "--rule",
        action="append",
        default=[],
        help="Category minimum per team (e.g., Bowler=2)",
    )
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for roster CSV columns (e.g., name=First Name|Last Name)",
    )
    parser.add_argument(
        "--team-name",
        action="append",
        default=[],
        help="Display name for the next team, in order",
    )
    parser.add_argument("--load-profile", type=Path, help="Load rules/column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save rules/column mapping JSON", default=None)
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible draw")
    parser.add_argument("--output", type=Path, default=Path("teams.csv"), help="Output CSV path")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write roster/teams summary JSON",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Refuse to draw when a category cannot meet its minimum on every team",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress at INFO level")
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _parse_rules(entries: list[str]) -> dict[str, int]:
    rules: dict[str, int] = {}
    for label, value in _parse_mapping(entries).items():
        try:
            rules[label] = int(value)
        except ValueError:
            raise ValueError(f"Invalid rule entry '{label}={value}', minimum must be an integer") from None
    return rules


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        column_mapping = _parse_mapping(args.column)
        category_rules = parse_category_rules(_parse_rules(args.rule))
        if args.load_profile:
            profile = RulesProfile.load(args.load_profile)
            column_mapping = profile.column_mapping | column_mapping
            category_rules = profile.category_rules | category_rules
    except (OSError, ValueError) as exc:
        raise SystemExit(f"error: {exc}") from exc

    if args.save_profile:
        RulesProfile(category_rules, column_mapping).save(args.save_profile)
        print(f"Saved rules profile to {args.save_profile}")

    try:
        players, report = load_players_from_csv(args.roster, mapping=column_mapping or None)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"error: {exc}") from exc
    print(f"Loaded {report.loaded_players}/{report.total_rows} roster rows")
    if report.duplicate_ids:
        preview = ", ".join(report.duplicate_ids[:5])
        more = len(report.duplicate_ids) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Duplicate player ids ignored: {preview}{suffix}")

    number_of_teams = args.teams if args.teams is not None else default_team_count()
    mode = args.mode or (DistributionMode.CATEGORIZED.value if category_rules else DistributionMode.UNIFORM.value)
    seed = args.seed if args.seed is not None else default_seed()

    try:
        shortfalls = []
        if mode == DistributionMode.CATEGORIZED.value:
            shortfalls = find_category_shortfalls(players, number_of_teams, category_rules)
        if shortfalls and args.strict:
            details = "; ".join(
                f"{item.category} has {item.available}, needs {item.required}" for item in shortfalls
            )
            raise SystemExit(f"error: category minimums cannot be met: {details}")
        allocations = distribute(players, number_of_teams, mode, category_rules, seed=seed)
    except DistributionError as exc:
        raise SystemExit(f"error: {exc}") from exc

    teams = build_teams(players, allocations, args.team_name)
    for team in teams:
        print(f"{team.name} ({team.color}): {len(team.players)} players")
    for item in shortfalls:
        print(f"Category {item.category} short on {item.teams_short} team(s): {item.available}/{item.required} players")

    args.output.write_text(export_teams_to_csv(teams), encoding="utf-8")
    print(f"Wrote teams to {args.output}")

    if args.report:
        report_payload = {
            "mode": mode,
            "seed": seed,
            "roster": report.to_dict(),
            "shortfalls": [
                {
                    "category": item.category,
                    "min_per_team": item.min_per_team,
                    "available": item.available,
                    "required": item.required,
                    "teams_short": item.teams_short,
                }
                for item in shortfalls
            ],
            "teams": teams_to_payload(teams),
        }
        args.report.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")
        print(f"Wrote report to {args.report}")


if __name__ == "__main__":
    main()
