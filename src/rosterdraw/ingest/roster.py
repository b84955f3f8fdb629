"""Helpers to load roster CSVs and emit canonical players."""

from __future__ import annotations

import csv
import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel

from rosterdraw.models import RosterPlayer


logger = logging.getLogger(__name__)

DEFAULT_ROSTER_MAPPING = {
    "player_id": "player_id",
    "name": "name",
    "category": "category",
}

_REQUIRED_KEYS = ("player_id",)


class RosterRow(BaseModel):
    raw_id: Optional[str] = None
    raw_name: Optional[str] = None
    raw_category: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Optional[str]], mapping: Mapping[str, str]) -> "RosterRow":
        def extract(spec: Optional[str | Sequence[str]]) -> Optional[str]:
            if spec is None:
                return None
            if isinstance(spec, str):
                value = row.get(spec)
                if value is None:
                    return None
                return value.strip() or None
            parts = [(row.get(col) or "").strip() for col in spec]
            joined = " ".join(part for part in parts if part)
            return joined or None

        return cls(
            raw_id=extract(_parse_spec(mapping.get("player_id"))),
            raw_name=extract(_parse_spec(mapping.get("name"))),
            raw_category=extract(_parse_spec(mapping.get("category"))),
        )


@dataclass
class RosterReport:
    total_rows: int
    loaded_players: int
    duplicate_ids: List[str] = field(default_factory=list)
    skipped_rows: List[int] = field(default_factory=list)
    categories: Dict[Optional[str], int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "loaded_players": self.loaded_players,
            "duplicate_ids": list(self.duplicate_ids),
            "skipped_rows": list(self.skipped_rows),
            "categories": {
                ("" if label is None else label): count for label, count in self.categories.items()
            },
        }


def _parse_spec(spec: Optional[str]) -> Optional[str | Tuple[str, ...]]:
    if spec is None:
        return None
    if "|" in spec:
        return tuple(part.strip() for part in spec.split("|") if part.strip())
    return spec.strip()


def _spec_columns(spec: Optional[str]) -> Tuple[str, ...]:
    parsed = _parse_spec(spec)
    if parsed is None:
        return ()
    if isinstance(parsed, str):
        return (parsed,)
    return parsed


def _resolve_mapping(mapping: Mapping[str, str] | None) -> Dict[str, str]:
    resolved = dict(DEFAULT_ROSTER_MAPPING)
    if mapping:
        unknown = sorted(set(mapping) - set(DEFAULT_ROSTER_MAPPING))
        if unknown:
            raise ValueError(
                f"Unknown roster mapping key(s): {', '.join(unknown)}; expected one of: "
                + ", ".join(DEFAULT_ROSTER_MAPPING)
            )
        resolved.update(mapping)
    return resolved


def _validate_columns(
    fieldnames: Sequence[str],
    resolved: Mapping[str, str],
    explicit: Mapping[str, str] | None,
) -> None:
    available = set(fieldnames)
    # Default optional columns may be absent; anything the caller named must exist.
    checked_keys = set(_REQUIRED_KEYS) | set(explicit or {})
    for key in sorted(checked_keys):
        for column in _spec_columns(resolved.get(key)):
            if column not in available:
                raise ValueError(
                    f"Roster column {column!r} (mapped to {key!r}) not found; available columns: "
                    + ", ".join(fieldnames)
                )


def load_roster_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[RosterRow]:
    resolved = _resolve_mapping(mapping)
    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            raise ValueError(f"Roster file {path} has no header row")
        _validate_columns(reader.fieldnames, resolved, mapping)
        rows = [RosterRow.from_mapping(row, resolved) for row in reader]
    return rows


def rows_to_players(rows: Sequence[RosterRow]) -> Tuple[List[RosterPlayer], RosterReport]:
    """Build a de-duplicated roster; the first row for a given id wins."""

    players: List[RosterPlayer] = []
    seen: set[str] = set()
    duplicates: List[str] = []
    skipped: List[int] = []

    for line_number, row in enumerate(rows, start=1):
        if not row.raw_id:
            skipped.append(line_number)
            continue
        if row.raw_id in seen:
            if row.raw_id not in duplicates:
                duplicates.append(row.raw_id)
            continue
        seen.add(row.raw_id)
        players.append(
            RosterPlayer(player_id=row.raw_id, name=row.raw_name, category=row.raw_category)
        )

    if duplicates:
        logger.warning("Ignoring repeated roster rows for player ids: %s", ", ".join(duplicates))
    if skipped:
        logger.warning("Skipping %d roster row(s) without a player id", len(skipped))

    report = RosterReport(
        total_rows=len(rows),
        loaded_players=len(players),
        duplicate_ids=duplicates,
        skipped_rows=skipped,
        categories=dict(Counter(player.category for player in players)),
    )
    return players, report


def load_players_from_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
) -> Tuple[List[RosterPlayer], RosterReport]:
    return rows_to_players(load_roster_csv(path, mapping=mapping))
