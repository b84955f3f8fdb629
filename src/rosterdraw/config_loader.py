"""Persist and load CLI rule profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from rosterdraw.config.rules import CategoryRule, parse_category_rules, rules_to_payload


@dataclass
class RulesProfile:
    category_rules: Dict[str, CategoryRule] = field(default_factory=dict)
    column_mapping: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "RulesProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            category_rules=parse_category_rules(data.get("category_rules") or {}),
            column_mapping=data.get("column_mapping", {}),
        )

    def save(self, path: Path) -> None:
        payload = {
            "category_rules": rules_to_payload(self.category_rules),
            "column_mapping": self.column_mapping,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
