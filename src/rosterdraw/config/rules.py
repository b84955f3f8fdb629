"""Per-category team composition rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Union

from rosterdraw.exceptions import InvalidCategoryRule


@dataclass(frozen=True)
class CategoryRule:
    category: str
    min_per_team: int = 0

    @property
    def is_constraining(self) -> bool:
        return self.min_per_team > 0


RawRuleValue = Union[int, Mapping[str, Any], CategoryRule]
RawRules = Union[Mapping[str, RawRuleValue], Iterable[CategoryRule], None]


def _coerce_min(category: str, value: Any) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCategoryRule(category, f"minimum must be an integer, got {value!r}")
    if value < 0:
        raise InvalidCategoryRule(category, f"minimum must be >= 0, got {value}")
    return value


def _rule_from_value(category: str, value: RawRuleValue) -> CategoryRule:
    if isinstance(value, CategoryRule):
        return CategoryRule(category=category, min_per_team=_coerce_min(category, value.min_per_team))
    if isinstance(value, Mapping):
        if "min" in value:
            raw_min = value["min"]
        else:
            raw_min = value.get("min_per_team", 0)
        if raw_min is None:
            raw_min = 0
        return CategoryRule(category=category, min_per_team=_coerce_min(category, raw_min))
    return CategoryRule(category=category, min_per_team=_coerce_min(category, value))


def _clean_label(label: Any) -> str:
    if not isinstance(label, str) or not label.strip():
        raise InvalidCategoryRule(label, "category label must be a non-empty string")
    return label.strip()


def parse_category_rules(raw: RawRules) -> Dict[str, CategoryRule]:
    """Normalize user-supplied rules into ``{label: CategoryRule}``.

    Accepts ``{label: {"min": k}}``, ``{label: {"min_per_team": k}}``,
    ``{label: k}`` or an iterable of :class:`CategoryRule`. Insertion order is
    preserved since the distributor fills categories in that order.
    """

    if raw is None:
        return {}

    rules: Dict[str, CategoryRule] = {}
    if isinstance(raw, Mapping):
        for label, value in raw.items():
            category = _clean_label(label)
            rules[category] = _rule_from_value(category, value)
        return rules

    for item in raw:
        if not isinstance(item, CategoryRule):
            raise TypeError("category rules must be a mapping or an iterable of CategoryRule")
        category = _clean_label(item.category)
        rules[category] = _rule_from_value(category, item)
    return rules


def get_rule(rules: Mapping[str, CategoryRule], category: str) -> CategoryRule:
    """Fetch the rule for a category, raising KeyError if missing."""

    if category not in rules:
        raise KeyError(f"No rule configured for category={category!r}")
    return rules[category]


def rules_to_payload(rules: Mapping[str, CategoryRule]) -> Dict[str, Dict[str, int]]:
    return {label: {"min": rule.min_per_team} for label, rule in rules.items()}
