"""Configuration helpers for category rules, team display and env defaults."""

from .palette import TEAM_COLORS, default_team_name, team_color
from .rules import CategoryRule, get_rule, parse_category_rules, rules_to_payload
from .settings import default_seed, default_team_count

__all__ = [
    "CategoryRule",
    "TEAM_COLORS",
    "default_seed",
    "default_team_count",
    "default_team_name",
    "get_rule",
    "parse_category_rules",
    "rules_to_payload",
    "team_color",
]
