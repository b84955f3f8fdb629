"""Team distributor: uniform and category-constrained partitions."""

from rosterdraw.exceptions import (
    DistributionError,
    InsufficientPlayers,
    InvalidCategoryRule,
    InvalidTeamCount,
)

from .service import (
    CategoryShortfall,
    DistributionMode,
    ShuffleSource,
    distribute,
    distribute_by_category,
    distribute_uniform,
    find_category_shortfalls,
)

__all__ = [
    "CategoryShortfall",
    "DistributionError",
    "DistributionMode",
    "InsufficientPlayers",
    "InvalidCategoryRule",
    "InvalidTeamCount",
    "ShuffleSource",
    "distribute",
    "distribute_by_category",
    "distribute_uniform",
    "find_category_shortfalls",
]
