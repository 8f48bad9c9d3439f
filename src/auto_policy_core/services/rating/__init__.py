"""Rating services package.

This package provides the auto premium calculations:
- Base premium from category and usage tariffs
- Risk adjustment factors
- Bonus-malus experience rating
- Coverage breakdown of the final premium
"""

from .bonus_malus import BonusMalusCalculator
from .calculators import (
    COVERAGE_ALLOCATIONS,
    PremiumCalculator,
    engine_power_factor,
    experience_factor,
    mileage_factor,
    round_currency,
)

__all__ = [
    # Calculators
    "PremiumCalculator",
    "BonusMalusCalculator",
    # Factor tables
    "COVERAGE_ALLOCATIONS",
    "engine_power_factor",
    "experience_factor",
    "mileage_factor",
    "round_currency",
]
