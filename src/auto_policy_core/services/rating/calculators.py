# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Premium calculation pipeline for auto policies.

Stages, each callable on its own:

1. base premium from the category/usage tariffs, coverage and vehicle age
2. adjustment factors from the driver and vehicle risk characteristics
3. adjusted premium (base times the product of the factors)
4. final premium (adjusted times the bonus-malus coefficient)
5. informational coverage breakdown of the final premium

Every stage rounds half-up to the cent. A missing tariff aborts the whole
calculation with an ``Err``.
"""

from collections.abc import Callable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Final
from uuid import UUID

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...core.types import ReferenceLookup
from ...models.coefficient import MAX_COEFFICIENT, MIN_COEFFICIENT, is_within_bounds
from ...models.driver import Driver
from ...models.enums import CoverageType, ParkingType
from ...models.policy import AutoPolicy
from ...models.vehicle import Vehicle
from ...schemas.rating import PremiumCalculation
from ..performance_monitor import performance_monitor

logger = get_logger(__name__)

_CENTS: Final = Decimal("0.01")

COMPREHENSIVE_MULTIPLIER: Final = Decimal("1.5")
NEW_VEHICLE_MULTIPLIER: Final = Decimal("1.2")
OLD_VEHICLE_MULTIPLIER: Final = Decimal("0.8")
NEW_VEHICLE_MAX_AGE: Final = 3
OLD_VEHICLE_MIN_AGE: Final = 10

# (upper bound, factor), checked top-down
EXPERIENCE_FACTORS: Final = (
    (2, Decimal("1.5")),
    (5, Decimal("1.2")),
    (10, Decimal("1.0")),
)
EXPERIENCED_DRIVER_FACTOR: Final = Decimal("0.9")

# (threshold, factor), first threshold exceeded wins
ENGINE_POWER_FACTORS: Final = (
    (200, Decimal("1.3")),
    (150, Decimal("1.2")),
    (100, Decimal("1.1")),
)
MILEAGE_FACTORS: Final = (
    (30000, Decimal("1.2")),
    (20000, Decimal("1.1")),
    (10000, Decimal("1.0")),
)
LOW_MILEAGE_FACTOR: Final = Decimal("0.9")

ANTI_THEFT_FACTOR: Final = Decimal("0.95")
PARKING_FACTORS: Final = {
    ParkingType.GARAGE: Decimal("0.9"),
    ParkingType.PARKING_LOT: Decimal("0.95"),
    ParkingType.STREET: Decimal("1.1"),
}

NEUTRAL_FACTOR: Final = Decimal("1.0")

# Allocation of the final premium per sub-coverage; each table sums to 1.00
COVERAGE_ALLOCATIONS: Final = {
    CoverageType.THIRD_PARTY: {
        "liability": Decimal("0.80"),
        "roadside_assistance": Decimal("0.10"),
        "legal_protection": Decimal("0.10"),
    },
    CoverageType.COMPREHENSIVE: {
        "liability": Decimal("0.50"),
        "own_damage": Decimal("0.25"),
        "theft": Decimal("0.10"),
        "fire": Decimal("0.05"),
        "glass_breakage": Decimal("0.05"),
        "roadside_assistance": Decimal("0.025"),
        "legal_protection": Decimal("0.025"),
    },
}


@beartype
def round_currency(amount: Decimal) -> Decimal:
    """Round half-up to the cent."""
    return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)


@beartype
class PremiumCalculator:
    """Auto premium calculation backed by tenant reference data."""

    def __init__(
        self,
        reference_lookup: ReferenceLookup,
        settings: Settings | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """Initialize calculator.

        Args:
            reference_lookup: Tariff factor provider
            settings: Pricing settings (defaults to the cached settings)
            clock: Source of today's date, used for the vehicle age
        """
        self._references = reference_lookup
        self._settings = settings or get_settings()
        self._clock = clock

    @beartype
    def calculate_base_premium(
        self, vehicle: Vehicle, coverage_type: CoverageType, tenant_id: UUID
    ) -> Result[Decimal, str]:
        """Calculate the base premium of a vehicle for a coverage type.

        Returns:
            Result containing the base premium or error message
        """
        logger.debug(
            "Calculating base premium for vehicle %s", vehicle.registration_number
        )

        if vehicle.category_id is None:
            return self._abort(f"Vehicle {vehicle.id} has no category")
        category_factor = self._references.category_tariff_factor(
            vehicle.category_id, tenant_id
        )
        if category_factor is None:
            return self._abort(
                f"Vehicle category {vehicle.category_id} not found for tenant {tenant_id}"
            )

        if vehicle.usage_id is None:
            return self._abort(f"Vehicle {vehicle.id} has no usage")
        usage_factor = self._references.usage_tariff_factor(vehicle.usage_id, tenant_id)
        if usage_factor is None:
            return self._abort(
                f"Vehicle usage {vehicle.usage_id} not found for tenant {tenant_id}"
            )

        vehicle_age = vehicle.age_in_years(self._clock())
        if vehicle_age is None:
            return self._abort(f"Vehicle {vehicle.id} has no model year")

        premium = category_factor * self._settings.base_premium_amount * usage_factor

        if coverage_type is CoverageType.COMPREHENSIVE:
            premium *= COMPREHENSIVE_MULTIPLIER

        if vehicle_age < NEW_VEHICLE_MAX_AGE:
            premium *= NEW_VEHICLE_MULTIPLIER
        elif vehicle_age > OLD_VEHICLE_MIN_AGE:
            premium *= OLD_VEHICLE_MULTIPLIER

        return Ok(round_currency(premium))

    @beartype
    def calculate_factors(self, vehicle: Vehicle, driver: Driver) -> dict[str, Decimal]:
        """Risk adjustment multipliers, in a stable order."""
        logger.debug(
            "Calculating factors for vehicle %s and driver %s",
            vehicle.registration_number,
            driver.license_number,
        )
        return {
            "experience": experience_factor(driver.years_of_driving_experience),
            "engine_power": engine_power_factor(vehicle.engine_power),
            "mileage": mileage_factor(vehicle.mileage),
            "anti_theft": (
                ANTI_THEFT_FACTOR if vehicle.has_anti_theft_device else NEUTRAL_FACTOR
            ),
            "parking": PARKING_FACTORS.get(vehicle.parking_type, NEUTRAL_FACTOR),
        }

    @beartype
    def calculate_adjusted_premium(
        self, base_premium: Decimal, factors: dict[str, Decimal]
    ) -> Decimal:
        """Apply every factor to the base premium."""
        adjusted = base_premium
        for factor in factors.values():
            adjusted *= factor
        return round_currency(adjusted)

    @beartype
    def calculate_final_premium(
        self, adjusted_premium: Decimal, bonus_malus_coefficient: Decimal
    ) -> Result[Decimal, str]:
        """Apply the bonus-malus coefficient to the adjusted premium."""
        if not is_within_bounds(bonus_malus_coefficient):
            return self._abort(
                f"Bonus-malus coefficient {bonus_malus_coefficient} outside valid range "
                f"[{MIN_COEFFICIENT}, {MAX_COEFFICIENT}]"
            )
        return Ok(round_currency(adjusted_premium * bonus_malus_coefficient))

    @beartype
    def calculate_coverages(
        self, final_premium: Decimal, coverage_type: CoverageType
    ) -> dict[str, Decimal]:
        """Split the final premium across sub-coverages.

        Each line is rounded on its own, so the lines can differ from the
        final premium by a few cents.
        """
        return {
            name: round_currency(final_premium * share)
            for name, share in COVERAGE_ALLOCATIONS[coverage_type].items()
        }

    @beartype
    @performance_monitor("calculate_policy_premium")
    def calculate_policy_premium(
        self,
        policy: AutoPolicy,
        vehicle: Vehicle,
        driver: Driver,
        tenant_id: UUID,
    ) -> Result[Decimal, str]:
        """Run the full pipeline and return the final premium."""
        return self.calculate_premium_breakdown(policy, vehicle, driver, tenant_id).map(
            lambda calculation: calculation.final_premium
        )

    @beartype
    def calculate_premium_breakdown(
        self,
        policy: AutoPolicy,
        vehicle: Vehicle,
        driver: Driver,
        tenant_id: UUID,
    ) -> Result[PremiumCalculation, str]:
        """Run the full pipeline and keep every intermediate value.

        Returns:
            Result containing the calculation or the first error met
        """
        logger.debug("Calculating premium for policy %s", policy.policy_number)

        if policy.coverage_type is None:
            return self._abort(f"Policy {policy.policy_number} has no coverage type")
        if policy.bonus_malus_coefficient is None:
            return self._abort(
                f"Policy {policy.policy_number} has no bonus-malus coefficient"
            )

        base_result = self.calculate_base_premium(vehicle, policy.coverage_type, tenant_id)
        if base_result.is_err():
            return base_result
        base_premium = base_result.unwrap()

        factors = self.calculate_factors(vehicle, driver)
        adjusted_premium = self.calculate_adjusted_premium(base_premium, factors)

        final_result = self.calculate_final_premium(
            adjusted_premium, policy.bonus_malus_coefficient
        )
        if final_result.is_err():
            return final_result
        final_premium = final_result.unwrap()

        return Ok(
            PremiumCalculation(
                coverage_type=policy.coverage_type,
                base_premium=base_premium,
                factors=factors,
                adjusted_premium=adjusted_premium,
                bonus_malus_coefficient=policy.bonus_malus_coefficient,
                final_premium=final_premium,
                coverages=self.calculate_coverages(final_premium, policy.coverage_type),
            )
        )

    def _abort(self, message: str) -> Err[str]:
        logger.warning("Premium calculation aborted: %s", message)
        return Err(message)


@beartype
def experience_factor(years_of_experience: int) -> Decimal:
    """Driving experience multiplier."""
    for upper_bound, factor in EXPERIENCE_FACTORS:
        if years_of_experience < upper_bound:
            return factor
    return EXPERIENCED_DRIVER_FACTOR


@beartype
def engine_power_factor(engine_power: int | None) -> Decimal:
    """Engine power multiplier; unknown power is neutral."""
    if engine_power is None:
        return NEUTRAL_FACTOR
    for threshold, factor in ENGINE_POWER_FACTORS:
        if engine_power > threshold:
            return factor
    return NEUTRAL_FACTOR


@beartype
def mileage_factor(mileage: int | None) -> Decimal:
    """Mileage multiplier; unknown mileage is neutral."""
    if mileage is None:
        return NEUTRAL_FACTOR
    for threshold, factor in MILEAGE_FACTORS:
        if mileage > threshold:
            return factor
    return LOW_MILEAGE_FACTOR
