# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Rating service facade exposed to the application layer.

Wires the validators and calculators over the lookup ports and implements
the policy create/update flow: validate first, price only a valid policy.
"""

from collections.abc import Callable
from datetime import date
from decimal import Decimal
from uuid import UUID

from beartype import beartype

from ..core.config import Settings, get_settings
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..core.types import EntityLookup, ReferenceLookup
from ..models.coefficient import BonusMalusRecord
from ..models.driver import Driver
from ..models.enums import CoverageType
from ..models.policy import AutoPolicy
from ..models.vehicle import Vehicle
from ..schemas.rating import PricedPolicy
from ..schemas.validation import ValidationMode, Violation
from .rating.bonus_malus import BonusMalusCalculator
from .rating.calculators import PremiumCalculator
from .validation.driver_validator import DriverValidator
from .validation.policy_validator import PolicyValidator
from .validation.vehicle_validator import VehicleValidator

logger = get_logger(__name__)

_PREMIUM_FIELD = "premium_amount"


@beartype
class AutoPolicyRatingService:
    """Validation and pricing entry points for vehicles, drivers and policies."""

    def __init__(
        self,
        entity_lookup: EntityLookup,
        reference_lookup: ReferenceLookup,
        settings: Settings | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """Initialize service.

        Args:
            entity_lookup: Vehicle, driver and uniqueness lookups
            reference_lookup: Reference data and tariff lookups
            settings: Core settings (defaults to the cached settings)
            clock: Source of today's date shared by every rule
        """
        self._entities = entity_lookup
        settings = settings or get_settings()

        self.vehicle_validator = VehicleValidator(
            entity_lookup, reference_lookup, settings, clock
        )
        self.driver_validator = DriverValidator(
            entity_lookup, reference_lookup, settings, clock
        )
        self.policy_validator = PolicyValidator(
            entity_lookup,
            reference_lookup,
            self.vehicle_validator,
            self.driver_validator,
            settings,
            clock,
        )
        self.premium_calculator = PremiumCalculator(reference_lookup, settings, clock)
        self.bonus_malus_calculator = BonusMalusCalculator()

    # Validation

    @beartype
    def validate_vehicle(
        self,
        vehicle: Vehicle,
        tenant_id: UUID,
        mode: ValidationMode = ValidationMode.CREATE,
        existing: Vehicle | None = None,
    ) -> list[Violation]:
        """Validate a vehicle for creation or update."""
        return self.vehicle_validator.validate(vehicle, tenant_id, mode, existing)

    @beartype
    def validate_driver(
        self,
        driver: Driver,
        tenant_id: UUID,
        mode: ValidationMode = ValidationMode.CREATE,
        existing: Driver | None = None,
    ) -> list[Violation]:
        """Validate a driver for creation or update."""
        return self.driver_validator.validate(driver, tenant_id, mode, existing)

    @beartype
    def validate_policy(
        self,
        policy: AutoPolicy,
        tenant_id: UUID,
        mode: ValidationMode = ValidationMode.CREATE,
        existing: AutoPolicy | None = None,
    ) -> list[Violation]:
        """Validate a policy for creation or update."""
        return self.policy_validator.validate(policy, tenant_id, mode, existing)

    # Pricing

    @beartype
    def calculate_base_premium(
        self, vehicle: Vehicle, coverage_type: CoverageType, tenant_id: UUID
    ) -> Result[Decimal, str]:
        """Base premium of a vehicle for a coverage type."""
        return self.premium_calculator.calculate_base_premium(
            vehicle, coverage_type, tenant_id
        )

    @beartype
    def calculate_final_premium(
        self,
        vehicle: Vehicle,
        driver: Driver,
        policy: AutoPolicy,
        tenant_id: UUID,
    ) -> Result[Decimal, str]:
        """Full pricing pipeline, bonus-malus included."""
        return self.premium_calculator.calculate_policy_premium(
            policy, vehicle, driver, tenant_id
        )

    @beartype
    def calculate_new_bonus_malus(
        self, current_coefficient: Decimal, claim_count: int
    ) -> Result[Decimal, str]:
        """Next period's bonus-malus coefficient."""
        return self.bonus_malus_calculator.calculate_new_coefficient(
            current_coefficient, claim_count
        )

    @beartype
    def simulate_coverage_breakdown(
        self, final_premium: Decimal, coverage_type: CoverageType
    ) -> dict[str, Decimal]:
        """Informational split of a premium across sub-coverages."""
        return self.premium_calculator.calculate_coverages(final_premium, coverage_type)

    @beartype
    def update_bonus_malus(
        self, record: BonusMalusRecord, claim_count: int, effective_date: date
    ) -> Result[BonusMalusRecord, str]:
        """Roll a customer's bonus-malus record over to a new period."""
        return self.bonus_malus_calculator.update_record(
            record, claim_count, effective_date
        )

    # Use case flow

    @beartype
    def price_policy(
        self,
        policy: AutoPolicy,
        tenant_id: UUID,
        mode: ValidationMode = ValidationMode.CREATE,
        existing: AutoPolicy | None = None,
    ) -> Result[PricedPolicy, list[Violation]]:
        """Validate a policy and, when valid, recompute its premium.

        The supplied premium is ignored: every other rule is checked before
        pricing, and the premium rules are checked on the priced policy.

        Returns:
            Result containing the policy carrying the new premium, or every
            violation found (a pricing failure is reported as one violation)
        """
        violations = [
            violation
            for violation in self.validate_policy(policy, tenant_id, mode, existing)
            if violation.field != _PREMIUM_FIELD
        ]
        if violations:
            return self._reject(policy, violations)

        # Validation guarantees both references resolve within the tenant
        vehicle = self._entities.find_vehicle(policy.vehicle_id, tenant_id)
        driver = self._entities.find_driver(policy.primary_driver_id, tenant_id)

        calculation = self.premium_calculator.calculate_premium_breakdown(
            policy, vehicle, driver, tenant_id
        )
        if calculation.is_err():
            return Err(
                [
                    Violation(
                        code="PREMIUM_CALCULATION_FAILED",
                        message=calculation.unwrap_err(),
                        field=_PREMIUM_FIELD,
                    )
                ]
            )

        result = calculation.unwrap()
        priced = policy.model_copy(update={_PREMIUM_FIELD: result.final_premium})
        violations = self.policy_validator.validate_premium(priced)
        if violations:
            return self._reject(priced, violations)

        logger.info(
            "Policy %s priced at %s", policy.policy_number, result.final_premium
        )
        return Ok(PricedPolicy(policy=priced, calculation=result))

    def _reject(
        self, policy: AutoPolicy, violations: list[Violation]
    ) -> Err[list[Violation]]:
        logger.info(
            "Policy %s rejected with %d violation(s)",
            policy.policy_number,
            len(violations),
        )
        return Err(violations)
