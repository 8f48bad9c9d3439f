# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Auto policy validation rules.

Rule groups run in a fixed order and every group contributes its
violations: required fields, references, business rules, coverage rules,
vehicle and primary driver eligibility, then uniqueness (creation) or
immutability (update). The vehicle and driver rules are delegated to the
injected :class:`VehicleValidator` and :class:`DriverValidator`.
"""

from collections.abc import Callable
from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.logging_utils import get_logger
from ...core.types import EntityLookup, ReferenceLookup
from ...models.coefficient import MAX_COEFFICIENT, MIN_COEFFICIENT
from ...models.enums import ReferenceKind
from ...models.policy import AutoPolicy
from ...schemas.validation import Violation
from ..performance_monitor import performance_monitor
from .driver_validator import DriverValidator
from .rules import (
    EntityValidator,
    add_months,
    add_years,
    check_reference,
    is_blank,
    is_missing,
    is_valid_identifier,
)
from .vehicle_validator import VehicleValidator

logger = get_logger(__name__)

# (field, code, message)
_REQUIRED_FIELDS = (
    ("policy_number", "POLICY_NUMBER_REQUIRED", "The policy number is required"),
    ("status", "POLICY_STATUS_REQUIRED", "The policy status is required"),
    ("start_date", "POLICY_START_DATE_REQUIRED", "The policy start date is required"),
    ("end_date", "POLICY_END_DATE_REQUIRED", "The policy end date is required"),
    ("premium_amount", "POLICY_PREMIUM_REQUIRED", "The premium amount is required"),
    ("vehicle_id", "POLICY_VEHICLE_REQUIRED", "The vehicle is required"),
    (
        "primary_driver_id",
        "POLICY_PRIMARY_DRIVER_REQUIRED",
        "The primary driver is required",
    ),
    ("coverage_type", "POLICY_COVERAGE_TYPE_REQUIRED", "The coverage type is required"),
    (
        "bonus_malus_coefficient",
        "POLICY_BONUS_MALUS_REQUIRED",
        "The bonus-malus coefficient is required",
    ),
    (
        "claim_history_category_id",
        "POLICY_CLAIM_HISTORY_CATEGORY_REQUIRED",
        "The claim history category is required",
    ),
    (
        "geographic_zone_id",
        "POLICY_GEOGRAPHIC_ZONE_REQUIRED",
        "The geographic zone of residence is required by the CIMA code",
    ),
    (
        "circulation_zone_id",
        "POLICY_CIRCULATION_ZONE_REQUIRED",
        "The circulation zone is required by the CIMA code",
    ),
)


@beartype
class PolicyValidator(EntityValidator[AutoPolicy]):
    """Validate auto policies before they are persisted."""

    def __init__(
        self,
        entity_lookup: EntityLookup,
        reference_lookup: ReferenceLookup,
        vehicle_validator: VehicleValidator,
        driver_validator: DriverValidator,
        settings: Settings | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the policy validator.

        Args:
            entity_lookup: Vehicle, driver and policy number lookups
            reference_lookup: Zone and claim history category lookups
            vehicle_validator: Rules applied to the insured vehicle
            driver_validator: Rules applied to the primary driver
            settings: Underwriting limits (defaults to the cached settings)
            clock: Source of today's date
        """
        super().__init__(clock)
        self._entities = entity_lookup
        self._references = reference_lookup
        self._vehicle_validator = vehicle_validator
        self._driver_validator = driver_validator
        self._settings = settings or get_settings()

    @beartype
    @performance_monitor("validate_policy_for_creation")
    def validate_for_creation(
        self, entity: AutoPolicy, tenant_id: UUID
    ) -> list[Violation]:
        """Validate a new policy."""
        logger.debug("Validating policy for creation: %s", entity.policy_number)

        violations = self._validate_common(entity, tenant_id, is_new=True)
        violations.extend(self.validate_uniqueness(entity, tenant_id))
        return violations

    @beartype
    @performance_monitor("validate_policy_for_update")
    def validate_for_update(
        self, entity: AutoPolicy, existing: AutoPolicy, tenant_id: UUID
    ) -> list[Violation]:
        """Validate a policy update against the stored policy."""
        logger.debug("Validating policy for update: %s", entity.policy_number)

        violations = self._validate_common(entity, tenant_id, is_new=False)

        if existing.policy_number != entity.policy_number:
            violations.append(
                Violation(
                    code="POLICY_NUMBER_IMMUTABLE",
                    message="The policy number cannot be changed",
                    field="policy_number",
                )
            )
        if (
            existing.start_date is not None
            and entity.start_date is not None
            and entity.start_date < existing.start_date
        ):
            violations.append(
                Violation(
                    code="POLICY_START_DATE_MOVED_EARLIER",
                    message="The new start date cannot precede the original start date",
                    field="start_date",
                )
            )
        return violations

    def _validate_common(
        self, entity: AutoPolicy, tenant_id: UUID, *, is_new: bool
    ) -> list[Violation]:
        violations = self.validate_required_fields(entity)
        violations.extend(self.validate_references(entity, tenant_id))
        violations.extend(self.validate_business_rules(entity, is_new=is_new))
        violations.extend(self.validate_coverage_rules(entity, tenant_id))
        violations.extend(self.validate_vehicle(entity, tenant_id))
        violations.extend(self.validate_driver(entity, tenant_id))
        return violations

    @beartype
    def validate_required_fields(self, entity: AutoPolicy) -> list[Violation]:
        """Check mandatory policy fields, CIMA zones included."""
        return [
            Violation(code=code, message=message, field=field)
            for field, code, message in _REQUIRED_FIELDS
            if is_missing(getattr(entity, field))
        ]

    @beartype
    def validate_references(
        self, entity: AutoPolicy, tenant_id: UUID
    ) -> list[Violation]:
        """Resolve the vehicle, driver, zones and claim category within the tenant."""
        logger.debug("Validating references for policy: %s", entity.policy_number)

        violations: list[Violation] = []

        if entity.vehicle_id is not None and not self._entities.vehicle_exists(
            entity.vehicle_id, tenant_id
        ):
            violations.append(
                Violation(
                    code="POLICY_VEHICLE_NOT_FOUND",
                    message="The specified vehicle does not exist",
                    field="vehicle_id",
                )
            )
        if entity.primary_driver_id is not None and not self._entities.driver_exists(
            entity.primary_driver_id, tenant_id
        ):
            violations.append(
                Violation(
                    code="POLICY_PRIMARY_DRIVER_NOT_FOUND",
                    message="The specified primary driver does not exist",
                    field="primary_driver_id",
                )
            )

        violations.extend(
            check_reference(
                self._references,
                ReferenceKind.GEOGRAPHIC_ZONE,
                entity.geographic_zone_id,
                tenant_id,
                code="POLICY_GEOGRAPHIC_ZONE_NOT_FOUND",
                message="The specified geographic zone does not exist",
                field="geographic_zone_id",
            )
        )
        violations.extend(
            check_reference(
                self._references,
                ReferenceKind.CIRCULATION_ZONE,
                entity.circulation_zone_id,
                tenant_id,
                code="POLICY_CIRCULATION_ZONE_NOT_FOUND",
                message="The specified circulation zone does not exist",
                field="circulation_zone_id",
            )
        )
        violations.extend(
            check_reference(
                self._references,
                ReferenceKind.CLAIM_HISTORY_CATEGORY,
                entity.claim_history_category_id,
                tenant_id,
                code="POLICY_CLAIM_HISTORY_CATEGORY_NOT_FOUND",
                message="The specified claim history category does not exist",
                field="claim_history_category_id",
            )
        )
        return violations

    @beartype
    def validate_business_rules(
        self, entity: AutoPolicy, *, is_new: bool = True
    ) -> list[Violation]:
        """Check the number format, dates, premium, coefficient and mileage.

        The 30 day look-back on the start date only applies to new policies.
        """
        logger.debug("Validating business rules for policy: %s", entity.policy_number)

        violations: list[Violation] = []

        if not is_blank(entity.policy_number) and not is_valid_identifier(
            entity.policy_number
        ):
            violations.append(
                Violation(
                    code="POLICY_NUMBER_FORMAT",
                    message="The policy number format is invalid",
                    field="policy_number",
                )
            )

        violations.extend(self.validate_dates(entity, is_new=is_new))
        violations.extend(self.validate_premium(entity))

        coefficient = entity.bonus_malus_coefficient
        if coefficient is not None:
            if coefficient < MIN_COEFFICIENT:
                violations.append(
                    Violation(
                        code="POLICY_BONUS_MALUS_BELOW_MINIMUM",
                        message=f"The bonus-malus coefficient cannot be below {MIN_COEFFICIENT}",
                        field="bonus_malus_coefficient",
                    )
                )
            if coefficient > MAX_COEFFICIENT:
                violations.append(
                    Violation(
                        code="POLICY_BONUS_MALUS_ABOVE_MAXIMUM",
                        message=f"The bonus-malus coefficient cannot exceed {MAX_COEFFICIENT}",
                        field="bonus_malus_coefficient",
                    )
                )

        if entity.annual_mileage is not None and entity.annual_mileage < 0:
            violations.append(
                Violation(
                    code="POLICY_ANNUAL_MILEAGE_NEGATIVE",
                    message="The annual mileage cannot be negative",
                    field="annual_mileage",
                )
            )

        if entity.parking_type is None:
            violations.append(
                Violation(
                    code="POLICY_PARKING_TYPE_REQUIRED",
                    message="The parking type is required",
                    field="parking_type",
                )
            )

        return violations

    @beartype
    def validate_dates(
        self, entity: AutoPolicy, *, is_new: bool = True
    ) -> list[Violation]:
        """Check ordering, duration (one month to one year) and start look-back."""
        start, end = entity.start_date, entity.end_date
        if start is None or end is None:
            return []

        violations: list[Violation] = []

        if start >= end:
            violations.append(
                Violation(
                    code="POLICY_START_NOT_BEFORE_END",
                    message="The start date must be before the end date",
                    field="start_date",
                )
            )
        if add_months(start, 1) > end:
            violations.append(
                Violation(
                    code="POLICY_DURATION_TOO_SHORT",
                    message="The policy must last at least one month",
                    field="end_date",
                )
            )
        if add_years(start, 1) < end:
            violations.append(
                Violation(
                    code="POLICY_DURATION_TOO_LONG",
                    message="The policy cannot last more than one year",
                    field="end_date",
                )
            )

        grace_days = self._settings.start_date_grace_days
        if is_new and start < self.today() - timedelta(days=grace_days):
            violations.append(
                Violation(
                    code="POLICY_START_DATE_TOO_OLD",
                    message=f"The start date cannot be more than {grace_days} days in the past",
                    field="start_date",
                )
            )
        return violations

    @beartype
    def validate_premium(self, entity: AutoPolicy) -> list[Violation]:
        """The premium must be positive and within the plausible range."""
        premium = entity.premium_amount
        if premium is None:
            return []

        violations: list[Violation] = []
        if premium <= Decimal("0"):
            violations.append(
                Violation(
                    code="POLICY_PREMIUM_NOT_POSITIVE",
                    message="The premium amount must be positive",
                    field="premium_amount",
                )
            )
        if premium > self._settings.max_premium_amount:
            violations.append(
                Violation(
                    code="POLICY_PREMIUM_ABNORMALLY_HIGH",
                    message="The premium amount is abnormally high",
                    field="premium_amount",
                )
            )
        return violations

    @beartype
    def validate_coverage_rules(
        self, entity: AutoPolicy, tenant_id: UUID
    ) -> list[Violation]:
        """Coverage-specific eligibility of the insured vehicle."""
        if entity.coverage_type is None or entity.vehicle_id is None:
            return []

        vehicle = self._entities.find_vehicle(entity.vehicle_id, tenant_id)
        if vehicle is None:
            return []
        return self._vehicle_validator.validate_coverage_eligibility(
            vehicle, entity.coverage_type
        )

    @beartype
    def validate_vehicle(self, entity: AutoPolicy, tenant_id: UUID) -> list[Violation]:
        """Insurability of the referenced vehicle."""
        if entity.vehicle_id is None:
            return []

        vehicle = self._entities.find_vehicle(entity.vehicle_id, tenant_id)
        if vehicle is None:
            return []
        return self._vehicle_validator.validate_insurability(vehicle)

    @beartype
    def validate_driver(self, entity: AutoPolicy, tenant_id: UUID) -> list[Violation]:
        """Eligibility of the referenced primary driver."""
        if entity.primary_driver_id is None:
            return []

        driver = self._entities.find_driver(entity.primary_driver_id, tenant_id)
        if driver is None:
            return []
        return self._driver_validator.validate_primary_driver_eligibility(driver)

    @beartype
    def validate_uniqueness(
        self, entity: AutoPolicy, tenant_id: UUID
    ) -> list[Violation]:
        """Policy numbers are unique per tenant."""
        if is_blank(entity.policy_number):
            return []
        if self._entities.policy_number_exists(entity.policy_number, tenant_id):
            return [
                Violation(
                    code="POLICY_NUMBER_DUPLICATE",
                    message="A policy with this number already exists",
                    field="policy_number",
                )
            ]
        return []
