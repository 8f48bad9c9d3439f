# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Vehicle validation rules."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal
from uuid import UUID

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.logging_utils import get_logger
from ...core.types import EntityLookup, ReferenceLookup
from ...models.enums import CoverageType, ReferenceKind
from ...models.vehicle import Vehicle
from ...schemas.validation import Violation
from .rules import (
    EntityValidator,
    check_reference,
    is_blank,
    is_missing,
    is_valid_identifier,
    is_valid_vin,
)

logger = get_logger(__name__)

MIN_VEHICLE_YEAR = 1900


@beartype
class VehicleValidator(EntityValidator[Vehicle]):
    """Validate vehicles on their own and as the subject of a policy."""

    def __init__(
        self,
        entity_lookup: EntityLookup,
        reference_lookup: ReferenceLookup,
        settings: Settings | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(clock)
        self._entities = entity_lookup
        self._references = reference_lookup
        self._settings = settings or get_settings()

    @beartype
    def validate_for_creation(self, entity: Vehicle, tenant_id: UUID) -> list[Violation]:
        """Validate a vehicle about to be registered."""
        logger.debug("Validating vehicle for creation: %s", entity.registration_number)

        violations = self.validate_required_fields(entity)
        violations.extend(self.validate_references(entity, tenant_id))
        violations.extend(self.validate_business_rules(entity))
        violations.extend(self.validate_uniqueness(entity, tenant_id))
        return violations

    @beartype
    def validate_for_update(
        self, entity: Vehicle, existing: Vehicle, tenant_id: UUID
    ) -> list[Violation]:
        """Validate a vehicle update; registration number and year are frozen."""
        logger.debug("Validating vehicle for update: %s", entity.registration_number)

        violations = self.validate_required_fields(entity)
        violations.extend(self.validate_references(entity, tenant_id))
        violations.extend(self.validate_business_rules(entity))

        if existing.registration_number != entity.registration_number:
            violations.append(
                Violation(
                    code="VEHICLE_REGISTRATION_IMMUTABLE",
                    message="The registration number cannot be changed",
                    field="registration_number",
                )
            )
        if existing.year != entity.year:
            violations.append(
                Violation(
                    code="VEHICLE_YEAR_IMMUTABLE",
                    message="The vehicle year cannot be changed",
                    field="year",
                )
            )
        return violations

    @beartype
    def validate_required_fields(self, entity: Vehicle) -> list[Violation]:
        """Check mandatory vehicle fields."""
        required = (
            ("registration_number", "registration number"),
            ("manufacturer_id", "vehicle make"),
            ("model_id", "vehicle model"),
            ("year", "vehicle year"),
            ("fuel_type_id", "fuel type"),
            ("category_id", "vehicle category"),
            ("usage_id", "vehicle usage"),
            ("color_id", "vehicle color"),
            ("owner_id", "vehicle owner"),
        )
        return [
            Violation(
                code=f"VEHICLE_{field.upper().removesuffix('_ID')}_REQUIRED",
                message=f"The {label} is required",
                field=field,
            )
            for field, label in required
            if is_missing(getattr(entity, field))
        ]

    @beartype
    def validate_references(self, entity: Vehicle, tenant_id: UUID) -> list[Violation]:
        """Resolve every reference-data id within the tenant."""
        logger.debug("Validating references for vehicle: %s", entity.registration_number)

        checks = (
            (ReferenceKind.MANUFACTURER, entity.manufacturer_id, "manufacturer_id", "make"),
            (ReferenceKind.MODEL, entity.model_id, "model_id", "model"),
            (ReferenceKind.CATEGORY, entity.category_id, "category_id", "category"),
            (ReferenceKind.SUBCATEGORY, entity.subcategory_id, "subcategory_id", "subcategory"),
            (ReferenceKind.FUEL_TYPE, entity.fuel_type_id, "fuel_type_id", "fuel type"),
            (ReferenceKind.USAGE, entity.usage_id, "usage_id", "usage"),
            (ReferenceKind.COLOR, entity.color_id, "color_id", "color"),
        )

        violations: list[Violation] = []
        for kind, reference_id, field, label in checks:
            violations.extend(
                check_reference(
                    self._references,
                    kind,
                    reference_id,
                    tenant_id,
                    code=f"VEHICLE_{kind.value}_NOT_FOUND",
                    message=f"The specified vehicle {label} does not exist",
                    field=field,
                )
            )
        return violations

    @beartype
    def validate_business_rules(self, entity: Vehicle) -> list[Violation]:
        """Check formats, physical bounds and purchase data."""
        logger.debug("Validating business rules for vehicle: %s", entity.registration_number)

        violations: list[Violation] = []
        today = self.today()

        if not is_blank(entity.registration_number) and not is_valid_identifier(
            entity.registration_number
        ):
            violations.append(
                Violation(
                    code="VEHICLE_REGISTRATION_FORMAT",
                    message="The registration number format is invalid",
                    field="registration_number",
                )
            )

        if entity.year is not None:
            if entity.year <= MIN_VEHICLE_YEAR:
                violations.append(
                    Violation(
                        code="VEHICLE_YEAR_TOO_OLD",
                        message=f"The vehicle year must be after {MIN_VEHICLE_YEAR}",
                        field="year",
                    )
                )
            if entity.year > today.year:
                violations.append(
                    Violation(
                        code="VEHICLE_YEAR_IN_FUTURE",
                        message="The vehicle year cannot be in the future",
                        field="year",
                    )
                )

        if entity.engine_size is not None and entity.engine_size <= 0:
            violations.append(
                Violation(
                    code="VEHICLE_ENGINE_SIZE_NOT_POSITIVE",
                    message="The engine size must be positive",
                    field="engine_size",
                )
            )
        if entity.engine_power is not None and entity.engine_power <= 0:
            violations.append(
                Violation(
                    code="VEHICLE_ENGINE_POWER_NOT_POSITIVE",
                    message="The engine power must be positive",
                    field="engine_power",
                )
            )

        if entity.vin is not None and not is_valid_vin(entity.vin):
            violations.append(
                Violation(
                    code="VEHICLE_VIN_FORMAT",
                    message="The VIN must be 17 alphanumeric characters without I, O or Q",
                    field="vin",
                )
            )

        if entity.purchase_date is not None:
            if entity.purchase_date > today:
                violations.append(
                    Violation(
                        code="VEHICLE_PURCHASE_DATE_IN_FUTURE",
                        message="The purchase date cannot be in the future",
                        field="purchase_date",
                    )
                )
            if entity.year is not None and entity.purchase_date.year < entity.year:
                violations.append(
                    Violation(
                        code="VEHICLE_PURCHASE_BEFORE_MODEL_YEAR",
                        message="The purchase date cannot precede the vehicle year",
                        field="purchase_date",
                    )
                )

        if entity.purchase_value is not None and entity.purchase_value <= Decimal("0"):
            violations.append(
                Violation(
                    code="VEHICLE_PURCHASE_VALUE_NOT_POSITIVE",
                    message="The purchase value must be positive",
                    field="purchase_value",
                )
            )
        if entity.current_value is not None and entity.current_value < Decimal("0"):
            violations.append(
                Violation(
                    code="VEHICLE_CURRENT_VALUE_NEGATIVE",
                    message="The current value cannot be negative",
                    field="current_value",
                )
            )

        if entity.mileage is not None and entity.mileage < 0:
            violations.append(
                Violation(
                    code="VEHICLE_MILEAGE_NEGATIVE",
                    message="The mileage cannot be negative",
                    field="mileage",
                )
            )

        return violations

    @beartype
    def validate_uniqueness(self, entity: Vehicle, tenant_id: UUID) -> list[Violation]:
        """Registration numbers are unique per tenant."""
        if is_blank(entity.registration_number):
            return []
        if self._entities.registration_number_exists(entity.registration_number, tenant_id):
            return [
                Violation(
                    code="VEHICLE_REGISTRATION_DUPLICATE",
                    message="A vehicle with this registration number already exists",
                    field="registration_number",
                )
            ]
        return []

    @beartype
    def validate_insurability(self, entity: Vehicle) -> list[Violation]:
        """Rules a vehicle must meet to be covered by any policy."""
        violations: list[Violation] = []

        age = entity.age_in_years(self.today())
        if age is not None and age > self._settings.max_insurable_vehicle_age:
            violations.append(
                Violation(
                    code="VEHICLE_TOO_OLD_TO_INSURE",
                    message=(
                        "The vehicle is too old to be insured "
                        f"(more than {self._settings.max_insurable_vehicle_age} years)"
                    ),
                    field="vehicle_id",
                )
            )
        if is_blank(entity.registration_number):
            violations.append(
                Violation(
                    code="VEHICLE_REGISTRATION_MISSING",
                    message="The vehicle must have a valid registration number",
                    field="vehicle_id",
                )
            )
        return violations

    @beartype
    def validate_coverage_eligibility(
        self, entity: Vehicle, coverage_type: CoverageType
    ) -> list[Violation]:
        """Comprehensive coverage is limited to recent vehicles."""
        if coverage_type is not CoverageType.COMPREHENSIVE:
            return []

        age = entity.age_in_years(self.today())
        if age is not None and age > self._settings.max_comprehensive_vehicle_age:
            return [
                Violation(
                    code="COMPREHENSIVE_VEHICLE_TOO_OLD",
                    message=(
                        "Comprehensive coverage is not available for vehicles older "
                        f"than {self._settings.max_comprehensive_vehicle_age} years"
                    ),
                    field="coverage_type",
                )
            ]
        return []
