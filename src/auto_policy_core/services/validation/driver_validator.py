# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Driver validation rules."""

from collections.abc import Callable
from datetime import date
from uuid import UUID

from beartype import beartype

from ...core.config import Settings, get_settings
from ...core.logging_utils import get_logger
from ...core.types import EntityLookup, ReferenceLookup
from ...models.driver import Driver
from ...models.enums import ReferenceKind
from ...schemas.validation import Violation
from .rules import (
    EntityValidator,
    add_years,
    check_reference,
    is_blank,
    is_missing,
    is_valid_identifier,
    whole_years_between,
)

logger = get_logger(__name__)

MAX_LICENSE_AGE_YEARS = 100


@beartype
class DriverValidator(EntityValidator[Driver]):
    """Validate drivers on their own and as the primary driver of a policy."""

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
    def validate_for_creation(self, entity: Driver, tenant_id: UUID) -> list[Violation]:
        """Validate a driver about to be registered."""
        logger.debug("Validating driver for creation: %s", entity.license_number)

        violations = self.validate_required_fields(entity)
        violations.extend(self.validate_references(entity, tenant_id))
        violations.extend(self.validate_business_rules(entity))
        violations.extend(self.validate_uniqueness(entity, tenant_id))
        return violations

    @beartype
    def validate_for_update(
        self, entity: Driver, existing: Driver, tenant_id: UUID
    ) -> list[Violation]:
        """Validate a driver update.

        A changed license number must still be unique; the driver itself is
        excluded from the lookup.
        """
        logger.debug("Validating driver for update: %s", entity.license_number)

        violations = self.validate_required_fields(entity)
        violations.extend(self.validate_references(entity, tenant_id))
        violations.extend(self.validate_business_rules(entity))

        if existing.license_number != entity.license_number:
            violations.extend(
                self.validate_uniqueness(entity, tenant_id, exclude_driver_id=entity.id)
            )
        return violations

    @beartype
    def validate_required_fields(self, entity: Driver) -> list[Violation]:
        """Check mandatory driver fields."""
        required = (
            ("customer_id", "DRIVER_CUSTOMER_REQUIRED", "The customer is required"),
            (
                "license_number",
                "DRIVER_LICENSE_NUMBER_REQUIRED",
                "The license number is required",
            ),
            (
                "license_type_id",
                "DRIVER_LICENSE_TYPE_REQUIRED",
                "The license type is required",
            ),
            (
                "license_issue_date",
                "DRIVER_LICENSE_ISSUE_DATE_REQUIRED",
                "The license issue date is required",
            ),
        )
        return [
            Violation(code=code, message=message, field=field)
            for field, code, message in required
            if is_missing(getattr(entity, field))
        ]

    @beartype
    def validate_references(self, entity: Driver, tenant_id: UUID) -> list[Violation]:
        """Resolve the license type within the tenant."""
        return check_reference(
            self._references,
            ReferenceKind.LICENSE_TYPE,
            entity.license_type_id,
            tenant_id,
            code="DRIVER_LICENSE_TYPE_NOT_FOUND",
            message="The specified license type does not exist",
            field="license_type_id",
        )

    @beartype
    def validate_business_rules(self, entity: Driver) -> list[Violation]:
        """Check the license number format, license dates and experience."""
        logger.debug("Validating business rules for driver: %s", entity.license_number)

        violations: list[Violation] = []
        today = self.today()

        if not is_blank(entity.license_number) and not is_valid_identifier(
            entity.license_number
        ):
            violations.append(
                Violation(
                    code="DRIVER_LICENSE_NUMBER_FORMAT",
                    message="The license number format is invalid",
                    field="license_number",
                )
            )

        issue_date = entity.license_issue_date
        expiry_date = entity.license_expiry_date
        if issue_date is not None:
            if issue_date > today:
                violations.append(
                    Violation(
                        code="DRIVER_LICENSE_ISSUED_IN_FUTURE",
                        message="The license issue date cannot be in the future",
                        field="license_issue_date",
                    )
                )
            if issue_date < add_years(today, -MAX_LICENSE_AGE_YEARS):
                violations.append(
                    Violation(
                        code="DRIVER_LICENSE_ISSUE_DATE_TOO_OLD",
                        message="The license issue date is too old",
                        field="license_issue_date",
                    )
                )
            if expiry_date is not None and expiry_date < issue_date:
                violations.append(
                    Violation(
                        code="DRIVER_LICENSE_EXPIRY_BEFORE_ISSUE",
                        message="The license expiry date must be after the issue date",
                        field="license_expiry_date",
                    )
                )
            if entity.is_license_expired(today):
                violations.append(
                    Violation(
                        code="DRIVER_LICENSE_EXPIRED",
                        message="The license has expired",
                        field="license_expiry_date",
                    )
                )

            # A license issued in the future yields a negative span; the
            # issue date violation above already covers it
            licensed_years = max(whole_years_between(issue_date, today), 0)
            if entity.years_of_driving_experience > licensed_years:
                violations.append(
                    Violation(
                        code="DRIVER_EXPERIENCE_EXCEEDS_LICENSE",
                        message="Driving experience cannot exceed the license age",
                        field="years_of_driving_experience",
                    )
                )

        if entity.years_of_driving_experience < 0:
            violations.append(
                Violation(
                    code="DRIVER_EXPERIENCE_NEGATIVE",
                    message="Driving experience cannot be negative",
                    field="years_of_driving_experience",
                )
            )

        return violations

    @beartype
    def validate_uniqueness(
        self,
        entity: Driver,
        tenant_id: UUID,
        exclude_driver_id: UUID | None = None,
    ) -> list[Violation]:
        """License numbers are unique per tenant."""
        if is_blank(entity.license_number):
            return []
        if self._entities.license_number_exists(
            entity.license_number, tenant_id, exclude_driver_id
        ):
            return [
                Violation(
                    code="DRIVER_LICENSE_NUMBER_DUPLICATE",
                    message="A driver with this license number already exists",
                    field="license_number",
                )
            ]
        return []

    @beartype
    def validate_primary_driver_eligibility(self, entity: Driver) -> list[Violation]:
        """Rules a driver must meet to be the primary driver of a policy."""
        violations: list[Violation] = []
        minimum_experience = self._settings.min_primary_driver_experience_years

        if entity.is_license_expired(self.today()):
            violations.append(
                Violation(
                    code="PRIMARY_DRIVER_LICENSE_EXPIRED",
                    message="The primary driver's license has expired",
                    field="primary_driver_id",
                )
            )
        if entity.years_of_driving_experience < minimum_experience:
            violations.append(
                Violation(
                    code="PRIMARY_DRIVER_INEXPERIENCED",
                    message=(
                        "The primary driver must have at least "
                        f"{minimum_experience} years of driving experience"
                    ),
                    field="primary_driver_id",
                )
            )
        return violations
