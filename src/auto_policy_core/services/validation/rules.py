# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Shared building blocks for the entity validators."""

import calendar
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date
from typing import Final, Generic, TypeVar
from uuid import UUID

from beartype import beartype

from ...core.types import ReferenceLookup
from ...models.enums import ReferenceKind
from ...schemas.validation import ValidationMode, Violation

EntityT = TypeVar("EntityT")

# Policy, license and registration numbers
IDENTIFIER_PATTERN: Final = re.compile(r"^[A-Z0-9-]+$")
# 17 characters, I/O/Q excluded
VIN_PATTERN: Final = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$")


@beartype
def is_blank(value: str | None) -> bool:
    """Check for a missing or whitespace-only string."""
    return value is None or not value.strip()


def is_missing(value: object) -> bool:
    """Check for an unset field; blank strings count as unset."""
    if isinstance(value, str):
        return is_blank(value)
    return value is None


@beartype
def is_valid_identifier(value: str) -> bool:
    """Check an upper-case alphanumeric identifier (dashes allowed)."""
    return IDENTIFIER_PATTERN.fullmatch(value) is not None


@beartype
def is_valid_vin(value: str) -> bool:
    """Check a 17 character VIN without I, O or Q."""
    return VIN_PATTERN.fullmatch(value) is not None


@beartype
def add_months(day: date, months: int) -> date:
    """Shift a date by whole months, clamping to the end of shorter months."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


@beartype
def add_years(day: date, years: int) -> date:
    """Shift a date by whole years (29 February falls back to 28)."""
    return add_months(day, years * 12)


@beartype
def whole_years_between(start: date, end: date) -> int:
    """Completed years from ``start`` to ``end``."""
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years


@beartype
def check_reference(
    references: ReferenceLookup,
    kind: ReferenceKind,
    reference_id: UUID | None,
    tenant_id: UUID,
    *,
    code: str,
    message: str,
    field: str,
) -> list[Violation]:
    """Report a set reference that does not resolve within the tenant."""
    if reference_id is None or references.reference_exists(kind, reference_id, tenant_id):
        return []
    return [Violation(code=code, message=message, field=field)]


class EntityValidator(ABC, Generic[EntityT]):
    """Base class for the vehicle, driver and policy validators.

    Every rule runs and contributes its violation; nothing short-circuits,
    so the list returned for a given input is always complete.
    """

    def __init__(self, clock: Callable[[], date] = date.today) -> None:
        self._clock = clock

    def today(self) -> date:
        """Reference date of the rules."""
        return self._clock()

    @abstractmethod
    def validate_for_creation(self, entity: EntityT, tenant_id: UUID) -> list[Violation]:
        """Validate a new entity."""

    @abstractmethod
    def validate_for_update(
        self, entity: EntityT, existing: EntityT, tenant_id: UUID
    ) -> list[Violation]:
        """Validate an updated entity against its stored state."""

    @abstractmethod
    def validate_required_fields(self, entity: EntityT) -> list[Violation]:
        """Check mandatory fields."""

    @abstractmethod
    def validate_references(self, entity: EntityT, tenant_id: UUID) -> list[Violation]:
        """Check that every reference resolves within the tenant."""

    @abstractmethod
    def validate_business_rules(self, entity: EntityT) -> list[Violation]:
        """Check formats, bounds and date consistency."""

    def validate(
        self,
        entity: EntityT,
        tenant_id: UUID,
        mode: ValidationMode = ValidationMode.CREATE,
        existing: EntityT | None = None,
    ) -> list[Violation]:
        """Dispatch on the validation mode.

        Raises:
            ValueError: update requested without the stored entity
        """
        if mode is ValidationMode.CREATE:
            return self.validate_for_creation(entity, tenant_id)
        if existing is None:
            raise ValueError("Update validation requires the existing entity")
        return self.validate_for_update(entity, existing, tenant_id)
