# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""In-memory, tenant-scoped implementation of the lookup ports.

Lets callers run the rating core without a database: reference data,
vehicles, drivers and existing policies are registered up front and then
only read. Anything registered under another tenant is invisible.
"""

from decimal import Decimal
from uuid import UUID

from beartype import beartype
from pydantic import Field
from pydantic.types import UUID4

from ..models.base import BaseModelConfig
from ..models.driver import Driver
from ..models.enums import ReferenceKind
from ..models.policy import AutoPolicy
from ..models.vehicle import Vehicle

_TARIFFED_KINDS = frozenset({ReferenceKind.CATEGORY, ReferenceKind.USAGE})


@beartype
class ReferenceEntry(BaseModelConfig):
    """One row of tenant reference data."""

    id: UUID4 = Field(..., description="Reference identifier")
    tenant_id: UUID4 = Field(..., description="Owning tenant (organization)")
    kind: ReferenceKind
    name: str = Field(..., min_length=1, max_length=100)
    tariff_coefficient: Decimal | None = Field(
        None,
        gt=Decimal("0"),
        description="Risk multiplier; only categories and usages carry one",
    )


@beartype
class InMemoryReferenceCatalog:
    """Dictionary-backed ``EntityLookup`` and ``ReferenceLookup``."""

    def __init__(self) -> None:
        self._references: dict[UUID, ReferenceEntry] = {}
        self._vehicles: dict[UUID, Vehicle] = {}
        self._drivers: dict[UUID, Driver] = {}
        self._policy_numbers: set[tuple[UUID, str]] = set()

    # Registration

    @beartype
    def add_reference(self, entry: ReferenceEntry) -> ReferenceEntry:
        """Register reference data.

        Raises:
            ValueError: a tariff coefficient on a kind that is not tariffed
        """
        if entry.tariff_coefficient is not None and entry.kind not in _TARIFFED_KINDS:
            raise ValueError(f"{entry.kind.value} references do not carry a tariff")
        self._references[entry.id] = entry
        return entry

    @beartype
    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        """Register an existing vehicle."""
        self._vehicles[vehicle.id] = vehicle
        return vehicle

    @beartype
    def add_driver(self, driver: Driver) -> Driver:
        """Register an existing driver."""
        self._drivers[driver.id] = driver
        return driver

    @beartype
    def add_policy(self, policy: AutoPolicy) -> AutoPolicy:
        """Register an existing policy number."""
        if policy.policy_number:
            self._policy_numbers.add((policy.tenant_id, policy.policy_number))
        return policy

    # EntityLookup

    @beartype
    def vehicle_exists(self, vehicle_id: UUID, tenant_id: UUID) -> bool:
        return self.find_vehicle(vehicle_id, tenant_id) is not None

    @beartype
    def driver_exists(self, driver_id: UUID, tenant_id: UUID) -> bool:
        return self.find_driver(driver_id, tenant_id) is not None

    @beartype
    def find_vehicle(self, vehicle_id: UUID, tenant_id: UUID) -> Vehicle | None:
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None or vehicle.tenant_id != tenant_id:
            return None
        return vehicle

    @beartype
    def find_driver(self, driver_id: UUID, tenant_id: UUID) -> Driver | None:
        driver = self._drivers.get(driver_id)
        if driver is None or driver.tenant_id != tenant_id:
            return None
        return driver

    @beartype
    def policy_number_exists(self, policy_number: str, tenant_id: UUID) -> bool:
        return (tenant_id, policy_number) in self._policy_numbers

    @beartype
    def license_number_exists(
        self,
        license_number: str,
        tenant_id: UUID,
        exclude_driver_id: UUID | None = None,
    ) -> bool:
        return any(
            driver.tenant_id == tenant_id
            and driver.license_number == license_number
            and driver.id != exclude_driver_id
            for driver in self._drivers.values()
        )

    @beartype
    def registration_number_exists(
        self,
        registration_number: str,
        tenant_id: UUID,
        exclude_vehicle_id: UUID | None = None,
    ) -> bool:
        return any(
            vehicle.tenant_id == tenant_id
            and vehicle.registration_number == registration_number
            and vehicle.id != exclude_vehicle_id
            for vehicle in self._vehicles.values()
        )

    # ReferenceLookup

    @beartype
    def reference_exists(
        self, kind: ReferenceKind, reference_id: UUID, tenant_id: UUID
    ) -> bool:
        return self._find_reference(kind, reference_id, tenant_id) is not None

    @beartype
    def category_tariff_factor(
        self, category_id: UUID, tenant_id: UUID
    ) -> Decimal | None:
        entry = self._find_reference(ReferenceKind.CATEGORY, category_id, tenant_id)
        return entry.tariff_coefficient if entry else None

    @beartype
    def usage_tariff_factor(self, usage_id: UUID, tenant_id: UUID) -> Decimal | None:
        entry = self._find_reference(ReferenceKind.USAGE, usage_id, tenant_id)
        return entry.tariff_coefficient if entry else None

    def _find_reference(
        self, kind: ReferenceKind, reference_id: UUID, tenant_id: UUID
    ) -> ReferenceEntry | None:
        entry = self._references.get(reference_id)
        if entry is None or entry.kind is not kind or entry.tenant_id != tenant_id:
            return None
        return entry
