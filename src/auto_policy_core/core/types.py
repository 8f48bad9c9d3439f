# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Lookup ports consumed by the rating core.

The persistence layer implements these; the core only calls them. They are
``runtime_checkable`` so beartype ``isinstance`` checks accept both
production adapters and test doubles exposing the same methods. Every
method takes the tenant id: an entity owned by another tenant must be
answered as non-existent.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from uuid import UUID

if TYPE_CHECKING:
    from ..models.driver import Driver
    from ..models.enums import ReferenceKind
    from ..models.vehicle import Vehicle


@runtime_checkable
class EntityLookup(Protocol):
    """Read-only access to vehicles, drivers and policy numbers."""

    def vehicle_exists(self, vehicle_id: UUID, tenant_id: UUID) -> bool: ...

    def driver_exists(self, driver_id: UUID, tenant_id: UUID) -> bool: ...

    def find_vehicle(self, vehicle_id: UUID, tenant_id: UUID) -> Vehicle | None: ...

    def find_driver(self, driver_id: UUID, tenant_id: UUID) -> Driver | None: ...

    def policy_number_exists(self, policy_number: str, tenant_id: UUID) -> bool: ...

    def license_number_exists(
        self,
        license_number: str,
        tenant_id: UUID,
        exclude_driver_id: UUID | None = None,
    ) -> bool: ...

    def registration_number_exists(
        self,
        registration_number: str,
        tenant_id: UUID,
        exclude_vehicle_id: UUID | None = None,
    ) -> bool: ...


@runtime_checkable
class ReferenceLookup(Protocol):
    """Read-only access to reference data and tariff factors."""

    def reference_exists(
        self, kind: ReferenceKind, reference_id: UUID, tenant_id: UUID
    ) -> bool: ...

    def category_tariff_factor(
        self, category_id: UUID, tenant_id: UUID
    ) -> Decimal | None: ...

    def usage_tariff_factor(self, usage_id: UUID, tenant_id: UUID) -> Decimal | None: ...
