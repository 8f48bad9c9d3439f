# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Auto policy domain model."""

from datetime import date
from decimal import Decimal

from beartype import beartype
from pydantic import Field
from pydantic.types import UUID4

from .base import TenantScopedModel
from .enums import CoverageType, ParkingType, PolicyStatus


@beartype
class AutoPolicy(TenantScopedModel):
    """Auto insurance policy proposed for creation or update.

    Geographic and circulation zones are mandatory under the CIMA code;
    they are optional here only so their absence can be reported.
    """

    policy_number: str | None = Field(
        None, max_length=50, description="Policy number, unique per tenant"
    )
    status: PolicyStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    premium_amount: Decimal | None = Field(None, description="Annual premium")

    coverage_type: CoverageType | None = None
    bonus_malus_coefficient: Decimal | None = Field(
        None, description="Experience-rating multiplier in [0.50, 3.50]"
    )
    annual_mileage: int | None = None
    parking_type: ParkingType | None = None
    has_anti_theft_device: bool = False

    claim_history_category_id: UUID4 | None = None
    vehicle_id: UUID4 | None = None
    primary_driver_id: UUID4 | None = None
    geographic_zone_id: UUID4 | None = None
    circulation_zone_id: UUID4 | None = None
