# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Vehicle domain model.

Fields are deliberately permissive: a vehicle with missing or malformed
data can still be built so the validators can report every problem at
once instead of failing on the first one.
"""

from datetime import date
from decimal import Decimal

from beartype import beartype
from pydantic import Field
from pydantic.types import UUID4

from .base import TenantScopedModel
from .enums import ParkingType


@beartype
class Vehicle(TenantScopedModel):
    """Insured vehicle as seen by the rating core."""

    registration_number: str | None = Field(
        None, max_length=50, description="Registration plate, unique per tenant"
    )
    manufacturer_id: UUID4 | None = Field(None, description="Make reference")
    model_id: UUID4 | None = Field(None, description="Model reference")
    category_id: UUID4 | None = Field(None, description="Tariff category reference")
    subcategory_id: UUID4 | None = Field(None, description="Subcategory reference")
    usage_id: UUID4 | None = Field(None, description="Usage reference")
    fuel_type_id: UUID4 | None = Field(None, description="Fuel type reference")
    color_id: UUID4 | None = Field(None, description="Color reference")
    owner_id: UUID4 | None = Field(None, description="Owning customer")

    year: int | None = Field(None, description="Model year")
    engine_power: int | None = Field(None, description="Engine power (hp)")
    engine_size: int | None = Field(None, description="Engine displacement (cc)")
    mileage: int | None = Field(None, description="Odometer / yearly mileage (km)")
    vin: str | None = Field(None, max_length=32, description="Vehicle identification number")

    purchase_date: date | None = None
    purchase_value: Decimal | None = None
    current_value: Decimal | None = None

    has_anti_theft_device: bool = False
    parking_type: ParkingType | None = None

    @beartype
    def age_in_years(self, today: date) -> int | None:
        """Calendar-year age of the vehicle, or None when the year is unknown."""
        if self.year is None:
            return None
        return today.year - self.year
