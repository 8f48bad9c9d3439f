# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Driver domain model."""

from datetime import date

from beartype import beartype
from pydantic import Field
from pydantic.types import UUID4

from .base import TenantScopedModel


@beartype
class Driver(TenantScopedModel):
    """Licensed driver attached to a customer."""

    customer_id: UUID4 | None = Field(None, description="Customer reference")
    license_number: str | None = Field(
        None, max_length=50, description="Driving license number, unique per tenant"
    )
    license_type_id: UUID4 | None = Field(None, description="License type reference")
    license_issue_date: date | None = None
    license_expiry_date: date | None = None
    years_of_driving_experience: int = Field(
        default=0, description="Declared driving experience in years"
    )
    is_primary_driver: bool = False

    @beartype
    def is_license_expired(self, today: date) -> bool:
        """Check whether the license has an expiry date in the past."""
        return self.license_expiry_date is not None and self.license_expiry_date < today
