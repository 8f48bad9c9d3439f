# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Bonus-malus coefficient bounds and the customer experience-rating record."""

from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

from beartype import beartype
from pydantic import Field, model_validator
from pydantic.types import UUID4

from .base import BaseModelConfig

MIN_COEFFICIENT: Final = Decimal("0.50")
MAX_COEFFICIENT: Final = Decimal("3.50")
INITIAL_COEFFICIENT: Final = Decimal("1.00")

_CENTS: Final = Decimal("0.01")


@beartype
def is_within_bounds(coefficient: Decimal) -> bool:
    """Check that a coefficient lies in [0.50, 3.50]."""
    return MIN_COEFFICIENT <= coefficient <= MAX_COEFFICIENT


@beartype
def clamp_coefficient(coefficient: Decimal) -> Decimal:
    """Clamp to [0.50, 3.50] and round half-up to two decimals."""
    if coefficient < MIN_COEFFICIENT:
        return MIN_COEFFICIENT
    if coefficient > MAX_COEFFICIENT:
        return MAX_COEFFICIENT
    return coefficient.quantize(_CENTS, rounding=ROUND_HALF_UP)


@beartype
class BonusMalusRecord(BaseModelConfig):
    """Experience-rating state of one customer within a tenant."""

    customer_id: UUID4 = Field(..., description="Customer the record belongs to")
    tenant_id: UUID4 = Field(..., description="Owning tenant (organization)")
    coefficient: Decimal = Field(
        ..., ge=MIN_COEFFICIENT, le=MAX_COEFFICIENT, decimal_places=2
    )
    previous_coefficient: Decimal | None = Field(
        None, ge=MIN_COEFFICIENT, le=MAX_COEFFICIENT, decimal_places=2
    )
    effective_date: date
    expiry_date: date | None = None
    years_without_claim: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    @beartype
    def validate_dates(self) -> "BonusMalusRecord":
        """Ensure the expiry date is after the effective date."""
        if self.expiry_date is not None and self.expiry_date <= self.effective_date:
            raise ValueError("Expiry date must be after effective date")
        return self

    @classmethod
    @beartype
    def initial(
        cls, customer_id: UUID4, tenant_id: UUID4, effective_date: date
    ) -> "BonusMalusRecord":
        """Neutral record for a customer without rating history."""
        return cls(
            customer_id=customer_id,
            tenant_id=tenant_id,
            coefficient=INITIAL_COEFFICIENT,
            effective_date=effective_date,
            expiry_date=_one_year_after(effective_date),
        )

    @beartype
    def succeed(
        self, new_coefficient: Decimal, claim_count: int, effective_date: date
    ) -> "BonusMalusRecord":
        """Build the record for the next rating period.

        The current record is left untouched; a clean year extends the
        claim-free streak, any claim resets it.
        """
        return self.model_copy(
            update={
                "coefficient": new_coefficient,
                "previous_coefficient": self.coefficient,
                "effective_date": effective_date,
                "expiry_date": _one_year_after(effective_date),
                "years_without_claim": (
                    self.years_without_claim + 1 if claim_count == 0 else 0
                ),
            }
        )


def _one_year_after(day: date) -> date:
    # 29 February has no counterpart in the following year
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        return day + timedelta(days=365)
