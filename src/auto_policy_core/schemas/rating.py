# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Pydantic models used as typed payloads for rating Result objects.

These models give a structure to what the pipeline produces so that
callers do not pass naked tuples or dicts around.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import CoverageType
from ..models.policy import AutoPolicy

__all__ = [
    "PremiumCalculation",
    "PricedPolicy",
]


class PremiumCalculation(BaseModel):
    """Every stage of a premium calculation."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    coverage_type: CoverageType
    base_premium: Decimal = Field(..., ge=Decimal("0"))
    factors: dict[str, Decimal] = Field(
        ..., description="Adjustment multipliers in evaluation order"
    )
    adjusted_premium: Decimal = Field(..., ge=Decimal("0"))
    bonus_malus_coefficient: Decimal = Field(..., gt=Decimal("0"))
    final_premium: Decimal = Field(..., ge=Decimal("0"))
    coverages: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Informational split of the final premium; lines are rounded "
        "individually and may not add up to the final premium to the cent",
    )

    @property
    def combined_factor(self) -> Decimal:
        """Product of all adjustment factors."""
        product = Decimal("1")
        for factor in self.factors.values():
            product *= factor
        return product


class PricedPolicy(BaseModel):
    """A validated policy carrying its freshly computed premium."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        validate_default=True,
    )

    policy: AutoPolicy
    calculation: PremiumCalculation
