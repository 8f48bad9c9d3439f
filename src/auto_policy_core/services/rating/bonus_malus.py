# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Bonus-malus (no-claims discount / claims surcharge) engine.

Open pricing question: the claim surcharge compounds, 25% applied to the
already surcharged coefficient once per claim, rather than a flat
``0.25 * claim_count``. Two claims on 1.00 give 1.56, not 1.50.
"""

from datetime import date
from decimal import Decimal
from typing import Final

from beartype import beartype

from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...models.coefficient import (
    MAX_COEFFICIENT,
    MIN_COEFFICIENT,
    BonusMalusRecord,
    clamp_coefficient,
    is_within_bounds,
)

logger = get_logger(__name__)

ANNUAL_REDUCTION_RATE: Final = Decimal("0.05")
CLAIM_SURCHARGE_RATE: Final = Decimal("0.25")


@beartype
class BonusMalusCalculator:
    """Experience-rating coefficient calculator. Stateless and pure."""

    @beartype
    def calculate_new_coefficient(
        self, current_coefficient: Decimal, claim_count: int = 0
    ) -> Result[Decimal, str]:
        """Compute next period's coefficient.

        A claim-free period applies the 5% annual reduction; otherwise the
        25% surcharge is applied once per claim, capped after each step.

        Args:
            current_coefficient: Coefficient of the ending period
            claim_count: Claims reported during the ending period

        Returns:
            Result containing the new coefficient or error message
        """
        if claim_count < 0:
            return Err(f"Claim count cannot be negative: {claim_count}")
        if not is_within_bounds(current_coefficient):
            return Err(
                f"Bonus-malus coefficient {current_coefficient} outside valid range "
                f"[{MIN_COEFFICIENT}, {MAX_COEFFICIENT}]"
            )

        if claim_count == 0:
            return Ok(self.apply_annual_reduction(current_coefficient))

        coefficient = current_coefficient
        for _ in range(claim_count):
            coefficient = self.apply_claim_surcharge(coefficient)
        return Ok(coefficient)

    @beartype
    def apply_annual_reduction(self, current_coefficient: Decimal) -> Decimal:
        """Apply one claim-free year, never going below the floor."""
        reduced = current_coefficient - current_coefficient * ANNUAL_REDUCTION_RATE
        return clamp_coefficient(reduced)

    @beartype
    def apply_claim_surcharge(self, current_coefficient: Decimal) -> Decimal:
        """Apply the surcharge for a single claim, never exceeding the cap."""
        surcharged = current_coefficient + current_coefficient * CLAIM_SURCHARGE_RATE
        return clamp_coefficient(surcharged)

    @beartype
    def update_record(
        self, record: BonusMalusRecord, claim_count: int, effective_date: date
    ) -> Result[BonusMalusRecord, str]:
        """Roll a customer's record over to the next rating period."""
        result = self.calculate_new_coefficient(record.coefficient, claim_count)
        if result.is_err():
            return result

        new_coefficient = result.unwrap()
        logger.debug(
            "Bonus-malus for customer %s: %s -> %s (%d claims)",
            record.customer_id,
            record.coefficient,
            new_coefficient,
            claim_count,
        )
        return Ok(record.succeed(new_coefficient, claim_count, effective_date))
