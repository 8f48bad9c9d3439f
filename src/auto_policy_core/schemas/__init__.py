# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Typed payloads returned by the rating and validation services."""

from .rating import PremiumCalculation, PricedPolicy
from .validation import ValidationMode, Violation

__all__ = [
    "PremiumCalculation",
    "PricedPolicy",
    "ValidationMode",
    "Violation",
]
