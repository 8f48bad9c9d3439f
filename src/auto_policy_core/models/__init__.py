# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Immutable domain models consumed by the rating and validation core."""

from .base import BaseModelConfig, TenantScopedModel
from .coefficient import (
    INITIAL_COEFFICIENT,
    MAX_COEFFICIENT,
    MIN_COEFFICIENT,
    BonusMalusRecord,
    clamp_coefficient,
    is_within_bounds,
)
from .driver import Driver
from .enums import CoverageType, ParkingType, PolicyStatus, ReferenceKind
from .policy import AutoPolicy
from .vehicle import Vehicle

__all__ = [
    "AutoPolicy",
    "BaseModelConfig",
    "BonusMalusRecord",
    "CoverageType",
    "Driver",
    "INITIAL_COEFFICIENT",
    "MAX_COEFFICIENT",
    "MIN_COEFFICIENT",
    "ParkingType",
    "PolicyStatus",
    "ReferenceKind",
    "TenantScopedModel",
    "Vehicle",
    "clamp_coefficient",
    "is_within_bounds",
]
