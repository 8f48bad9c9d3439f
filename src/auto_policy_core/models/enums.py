# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Enumerations shared by the auto insurance entities."""

from enum import Enum


class CoverageType(str, Enum):
    """Scope of an auto policy."""

    THIRD_PARTY = "THIRD_PARTY"
    COMPREHENSIVE = "COMPREHENSIVE"


class ParkingType(str, Enum):
    """Where the vehicle is usually parked overnight."""

    GARAGE = "GARAGE"
    PARKING_LOT = "PARKING_LOT"
    STREET = "STREET"


class PolicyStatus(str, Enum):
    """Enumeration of policy states."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"
    SUSPENDED = "SUSPENDED"


class ReferenceKind(str, Enum):
    """Tenant-scoped reference data the validators resolve."""

    MANUFACTURER = "MANUFACTURER"
    MODEL = "MODEL"
    CATEGORY = "CATEGORY"
    SUBCATEGORY = "SUBCATEGORY"
    USAGE = "USAGE"
    FUEL_TYPE = "FUEL_TYPE"
    COLOR = "COLOR"
    LICENSE_TYPE = "LICENSE_TYPE"
    GEOGRAPHIC_ZONE = "GEOGRAPHIC_ZONE"
    CIRCULATION_ZONE = "CIRCULATION_ZONE"
    CLAIM_HISTORY_CATEGORY = "CLAIM_HISTORY_CATEGORY"
