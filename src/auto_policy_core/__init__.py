"""Auto insurance rating and validation core.

Premium calculation (bonus-malus included) and fail-slow validation of
vehicles, drivers and auto policies, driven through tenant-scoped lookup
ports.
"""

from .models import AutoPolicy, BonusMalusRecord, CoverageType, Driver, Vehicle
from .schemas import PremiumCalculation, PricedPolicy, ValidationMode, Violation
from .services import AutoPolicyRatingService, InMemoryReferenceCatalog

__version__ = "0.1.0"

__all__ = [
    "AutoPolicy",
    "AutoPolicyRatingService",
    "BonusMalusRecord",
    "CoverageType",
    "Driver",
    "InMemoryReferenceCatalog",
    "PremiumCalculation",
    "PricedPolicy",
    "ValidationMode",
    "Vehicle",
    "Violation",
    "__version__",
]
