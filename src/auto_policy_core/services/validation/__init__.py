"""Entity validation services.

Validators accumulate violations instead of raising:
- VehicleValidator: vehicle registration, references and insurability
- DriverValidator: license data and primary driver eligibility
- PolicyValidator: policy rules composed with the two validators above
"""

from .driver_validator import DriverValidator
from .policy_validator import PolicyValidator
from .rules import EntityValidator
from .vehicle_validator import VehicleValidator

__all__ = [
    "DriverValidator",
    "EntityValidator",
    "PolicyValidator",
    "VehicleValidator",
]
