"""Rating and validation services."""

from .policy_rating_service import AutoPolicyRatingService
from .reference_catalog import InMemoryReferenceCatalog, ReferenceEntry

__all__ = [
    "AutoPolicyRatingService",
    "InMemoryReferenceCatalog",
    "ReferenceEntry",
]
