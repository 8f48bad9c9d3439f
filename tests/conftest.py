"""Test configuration and fixtures for the auto rating core.

Every date-dependent component is wired to a fixed clock so that vehicle
ages, license ages and start-date windows are reproducible.
"""

from collections.abc import Callable, Generator
from datetime import date
from uuid import UUID, uuid4

import pytest

from auto_policy_core.core.config import Settings, clear_settings_cache
from auto_policy_core.models import Driver, ReferenceKind, Vehicle
from auto_policy_core.services import AutoPolicyRatingService, InMemoryReferenceCatalog
from auto_policy_core.services.rating import BonusMalusCalculator, PremiumCalculator
from auto_policy_core.services.validation import (
    DriverValidator,
    PolicyValidator,
    VehicleValidator,
)

from tests.fixtures.test_data import TODAY, make_driver, make_vehicle, seed_references


@pytest.fixture(autouse=True)
def reset_settings() -> Generator[None, None, None]:
    """Drop cached settings around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def today() -> date:
    """Reference date of the rules under test."""
    return TODAY


@pytest.fixture
def clock() -> Callable[[], date]:
    """Clock frozen on the reference date."""
    return lambda: TODAY


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture
def tenant_id() -> UUID:
    """Tenant the entities under test belong to."""
    return uuid4()


@pytest.fixture
def other_tenant_id() -> UUID:
    """A second, unrelated tenant."""
    return uuid4()


@pytest.fixture
def catalog() -> InMemoryReferenceCatalog:
    """Empty lookup catalog."""
    return InMemoryReferenceCatalog()


@pytest.fixture
def references(
    catalog: InMemoryReferenceCatalog, tenant_id: UUID
) -> dict[ReferenceKind, UUID]:
    """One reference of every kind for the tenant, tariffs at 1.0."""
    return seed_references(catalog, tenant_id)


@pytest.fixture
def vehicle(
    catalog: InMemoryReferenceCatalog,
    tenant_id: UUID,
    references: dict[ReferenceKind, UUID],
) -> Vehicle:
    """Registered vehicle with neutral rating characteristics."""
    return catalog.add_vehicle(make_vehicle(tenant_id, references))


@pytest.fixture
def driver(
    catalog: InMemoryReferenceCatalog,
    tenant_id: UUID,
    references: dict[ReferenceKind, UUID],
) -> Driver:
    """Registered primary driver."""
    return catalog.add_driver(make_driver(tenant_id, references))


@pytest.fixture
def vehicle_validator(
    catalog: InMemoryReferenceCatalog,
    settings: Settings,
    clock: Callable[[], date],
) -> VehicleValidator:
    return VehicleValidator(catalog, catalog, settings, clock)


@pytest.fixture
def driver_validator(
    catalog: InMemoryReferenceCatalog,
    settings: Settings,
    clock: Callable[[], date],
) -> DriverValidator:
    return DriverValidator(catalog, catalog, settings, clock)


@pytest.fixture
def policy_validator(
    catalog: InMemoryReferenceCatalog,
    vehicle_validator: VehicleValidator,
    driver_validator: DriverValidator,
    settings: Settings,
    clock: Callable[[], date],
) -> PolicyValidator:
    return PolicyValidator(
        catalog, catalog, vehicle_validator, driver_validator, settings, clock
    )


@pytest.fixture
def premium_calculator(
    catalog: InMemoryReferenceCatalog,
    settings: Settings,
    clock: Callable[[], date],
) -> PremiumCalculator:
    return PremiumCalculator(catalog, settings, clock)


@pytest.fixture
def bonus_malus_calculator() -> BonusMalusCalculator:
    return BonusMalusCalculator()


@pytest.fixture
def service(
    catalog: InMemoryReferenceCatalog,
    settings: Settings,
    clock: Callable[[], date],
) -> AutoPolicyRatingService:
    """Rating service over the in-memory catalog."""
    return AutoPolicyRatingService(catalog, catalog, settings, clock)
