"""Unit tests for the in-memory lookup catalog."""

from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from auto_policy_core.core.types import EntityLookup, ReferenceLookup
from auto_policy_core.models import Driver, ReferenceKind, Vehicle
from auto_policy_core.services import InMemoryReferenceCatalog, ReferenceEntry

from tests.fixtures.test_data import make_driver, make_policy, make_vehicle


def test_catalog_implements_lookup_ports(catalog: InMemoryReferenceCatalog):
    """Catalog implements lookup ports."""
    assert isinstance(catalog, EntityLookup)
    assert isinstance(catalog, ReferenceLookup)


class TestReferences:
    def test_reference_scoped_by_tenant_and_kind(
        self,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        other_tenant_id: UUID,
        references: dict[ReferenceKind, UUID],
    ):
        """Reference scoped by tenant and kind."""
        color_id = references[ReferenceKind.COLOR]

        assert catalog.reference_exists(ReferenceKind.COLOR, color_id, tenant_id)
        assert not catalog.reference_exists(ReferenceKind.COLOR, color_id, other_tenant_id)
        assert not catalog.reference_exists(ReferenceKind.MODEL, color_id, tenant_id)

    def test_tariff_factors(
        self,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        other_tenant_id: UUID,
        references: dict[ReferenceKind, UUID],
    ):
        """Test tariff factors are scoped by tenant and kind."""
        category_id = references[ReferenceKind.CATEGORY]

        assert catalog.category_tariff_factor(category_id, tenant_id) == Decimal("1.0")
        assert catalog.category_tariff_factor(category_id, other_tenant_id) is None
        assert catalog.usage_tariff_factor(category_id, tenant_id) is None

    def test_tariff_only_on_categories_and_usages(
        self, catalog: InMemoryReferenceCatalog, tenant_id: UUID
    ):
        """Tariff only on categories and usages."""
        entry = ReferenceEntry(
            id=uuid4(),
            tenant_id=tenant_id,
            kind=ReferenceKind.COLOR,
            name="Red",
            tariff_coefficient=Decimal("1.1"),
        )

        with pytest.raises(ValueError, match="tariff"):
            catalog.add_reference(entry)


class TestEntities:
    def test_find_is_tenant_scoped(
        self,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        other_tenant_id: UUID,
        vehicle: Vehicle,
        driver: Driver,
    ):
        """Find is tenant scoped."""
        assert catalog.find_vehicle(vehicle.id, tenant_id) == vehicle
        assert catalog.find_vehicle(vehicle.id, other_tenant_id) is None
        assert catalog.driver_exists(driver.id, tenant_id)
        assert not catalog.driver_exists(driver.id, other_tenant_id)

    def test_uniqueness_lookups_exclude_self(
        self,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        vehicle: Vehicle,
        driver: Driver,
    ):
        """Uniqueness lookups exclude self."""
        assert catalog.registration_number_exists("AB-123-CD", tenant_id)
        assert not catalog.registration_number_exists(
            "AB-123-CD", tenant_id, exclude_vehicle_id=vehicle.id
        )
        assert catalog.license_number_exists("DL-0001", tenant_id)
        assert not catalog.license_number_exists(
            "DL-0001", tenant_id, exclude_driver_id=driver.id
        )

    def test_policy_numbers(
        self,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        other_tenant_id: UUID,
        references: dict[ReferenceKind, UUID],
    ):
        """Test policy numbers are tenant scoped."""
        vehicle = make_vehicle(tenant_id, references)
        driver = make_driver(tenant_id, references)
        catalog.add_policy(make_policy(tenant_id, references, vehicle, driver))

        assert catalog.policy_number_exists("POL-2026-0001", tenant_id)
        assert not catalog.policy_number_exists("POL-2026-0001", other_tenant_id)
