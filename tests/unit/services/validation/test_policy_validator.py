"""Unit tests for auto policy validation rules."""

from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from auto_policy_core.models import (
    AutoPolicy,
    CoverageType,
    Driver,
    ReferenceKind,
    Vehicle,
)
from auto_policy_core.schemas import ValidationMode
from auto_policy_core.services import InMemoryReferenceCatalog
from auto_policy_core.services.validation import PolicyValidator

from tests.fixtures.test_data import TODAY, codes, make_driver, make_policy, make_vehicle


@pytest.fixture
def policy(
    tenant_id: UUID,
    references: dict[ReferenceKind, UUID],
    vehicle: Vehicle,
    driver: Driver,
) -> AutoPolicy:
    """Valid one year third-party policy."""
    return make_policy(tenant_id, references, vehicle, driver)


class TestPolicyCreation:
    """Validation of a new policy."""

    def test_valid_policy_has_no_violations(
        self, policy_validator: PolicyValidator, tenant_id: UUID, policy: AutoPolicy
    ):
        """Valid policy has no violations."""
        assert policy_validator.validate_for_creation(policy, tenant_id) == []

    def test_every_missing_field_is_reported(
        self, policy_validator: PolicyValidator, tenant_id: UUID
    ):
        """Every missing field is reported."""
        policy = AutoPolicy(id=uuid4(), tenant_id=tenant_id)

        violations = policy_validator.validate_for_creation(policy, tenant_id)

        assert codes(violations) == [
            "POLICY_NUMBER_REQUIRED",
            "POLICY_STATUS_REQUIRED",
            "POLICY_START_DATE_REQUIRED",
            "POLICY_END_DATE_REQUIRED",
            "POLICY_PREMIUM_REQUIRED",
            "POLICY_VEHICLE_REQUIRED",
            "POLICY_PRIMARY_DRIVER_REQUIRED",
            "POLICY_COVERAGE_TYPE_REQUIRED",
            "POLICY_BONUS_MALUS_REQUIRED",
            "POLICY_CLAIM_HISTORY_CATEGORY_REQUIRED",
            "POLICY_GEOGRAPHIC_ZONE_REQUIRED",
            "POLICY_CIRCULATION_ZONE_REQUIRED",
            "POLICY_PARKING_TYPE_REQUIRED",
        ]

    def test_zones_are_required(
        self, policy_validator: PolicyValidator, tenant_id: UUID, policy: AutoPolicy
    ):
        """Zones are required."""
        policy = policy.model_copy(
            update={"geographic_zone_id": None, "circulation_zone_id": None}
        )

        violations = policy_validator.validate_for_creation(policy, tenant_id)

        assert codes(violations) == [
            "POLICY_GEOGRAPHIC_ZONE_REQUIRED",
            "POLICY_CIRCULATION_ZONE_REQUIRED",
        ]

    def test_vehicle_of_another_tenant_is_not_found(
        self,
        policy_validator: PolicyValidator,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        other_tenant_id: UUID,
        references: dict[ReferenceKind, UUID],
        driver: Driver,
    ):
        """Vehicle of another tenant is not found."""
        foreign_vehicle = catalog.add_vehicle(make_vehicle(other_tenant_id, references))
        policy = make_policy(tenant_id, references, foreign_vehicle, driver)

        violations = policy_validator.validate_for_creation(policy, tenant_id)

        assert codes(violations) == ["POLICY_VEHICLE_NOT_FOUND"]

    def test_unknown_driver_and_zones(
        self,
        policy_validator: PolicyValidator,
        tenant_id: UUID,
        policy: AutoPolicy,
    ):
        """Unknown driver and zones."""
        policy = policy.model_copy(
            update={
                "primary_driver_id": uuid4(),
                "geographic_zone_id": uuid4(),
                "circulation_zone_id": uuid4(),
                "claim_history_category_id": uuid4(),
            }
        )

        violations = policy_validator.validate_references(policy, tenant_id)

        assert codes(violations) == [
            "POLICY_PRIMARY_DRIVER_NOT_FOUND",
            "POLICY_GEOGRAPHIC_ZONE_NOT_FOUND",
            "POLICY_CIRCULATION_ZONE_NOT_FOUND",
            "POLICY_CLAIM_HISTORY_CATEGORY_NOT_FOUND",
        ]

    def test_duplicate_policy_number(
        self,
        policy_validator: PolicyValidator,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        policy: AutoPolicy,
    ):
        """Duplicate policy number."""
        catalog.add_policy(policy)
        newcomer = policy.model_copy(update={"id": uuid4()})

        violations = policy_validator.validate_for_creation(newcomer, tenant_id)

        assert codes(violations) == ["POLICY_NUMBER_DUPLICATE"]

    def test_policy_number_format(
        self, policy_validator: PolicyValidator, tenant_id: UUID, policy: AutoPolicy
    ):
        """Policy number format."""
        policy = policy.model_copy(update={"policy_number": "pol/2026"})

        violations = policy_validator.validate_business_rules(policy)

        assert codes(violations) == ["POLICY_NUMBER_FORMAT"]


class TestPolicyDates:
    """Start and end date rules."""

    @pytest.mark.parametrize(
        ("days_ago", "expected"),
        [(30, []), (31, ["POLICY_START_DATE_TOO_OLD"]), (40, ["POLICY_START_DATE_TOO_OLD"])],
    )
    def test_start_date_look_back(
        self,
        policy_validator: PolicyValidator,
        policy: AutoPolicy,
        days_ago: int,
        expected: list[str],
    ):
        """Test the start date look-back on creation."""
        start = TODAY - timedelta(days=days_ago)
        policy = policy.model_copy(
            update={"start_date": start, "end_date": start.replace(year=start.year + 1)}
        )

        assert codes(policy_validator.validate_dates(policy)) == expected

    def test_start_after_end(self, policy_validator: PolicyValidator, policy: AutoPolicy):
        """Start after end."""
        policy = policy.model_copy(update={"end_date": TODAY - timedelta(days=1)})

        violations = policy_validator.validate_dates(policy)

        assert codes(violations) == [
            "POLICY_START_NOT_BEFORE_END",
            "POLICY_DURATION_TOO_SHORT",
        ]

    @pytest.mark.parametrize(
        ("end_date", "expected"),
        [
            (date(2026, 11, 18), ["POLICY_DURATION_TOO_SHORT"]),
            (date(2026, 11, 19), []),
            (date(2027, 10, 19), []),
            (date(2027, 10, 20), ["POLICY_DURATION_TOO_LONG"]),
            (date(2027, 11, 19), ["POLICY_DURATION_TOO_LONG"]),
        ],
    )
    def test_duration_between_one_month_and_one_year(
        self,
        policy_validator: PolicyValidator,
        policy: AutoPolicy,
        end_date: date,
        expected: list[str],
    ):
        """Duration between one month and one year."""
        policy = policy.model_copy(update={"end_date": end_date})

        assert codes(policy_validator.validate_dates(policy)) == expected

    def test_month_end_start_date(
        self, policy_validator: PolicyValidator, policy: AutoPolicy
    ):
        """One month after 31 January is the last day of February."""
        policy = policy.model_copy(
            update={"start_date": date(2027, 1, 31), "end_date": date(2027, 2, 28)}
        )

        assert policy_validator.validate_dates(policy) == []


class TestPolicyAmounts:
    """Premium, coefficient and mileage rules."""

    @pytest.mark.parametrize(
        ("premium", "expected"),
        [
            (Decimal("0"), ["POLICY_PREMIUM_NOT_POSITIVE"]),
            (Decimal("-10"), ["POLICY_PREMIUM_NOT_POSITIVE"]),
            (Decimal("0.01"), []),
            (Decimal("10000"), []),
            (Decimal("10000.01"), ["POLICY_PREMIUM_ABNORMALLY_HIGH"]),
        ],
    )
    def test_premium_range(
        self,
        policy_validator: PolicyValidator,
        policy: AutoPolicy,
        premium: Decimal,
        expected: list[str],
    ):
        """Test the plausible premium range."""
        policy = policy.model_copy(update={"premium_amount": premium})

        assert codes(policy_validator.validate_premium(policy)) == expected

    @pytest.mark.parametrize(
        ("coefficient", "expected"),
        [
            (Decimal("0.49"), ["POLICY_BONUS_MALUS_BELOW_MINIMUM"]),
            (Decimal("0.50"), []),
            (Decimal("3.50"), []),
            (Decimal("3.51"), ["POLICY_BONUS_MALUS_ABOVE_MAXIMUM"]),
        ],
    )
    def test_bonus_malus_bounds(
        self,
        policy_validator: PolicyValidator,
        policy: AutoPolicy,
        coefficient: Decimal,
        expected: list[str],
    ):
        """Test the bonus-malus coefficient bounds."""
        policy = policy.model_copy(update={"bonus_malus_coefficient": coefficient})

        assert codes(policy_validator.validate_business_rules(policy)) == expected

    def test_negative_mileage_and_missing_parking(
        self, policy_validator: PolicyValidator, policy: AutoPolicy
    ):
        """Negative mileage and missing parking."""
        policy = policy.model_copy(update={"annual_mileage": -1, "parking_type": None})

        assert codes(policy_validator.validate_business_rules(policy)) == [
            "POLICY_ANNUAL_MILEAGE_NEGATIVE",
            "POLICY_PARKING_TYPE_REQUIRED",
        ]


class TestPolicyEligibility:
    """Vehicle and primary driver rules applied through the policy."""

    @pytest.mark.parametrize(
        ("year", "expected"),
        [(2011, []), (2010, ["COMPREHENSIVE_VEHICLE_TOO_OLD"])],
    )
    def test_comprehensive_vehicle_age(
        self,
        policy_validator: PolicyValidator,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        references: dict[ReferenceKind, UUID],
        driver: Driver,
        year: int,
        expected: list[str],
    ):
        """Comprehensive vehicle age."""
        old_vehicle = catalog.add_vehicle(
            make_vehicle(tenant_id, references, year=year, purchase_date=None)
        )
        policy = make_policy(
            tenant_id,
            references,
            old_vehicle,
            driver,
            coverage_type=CoverageType.COMPREHENSIVE,
        )

        violations = policy_validator.validate_for_creation(policy, tenant_id)

        assert codes(violations) == expected

    def test_vehicle_too_old_to_insure(
        self,
        policy_validator: PolicyValidator,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        references: dict[ReferenceKind, UUID],
        driver: Driver,
    ):
        """Vehicle too old to insure."""
        old_vehicle = catalog.add_vehicle(
            make_vehicle(tenant_id, references, year=1990, purchase_date=None)
        )
        policy = make_policy(tenant_id, references, old_vehicle, driver)

        violations = policy_validator.validate_for_creation(policy, tenant_id)

        assert codes(violations) == ["VEHICLE_TOO_OLD_TO_INSURE"]

    def test_inexperienced_primary_driver(
        self,
        policy_validator: PolicyValidator,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        references: dict[ReferenceKind, UUID],
        vehicle: Vehicle,
    ):
        """Inexperienced primary driver."""
        novice = catalog.add_driver(
            make_driver(
                tenant_id,
                references,
                license_number="DL-0009",
                years_of_driving_experience=1,
            )
        )
        policy = make_policy(tenant_id, references, vehicle, novice)

        violations = policy_validator.validate_for_creation(policy, tenant_id)

        assert codes(violations) == ["PRIMARY_DRIVER_INEXPERIENCED"]


class TestPolicyUpdate:
    """Validation of changes to an existing policy."""

    def test_old_start_date_allowed_on_update(
        self, policy_validator: PolicyValidator, tenant_id: UUID, policy: AutoPolicy
    ):
        """Old start date allowed on update."""
        start = TODAY - timedelta(days=90)
        existing = policy.model_copy(
            update={"start_date": start, "end_date": date(2027, 7, 21)}
        )
        updated = existing.model_copy(update={"premium_amount": Decimal("550.00")})

        violations = policy_validator.validate(
            updated, tenant_id, ValidationMode.UPDATE, existing
        )

        assert violations == []

    def test_existing_number_is_not_a_duplicate_on_update(
        self,
        policy_validator: PolicyValidator,
        catalog: InMemoryReferenceCatalog,
        tenant_id: UUID,
        policy: AutoPolicy,
    ):
        """Existing number is not a duplicate on update."""
        catalog.add_policy(policy)

        assert policy_validator.validate_for_update(policy, policy, tenant_id) == []

    def test_policy_number_is_immutable(
        self, policy_validator: PolicyValidator, tenant_id: UUID, policy: AutoPolicy
    ):
        """Policy number is immutable."""
        updated = policy.model_copy(update={"policy_number": "POL-2026-0002"})

        violations = policy_validator.validate_for_update(updated, policy, tenant_id)

        assert codes(violations) == ["POLICY_NUMBER_IMMUTABLE"]

    def test_start_date_cannot_move_earlier(
        self, policy_validator: PolicyValidator, tenant_id: UUID, policy: AutoPolicy
    ):
        """Start date cannot move earlier."""
        updated = policy.model_copy(
            update={
                "start_date": policy.start_date - timedelta(days=5),
                "end_date": policy.end_date - timedelta(days=5),
            }
        )

        violations = policy_validator.validate_for_update(updated, policy, tenant_id)

        assert codes(violations) == ["POLICY_START_DATE_MOVED_EARLIER"]

    def test_update_without_existing_policy_raises(
        self, policy_validator: PolicyValidator, tenant_id: UUID, policy: AutoPolicy
    ):
        """Update without existing policy raises."""
        with pytest.raises(ValueError):
            policy_validator.validate(policy, tenant_id, ValidationMode.UPDATE)
