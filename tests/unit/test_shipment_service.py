"""Tests for shipment operations behind the authorization gate."""
import re
from datetime import datetime, timezone

import pytest

from tms.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from tms.models.enums import Priority, ShipmentStatus, SortOrder
from tms.schemas.shipment import PaginationParams, ShipmentFilter, SortParams
from tms.services.shipments import generate_tracking_number

CREATE_TRACKING_PATTERN = re.compile(r"^TRK\d{13}[A-Z0-9]{6}$")


@pytest.fixture
def create_data():
    return {
        "shipper_name": "Summit Industries",
        "carrier_name": "Old Dominion",
        "pickup_location": "321 Main St, Houston, TX",
        "delivery_location": "579 Peachtree St, Atlanta, GA",
        "pickup_date": datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc),
        "delivery_date": datetime(2024, 5, 4, 17, 0, tzinfo=timezone.utc),
        "weight": 1250.5,
        "dimensions": "120x80x100 cm",
        "rate": 2400.0,
        "currency": "EUR",
        "priority": Priority.HIGH,
        "notes": "Dock 4",
    }


class TestGeneratedTrackingNumber:

    def test_format(self):
        assert CREATE_TRACKING_PATTERN.match(generate_tracking_number())

    def test_unique(self):
        assert len({generate_tracking_number() for _ in range(50)}) == 50


class TestQueries:

    def test_list_requires_authentication(self, shipment_service):
        with pytest.raises(AuthenticationError):
            shipment_service.list_shipments(None)

    def test_list_runs_pipeline(self, shipment_service, shipment_store, make_shipment, employee_caller):
        for rate in (10.0, 30.0, 20.0):
            shipment_store.insert(make_shipment(rate=rate, carrier_name="UPS"))
        shipment_store.insert(make_shipment(rate=99.0, carrier_name="FedEx"))

        page = shipment_service.list_shipments(
            employee_caller,
            filter_spec=ShipmentFilter(carrier_name="ups"),
            pagination=PaginationParams(page=1, limit=2),
            sort=SortParams(field="rate", order=SortOrder.DESC),
        )
        assert page.total_count == 3
        assert [s.rate for s in page.shipments] == [30.0, 20.0]
        assert page.has_next_page is True

    def test_list_uses_configured_page_size(self, shipment_store, make_shipment, employee_caller):
        from tms.services.shipments import ShipmentService

        for _ in range(15):
            shipment_store.insert(make_shipment())
        page = ShipmentService(shipment_store, default_page_size=12).list_shipments(employee_caller)
        assert len(page.shipments) == 12

    def test_get_unknown_returns_none(self, shipment_service, employee_caller):
        assert shipment_service.get_shipment(employee_caller, "missing") is None

    def test_get_requires_authentication(self, shipment_service):
        with pytest.raises(AuthenticationError):
            shipment_service.get_shipment(None, "missing")

    def test_stats_scan_whole_collection(self, shipment_service, shipment_store, make_shipment, employee_caller):
        shipment_store.insert(make_shipment(status=ShipmentStatus.PENDING, flagged=True))
        shipment_store.insert(make_shipment(status=ShipmentStatus.ON_HOLD))
        stats = shipment_service.get_stats(employee_caller)
        assert stats.total == 2
        assert stats.pending == 1
        assert stats.flagged == 1

    def test_stats_require_authentication(self, shipment_service):
        with pytest.raises(AuthenticationError):
            shipment_service.get_stats(None)


class TestCreate:

    def test_round_trip(self, shipment_service, admin_caller, create_data):
        created = shipment_service.create_shipment(admin_caller, create_data)
        fetched = shipment_service.get_shipment(admin_caller, created.id)

        for key, value in create_data.items():
            assert getattr(fetched, key) == value
        assert fetched.status == ShipmentStatus.PENDING
        assert fetched.flagged is False
        assert CREATE_TRACKING_PATTERN.match(fetched.tracking_number)
        assert fetched.created_at == fetched.updated_at

    def test_server_fields_override_input(self, shipment_service, admin_caller, create_data):
        create_data.update(status=ShipmentStatus.DELIVERED, flagged=True, tracking_number="MINE")
        created = shipment_service.create_shipment(admin_caller, create_data)
        assert created.status == ShipmentStatus.PENDING
        assert created.flagged is False
        assert created.tracking_number != "MINE"

    def test_defaults(self, shipment_service, admin_caller, create_data):
        for key in ("dimensions", "currency", "priority", "notes"):
            create_data.pop(key)
        created = shipment_service.create_shipment(admin_caller, create_data)
        assert created.dimensions == "0x0x0 cm"
        assert created.currency == "USD"
        assert created.priority == Priority.MEDIUM
        assert created.notes is None

    def test_inserted_at_head(self, shipment_service, shipment_store, make_shipment, admin_caller, create_data):
        shipment_store.insert(make_shipment())
        created = shipment_service.create_shipment(admin_caller, create_data)
        assert shipment_store.get_all()[0] is created

    def test_naive_dates_treated_as_utc(self, shipment_service, admin_caller, create_data):
        create_data["pickup_date"] = datetime(2024, 5, 1, 8, 0)
        created = shipment_service.create_shipment(admin_caller, create_data)
        assert created.pickup_date.tzinfo is not None

    def test_employee_rejected_without_effect(self, shipment_service, shipment_store, employee_caller, create_data):
        with pytest.raises(AuthorizationError, match="Only admins can create shipments"):
            shipment_service.create_shipment(employee_caller, create_data)
        assert len(shipment_store) == 0

    def test_anonymous_gets_authentication_error(self, shipment_service, create_data):
        with pytest.raises(AuthenticationError):
            shipment_service.create_shipment(None, create_data)

    def test_gate_runs_before_validation(self, shipment_service, employee_caller):
        with pytest.raises(AuthorizationError):
            shipment_service.create_shipment(employee_caller, {"weight": -1})

    def test_invalid_weight_rejected(self, shipment_service, shipment_store, admin_caller, create_data):
        create_data["weight"] = 0
        with pytest.raises(ValidationError) as exc_info:
            shipment_service.create_shipment(admin_caller, create_data)
        assert "weight" in exc_info.value.details
        assert len(shipment_store) == 0

    def test_negative_rate_rejected(self, shipment_service, admin_caller, create_data):
        create_data["rate"] = -5
        with pytest.raises(ValidationError):
            shipment_service.create_shipment(admin_caller, create_data)


class TestUpdate:

    def test_merges_subset(self, shipment_service, shipment_store, make_shipment, admin_caller):
        original = shipment_store.insert(make_shipment(carrier_name="UPS", rate=100.0))
        updated = shipment_service.update_shipment(
            admin_caller, original.id, {"status": ShipmentStatus.ON_HOLD, "rate": 150.0}
        )
        assert updated.status == ShipmentStatus.ON_HOLD
        assert updated.rate == 150.0
        assert updated.carrier_name == "UPS"
        assert updated.updated_at > original.updated_at

    def test_any_status_may_follow_any_other(self, shipment_service, shipment_store, make_shipment, admin_caller):
        shipment = shipment_store.insert(make_shipment(status=ShipmentStatus.DELIVERED))
        updated = shipment_service.update_shipment(
            admin_caller, shipment.id, {"status": ShipmentStatus.PENDING}
        )
        assert updated.status == ShipmentStatus.PENDING

    def test_null_clears_notes_only(self, shipment_service, shipment_store, make_shipment, admin_caller):
        shipment = shipment_store.insert(make_shipment(notes="Fragile", carrier_name="UPS"))
        updated = shipment_service.update_shipment(
            admin_caller, shipment.id, {"notes": None, "carrier_name": None}
        )
        assert updated.notes is None
        assert updated.carrier_name == "UPS"

    def test_unknown_id(self, shipment_service, admin_caller):
        with pytest.raises(NotFoundError, match="Shipment not found"):
            shipment_service.update_shipment(admin_caller, "missing", {"rate": 1.0})

    def test_employee_rejected_without_effect(self, shipment_service, shipment_store, make_shipment, employee_caller):
        shipment = shipment_store.insert(make_shipment(rate=100.0))
        with pytest.raises(AuthorizationError, match="Only admins can update shipments"):
            shipment_service.update_shipment(employee_caller, shipment.id, {"rate": 1.0})
        assert shipment_store.get_by_id(shipment.id) is shipment


class TestDelete:

    def test_delete(self, shipment_service, shipment_store, make_shipment, admin_caller):
        shipment = shipment_store.insert(make_shipment())
        assert shipment_service.delete_shipment(admin_caller, shipment.id) is True
        assert len(shipment_store) == 0

    def test_unknown_returns_false(self, shipment_service, admin_caller):
        assert shipment_service.delete_shipment(admin_caller, "missing") is False

    def test_employee_rejected_without_effect(self, shipment_service, shipment_store, make_shipment, employee_caller):
        shipment = shipment_store.insert(make_shipment())
        with pytest.raises(AuthorizationError, match="Only admins can delete shipments"):
            shipment_service.delete_shipment(employee_caller, shipment.id)
        assert shipment_store.get_by_id(shipment.id) is shipment


class TestToggleFlag:

    def test_toggle_twice_restores_and_stamps(self, shipment_service, shipment_store, make_shipment, employee_caller):
        original = shipment_store.insert(make_shipment(flagged=False))

        first = shipment_service.toggle_flag(employee_caller, original.id)
        second = shipment_service.toggle_flag(employee_caller, original.id)

        assert first.flagged is True
        assert second.flagged is False
        assert original.updated_at < first.updated_at < second.updated_at

    def test_admin_may_toggle(self, shipment_service, shipment_store, make_shipment, admin_caller):
        shipment = shipment_store.insert(make_shipment(flagged=True))
        assert shipment_service.toggle_flag(admin_caller, shipment.id).flagged is False

    def test_requires_authentication(self, shipment_service, shipment_store, make_shipment):
        shipment = shipment_store.insert(make_shipment())
        with pytest.raises(AuthenticationError):
            shipment_service.toggle_flag(None, shipment.id)

    def test_unknown_id(self, shipment_service, employee_caller):
        with pytest.raises(NotFoundError):
            shipment_service.toggle_flag(employee_caller, "missing")
