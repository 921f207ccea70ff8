"""
活动 API 测试
覆盖 /api/events 端点
"""
from fastapi.testclient import TestClient

import pytest

from hotelhub.models.entities import (
    Event, EventBooking, EventEquipment, EventFinancials, EventSpace, EquipmentType,
)


class TestCreateEvent:
    """创建活动"""

    def test_booking_and_financials_without_operations(self, client: TestClient, sample_hotel):
        response = client.post("/api/events", json={
            "hotel_id": sample_hotel.id,
            "contact_name": "Jonas",
            "has_options": "true",
            "option_duration": "2 weeks",
            "requires_deposit": True,
            "payment_methods": '["invoice", "card"]',
        })

        assert response.status_code == 201
        data = response.json()
        assert data["event"]["contact_name"] == "Jonas"
        assert data["booking"]["has_options"] is True
        assert data["booking"]["option_duration"] == "2 weeks"
        assert data["financials"]["payment_methods"] == ["invoice", "card"]
        assert "operations" not in data
        assert "space" not in data

    def test_camel_case_contact_and_lead_time_alias(self, client: TestClient, sample_hotel):
        response = client.post("/api/events", json={
            "hotel_id": sample_hotel.id,
            "contactName": "Lea",
            "contactEmail": "lea@example.com",
            "last_minute_lead_time": "48h",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["event"]["contact_name"] == "Lea"
        assert data["event"]["contact_email"] == "lea@example.com"
        assert data["booking"]["last_minute_leadtime"] == "48h"

    def test_flat_space(self, client: TestClient, sample_hotel, db_session):
        response = client.post("/api/events", json={
            "hotel_id": sample_hotel.id,
            "name": "Ballroom",
            "daily_rate": "1500",
            "cap_theatre": "200",
            "has_daylight": 1,
            "size": 250,
            "lunch_location": "Terrace",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["space"]["name"] == "Ballroom"
        assert data["space"]["daily_rate"] == 1500.0
        assert data["space"]["cap_theatre"] == 200
        assert data["space"]["has_daylight"] is True
        assert data["space"]["size"] == "250"
        assert data["operations"]["lunch_location"] == "Terrace"
        assert db_session.query(EventSpace).count() == 1

    def test_flat_space_without_name(self, client: TestClient, sample_hotel, db_session):
        response = client.post("/api/events", json={"hotel_id": sample_hotel.id, "cap_rounds": 80})

        assert response.status_code == 400
        assert response.json()["kind"] == "MISSING_DISCRIMINATOR"
        assert db_session.query(Event).count() == 0

    def test_bad_payment_methods_writes_nothing(self, client: TestClient, sample_hotel, db_session):
        response = client.post("/api/events", json={
            "hotel_id": sample_hotel.id,
            "has_options": True,
            "payment_methods": '{"cash": true}',
        })

        assert response.status_code == 400
        assert response.json()["field"] == "payment_methods"
        assert db_session.query(Event).count() == 0
        assert db_session.query(EventBooking).count() == 0


class TestUpdateEvent:
    def test_update_partial(self, client: TestClient, sample_event, db_session):
        client.put(f"/api/events/{sample_event.id}", json={"requires_deposit": "yes", "deposit_rules": "30%"})
        response = client.put(f"/api/events/{sample_event.id}", json={"has_minimum_spent": False})

        assert response.status_code == 200
        data = response.json()
        assert data["financials"]["deposit_rules"] == "30%"
        assert data["financials"]["requires_deposit"] is True
        assert data["financials"]["has_minimum_spent"] is False
        assert data["event"]["contact_name"] == "Jonas Keller"
        assert db_session.query(EventFinancials).count() == 1

    def test_update_missing_event(self, client: TestClient):
        response = client.put("/api/events/999999", json={"has_options": True})
        assert response.status_code == 404
        assert "Event with ID 999999 not found" in response.json()["error"]

    def test_update_to_missing_hotel(self, client: TestClient, sample_event):
        response = client.put(f"/api/events/{sample_event.id}", json={"hotel_id": 999999})
        assert response.status_code == 404
        assert response.json()["entity"] == "Hotel"

    def test_get_and_delete(self, client: TestClient, sample_event, db_session):
        client.post(f"/api/events/{sample_event.id}/spaces", json={"name": "Salon"})

        response = client.get(f"/api/events/{sample_event.id}")
        assert response.status_code == 200
        assert response.json()["spaces"][0]["name"] == "Salon"

        response = client.delete(f"/api/events/{sample_event.id}")
        assert response.status_code == 200
        assert db_session.query(Event).count() == 0
        assert db_session.query(EventSpace).count() == 0
        assert client.get(f"/api/events/{sample_event.id}").status_code == 404


class TestEventSections:
    """预订 / 财务 / 执行 单独写入"""

    def test_upsert_booking(self, client: TestClient, sample_event, db_session):
        response = client.post(f"/api/events/{sample_event.id}/booking", json={"rooms_only": "no"})
        assert response.status_code == 200
        assert response.json()["booking"]["rooms_only"] is False

        client.post(f"/api/events/{sample_event.id}/booking", json={"exclusive_clients": True})
        response = client.get(f"/api/events/{sample_event.id}/booking")
        assert response.status_code == 200
        assert response.json()["rooms_only"] is False
        assert response.json()["exclusive_clients"] is True
        assert db_session.query(EventBooking).count() == 1

    def test_operations_fields(self, client: TestClient, sample_event):
        response = client.post(f"/api/events/{sample_event.id}/operations", json={
            "min_participants": "10",
            "room_drop_fee": "25.5",
            "has_storage": "true",
        })
        data = response.json()["operations"]
        assert data["min_participants"] == 10
        assert data["room_drop_fee"] == 25.5
        assert data["has_storage"] is True

    def test_section_not_written_yet(self, client: TestClient, sample_event):
        assert client.get(f"/api/events/{sample_event.id}/financials").status_code == 404

    def test_section_empty_payload(self, client: TestClient, sample_event):
        response = client.post(f"/api/events/{sample_event.id}/financials", json={"foo": 1})
        assert response.status_code == 400
        assert response.json()["kind"] == "NO_VALID_FIELDS"

    def test_section_missing_event(self, client: TestClient):
        response = client.post("/api/events/999999/booking", json={"has_options": True})
        assert response.status_code == 404

    def test_section_missing_event_with_empty_body(self, client: TestClient):
        """活动不存在时先报 404，而不是空请求体的 400"""
        response = client.post("/api/events/999999/booking", json={})
        assert response.status_code == 404
        assert response.json()["kind"] == "PARENT_NOT_FOUND"

    def test_unknown_section(self, client: TestClient, sample_event):
        assert client.get(f"/api/events/{sample_event.id}/catering").status_code == 422


class TestEventSpaces:
    """会议场地批量追加"""

    def test_add_array(self, client: TestClient, sample_event):
        response = client.post(f"/api/events/{sample_event.id}/spaces", json=[
            {"name": "Salon A", "cap_boardroom": 12},
            {"name": "Salon B", "supports_hybrid": "yes"},
        ])

        assert response.status_code == 201
        rows = response.json()["spaces_added"]
        assert [r["name"] for r in rows] == ["Salon A", "Salon B"]
        assert rows[1]["supports_hybrid"] is True

    def test_object_body_is_single_item(self, client: TestClient, sample_event):
        response = client.post(f"/api/events/{sample_event.id}/spaces", json={"name": "Garden"})
        assert response.status_code == 201
        assert len(response.json()["spaces_added"]) == 1

    def test_missing_name_writes_nothing(self, client: TestClient, sample_event, db_session):
        response = client.post(f"/api/events/{sample_event.id}/spaces", json=[
            {"name": "OK"}, {"cap_rounds": 10},
        ])

        assert response.status_code == 400
        assert response.json()["index"] == 1
        assert "event space" in response.json()["error"]
        assert db_session.query(EventSpace).count() == 0

    def test_list_spaces(self, client: TestClient, sample_event):
        client.post(f"/api/events/{sample_event.id}/spaces", json=[{"name": "A"}, {"name": "B"}])
        response = client.get(f"/api/events/{sample_event.id}/spaces")
        assert [s["name"] for s in response.json()] == ["A", "B"]

    def test_missing_event(self, client: TestClient):
        response = client.post("/api/events/999999/spaces", json=[{"name": "A"}])
        assert response.status_code == 404
        assert client.get("/api/events/999999/spaces").status_code == 404


class TestSingleEventSpace:
    """单个会议场地读取 / 部分更新 / 删除"""

    def _add(self, client: TestClient, event_id: int, **fields) -> dict:
        response = client.post(f"/api/events/{event_id}/spaces", json=[{"name": "Salon A", **fields}])
        return response.json()["spaces_added"][0]

    def test_get_space(self, client: TestClient, sample_event):
        space = self._add(client, sample_event.id, cap_theatre=80)

        response = client.get(f"/api/events/{sample_event.id}/spaces/{space['id']}")

        assert response.status_code == 200
        assert response.json()["cap_theatre"] == 80

    def test_partial_update(self, client: TestClient, sample_event):
        space = self._add(client, sample_event.id, cap_theatre=80, has_daylight=True)

        response = client.put(
            f"/api/events/{sample_event.id}/spaces/{space['id']}",
            json={"daily_rate": "450", "cap_theatre": "90"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["daily_rate"] == 450.0
        assert data["cap_theatre"] == 90
        assert data["has_daylight"] is True
        assert data["name"] == "Salon A"

    def test_update_blank_name(self, client: TestClient, sample_event):
        space = self._add(client, sample_event.id)

        response = client.put(f"/api/events/{sample_event.id}/spaces/{space['id']}", json={"name": " "})

        assert response.status_code == 400
        assert response.json()["kind"] == "MISSING_REQUIRED_FIELD"

    def test_update_no_valid_fields(self, client: TestClient, sample_event):
        space = self._add(client, sample_event.id)
        response = client.put(f"/api/events/{sample_event.id}/spaces/{space['id']}", json={"x": 1})
        assert response.status_code == 400
        assert response.json()["kind"] == "NO_VALID_FIELDS"

    def test_space_of_other_event_not_found(self, client: TestClient, sample_event, sample_hotel, db_session):
        other = Event(hotel_id=sample_hotel.id)
        db_session.add(other)
        db_session.commit()
        space = self._add(client, other.id)

        assert client.get(f"/api/events/{sample_event.id}/spaces/{space['id']}").status_code == 404
        assert client.delete(f"/api/events/{sample_event.id}/spaces/{space['id']}").status_code == 404

    def test_delete_space(self, client: TestClient, sample_event, db_session):
        space = self._add(client, sample_event.id)

        response = client.delete(f"/api/events/{sample_event.id}/spaces/{space['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == "Event space deleted successfully."
        assert db_session.query(EventSpace).count() == 0

    def test_missing_space(self, client: TestClient, sample_event):
        assert client.get(f"/api/events/{sample_event.id}/spaces/999").status_code == 404
        assert client.put(f"/api/events/{sample_event.id}/spaces/999", json={"copy_fee": 1}).status_code == 404
        assert client.delete(f"/api/events/{sample_event.id}/spaces/999").status_code == 404

    def test_missing_event(self, client: TestClient):
        response = client.put("/api/events/999999/spaces/1", json={})
        assert response.status_code == 404
        assert response.json()["kind"] == "PARENT_NOT_FOUND"


class TestEventEquipment:
    """活动设备批量追加"""

    def test_list_equipment_types(self, client: TestClient, equipment_types):
        response = client.get("/api/events/equipment-types")

        assert response.status_code == 200
        assert [t["equipment_name"] for t in response.json()] == ["Beamer", "Flipchart"]

    def test_add_equipment(self, client: TestClient, sample_event, equipment_types):
        response = client.post(f"/api/events/{sample_event.id}/equipment", json=[
            {"equipment_id": equipment_types["Beamer"], "quantity": "2", "price": "35.5"},
            {"equipment_id": str(equipment_types["Flipchart"]), "quantity": 4},
        ])

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == f"2 equipment items added to event {sample_event.id}."
        rows = data["equipment_added"]
        assert [r["equipment_name"] for r in rows] == ["Beamer", "Flipchart"]
        assert rows[0]["quantity"] == 2
        assert rows[0]["price"] == 35.5
        assert rows[1]["price"] is None

    def test_list_equipment(self, client: TestClient, sample_event, equipment_types):
        client.post(f"/api/events/{sample_event.id}/equipment", json=[
            {"equipment_id": equipment_types["Flipchart"], "quantity": 1},
        ])

        response = client.get(f"/api/events/{sample_event.id}/equipment")

        assert response.status_code == 200
        assert len(response.json()) == 1
        assert response.json()[0]["equipment_name"] == "Flipchart"

    def test_missing_equipment_id_writes_nothing(self, client: TestClient, sample_event,
                                                 equipment_types, db_session):
        """第二条缺少 equipment_id，整批不写入"""
        response = client.post(f"/api/events/{sample_event.id}/equipment", json=[
            {"equipment_id": equipment_types["Beamer"], "quantity": 1},
            {"quantity": 3},
        ])

        assert response.status_code == 400
        data = response.json()
        assert data["kind"] == "MISSING_DISCRIMINATOR"
        assert data["index"] == 1
        assert data["error"] == "Each equipment item object must contain at least a equipment_id."
        assert db_session.query(EventEquipment).count() == 0

    def test_bad_quantity_writes_nothing(self, client: TestClient, sample_event,
                                         equipment_types, db_session):
        response = client.post(f"/api/events/{sample_event.id}/equipment", json=[
            {"equipment_id": equipment_types["Beamer"], "quantity": 1},
            {"equipment_id": equipment_types["Flipchart"], "quantity": "many"},
        ])

        assert response.status_code == 400
        assert response.json()["kind"] == "INVALID_FIELD_TYPE"
        assert response.json()["index"] == 1
        assert db_session.query(EventEquipment).count() == 0

    def test_unknown_equipment_type_writes_nothing(self, client: TestClient, sample_event,
                                                   equipment_types, db_session):
        response = client.post(f"/api/events/{sample_event.id}/equipment", json=[
            {"equipment_id": equipment_types["Beamer"], "quantity": 1},
            {"equipment_id": 999, "quantity": 1},
        ])

        assert response.status_code == 404
        assert response.json()["error"] == "Equipment type with ID 999 not found."
        assert db_session.query(EventEquipment).count() == 0

    @pytest.mark.parametrize("body", [[], {"equipment_id": 1}])
    def test_body_must_be_non_empty_array(self, client: TestClient, sample_event, equipment_types, body):
        response = client.post(f"/api/events/{sample_event.id}/equipment", json=body)

        assert response.status_code == 400
        assert response.json()["kind"] == "INVALID_BATCH_SHAPE"

    def test_missing_event(self, client: TestClient, equipment_types):
        response = client.post("/api/events/999999/equipment", json=[
            {"equipment_id": equipment_types["Beamer"]},
        ])

        assert response.status_code == 404
        assert response.json()["kind"] == "PARENT_NOT_FOUND"
        assert client.get("/api/events/999999/equipment").status_code == 404

    def test_delete_event_cascades_equipment(self, client: TestClient, sample_event,
                                             equipment_types, db_session):
        client.post(f"/api/events/{sample_event.id}/equipment", json=[
            {"equipment_id": equipment_types["Beamer"], "quantity": 1},
        ])

        assert client.delete(f"/api/events/{sample_event.id}").status_code == 200
        db_session.expire_all()
        assert db_session.query(EventEquipment).count() == 0
        assert db_session.query(EquipmentType).count() == 2

    def test_event_read_includes_equipment(self, client: TestClient, sample_event, equipment_types):
        client.post(f"/api/events/{sample_event.id}/equipment", json=[
            {"equipment_id": equipment_types["Beamer"], "quantity": 1},
        ])

        data = client.get(f"/api/events/{sample_event.id}").json()

        assert [e["equipment_name"] for e in data["equipment"]] == ["Beamer"]
