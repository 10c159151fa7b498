"""
API client tests: envelope handling against a mock transport, then a full
round trip against the Flask app over WSGI.
"""

import json
from datetime import date

import httpx
import pytest

from machinatrack.client.api_client import ApiError, MachinaTrackClient


def _mock_client(handler):
    return MachinaTrackClient("http://machinatrack.test", transport=httpx.MockTransport(handler))


def test_unwraps_data_and_pagination():
    def handler(request):
        assert request.url.path == "/api/equipment"
        assert request.url.params["status"] == "operational"
        assert "location" not in request.url.params
        return httpx.Response(200, json={
            "success": True,
            "data": [{"id": "e1"}],
            "pagination": {"limit": 100, "offset": 0, "total": 1, "hasMore": False},
        })

    with _mock_client(handler) as client:
        assert client.list_equipment(status="operational") == [{"id": "e1"}]
        assert client.last_pagination["total"] == 1


def test_error_envelope_raises_api_error():
    def handler(request):
        return httpx.Response(400, json={
            "success": False,
            "error": "Invalid completion data",
            "details": [{"field": "performedBy", "message": "performedBy is required"}],
        })

    with _mock_client(handler) as client:
        with pytest.raises(ApiError) as excinfo:
            client.complete_maintenance_task("t1", {"descriptionOfWork": "X"})

    error = excinfo.value
    assert error.status_code == 400
    assert error.message == "Invalid completion data"
    assert error.details[0]["field"] == "performedBy"


def test_success_false_with_200_still_raises():
    def handler(request):
        return httpx.Response(200, json={"success": False, "error": "Something went wrong"})

    with _mock_client(handler) as client:
        with pytest.raises(ApiError, match="Something went wrong"):
            client.health()


def test_non_json_response_raises():
    def handler(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    with _mock_client(handler) as client:
        with pytest.raises(ApiError) as excinfo:
            client.get_dashboard()
    assert excinfo.value.status_code == 502


def test_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _mock_client(handler) as client:
        with pytest.raises(ApiError, match="connection refused"):
            client.health()


def test_completion_sends_idempotency_header_and_body():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["key"] = request.headers.get("Idempotency-Key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"success": True, "data": {"task": {}, "serviceRecord": {}}})

    with _mock_client(handler) as client:
        client.complete_maintenance_task("t1", {"performedBy": "A", "descriptionOfWork": "X"},
                                         idempotency_key="k-1")

    assert seen == {
        "method": "POST",
        "path": "/api/maintenance-tasks/t1/complete",
        "key": "k-1",
        "body": {"performedBy": "A", "descriptionOfWork": "X"},
    }


def test_filter_values_are_encoded():
    def handler(request):
        params = request.url.params
        assert params["overdue"] == "true"
        assert "upcoming" not in params
        assert params["limit"] == "5"
        return httpx.Response(200, json={"success": True, "data": []})

    def range_handler(request):
        assert request.url.params["startDate"] == "2025-06-01"
        assert request.url.params["endDate"] == "2025-06-30"
        return httpx.Response(200, json={"success": True, "data": []})

    with _mock_client(handler) as client:
        assert client.list_maintenance_tasks(overdue=True, limit=5) == []

    with _mock_client(range_handler) as client:
        client.list_service_records(start_date=date(2025, 6, 1), end_date=date(2025, 6, 30))


def test_record_calibration_posts_tool_id():
    def handler(request):
        body = json.loads(request.content)
        assert request.url.path == "/api/calibration-logs"
        assert body["metrologyToolId"] == "tool-1"
        return httpx.Response(201, json={"success": True, "data": {"tool": {}, "calibrationLog": {}}})

    with _mock_client(handler) as client:
        result = client.record_calibration("tool-1", {"performedBy": "QC", "result": "pass"})
    assert set(result) == {"tool", "calibrationLog"}


def test_round_trip_against_flask_app(app):
    transport = httpx.WSGITransport(app=app)
    with MachinaTrackClient("http://machinatrack.test", transport=transport) as client:
        assert client.health()["status"] == "ok"

        equipment = client.create_equipment({
            "name": "Mazak QT-250", "model": "QT-250", "serialNumber": "QT-1", "location": "Bay 2",
        })
        task = client.create_maintenance_task({
            "equipmentId": equipment["id"], "description": "Grease chuck", "frequencyDays": 14,
        })

        result = client.complete_maintenance_task(task["id"], {
            "performedBy": "Sam", "descriptionOfWork": "Greased chuck jaws",
        }, idempotency_key="round-trip")
        assert result["task"]["status"] == "pending"
        assert result["task"]["serviceRecordIds"] == [result["serviceRecord"]["id"]]

        records = client.list_service_records(task_id=task["id"])
        assert [r["id"] for r in records] == [result["serviceRecord"]["id"]]

        with pytest.raises(ApiError) as excinfo:
            client.get_maintenance_task("missing")
        assert excinfo.value.status_code == 404

        consumable = client.create_consumable({
            "name": "Insert", "type": "Insert", "quantity": 1, "minQuantity": 5, "location": "Crib",
        })
        assert client.update_consumable_quantity(consumable["id"], 9)["quantity"] == 9

        summary = client.get_dashboard()["summary"]
        assert summary["lowInventoryCount"] == 0


def test_machine_log_filters_are_encoded():
    def handler(request):
        params = request.url.params
        assert request.url.path == "/api/machine-logs"
        assert params["equipmentId"] == "e1"
        assert params["recent"] == "true"
        assert params["hours"] == "6"
        assert "errorCode" not in params
        return httpx.Response(200, json={"success": True, "data": []})

    with _mock_client(handler) as client:
        assert client.list_machine_logs(equipment_id="e1", recent=True, hours=6) == []


def test_inventory_and_settings_round_trip(app):
    transport = httpx.WSGITransport(app=app)
    with MachinaTrackClient("http://machinatrack.test", transport=transport) as client:
        tool = client.create_cutting_tool({
            "name": "Spot Drill", "type": "Drill", "quantity": 2, "minQuantity": 2, "location": "Crib A",
        })
        assert client.list_cutting_tools(low_inventory=True)[0]["id"] == tool["id"]
        assert client.update_cutting_tool_quantity(tool["id"], 7)["lowInventory"] is False

        equipment = client.create_equipment({
            "name": "Haas ST-10", "model": "ST-10", "serialNumber": "ST-1", "location": "Bay 3",
        })
        entry = client.create_machine_log({
            "equipmentId": equipment["id"], "timestamp": "2025-06-18T10:00:00Z",
            "metricName": "coolant_temp_c", "metricValue": 23.5,
        })
        assert client.list_machine_logs(metric_name="coolant_temp_c")[0]["id"] == entry["id"]

        location = client.create_setting("locations", "Bay 3")
        assert [e["name"] for e in client.list_settings("locations")] == ["Bay 3"]
        with pytest.raises(ApiError) as excinfo:
            client.create_setting("locations", "Bay 3")
        assert excinfo.value.status_code == 409
        client.delete_setting("locations", location["id"])
        assert client.list_settings("locations") == []
