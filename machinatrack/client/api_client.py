"""
MachinaTrack API client

Thin synchronous wrapper over the /api endpoints. Every call unwraps the
{success, data, error} envelope and returns `data`; failures raise ApiError.

Example:
    with MachinaTrackClient("http://localhost:5000") as client:
        task = client.create_maintenance_task({...})
        result = client.complete_maintenance_task(task["id"], {
            "performedBy": "Dana",
            "descriptionOfWork": "Replaced way wipers",
        })
"""

from typing import Any, Dict, List, Mapping, Optional

import httpx


class ApiError(Exception):
    """Raised when the API answers with success=false or an HTTP error"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []

    def __str__(self):
        if self.status_code:
            return f"{self.status_code}: {self.message}"
        return self.message


class MachinaTrackClient:

    def __init__(self, base_url: str, timeout: float = 30.0,
                 transport: Optional[httpx.BaseTransport] = None,
                 headers: Optional[Mapping[str, str]] = None):
        merged_headers: Dict[str, str] = {"accept": "application/json"}
        if headers:
            merged_headers.update(dict(headers))
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers=merged_headers,
        )
        # Pagination block of the most recent list call
        self.last_pagination: Optional[Dict[str, Any]] = None

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "MachinaTrackClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Core request helpers
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, *, json: Any = None,
                 params: Optional[Mapping[str, Any]] = None,
                 headers: Optional[Mapping[str, str]] = None) -> Any:
        try:
            resp = self._client.request(
                method,
                path,
                json=json,
                params={k: v for k, v in (params or {}).items() if v is not None},
                headers=dict(headers or {}),
            )
        except httpx.HTTPError as e:
            raise ApiError(f"Request to {path} failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            raise ApiError(
                f"Unexpected non-JSON response from {method} {path}: {resp.text[:200]!r}",
                resp.status_code,
            )

        if resp.is_error or not isinstance(body, dict) or not body.get("success"):
            error = body.get("error") if isinstance(body, dict) else None
            details = body.get("details") if isinstance(body, dict) else None
            raise ApiError(error or f"HTTP {resp.status_code}", resp.status_code, details)

        self.last_pagination = body.get("pagination")
        return body.get("data")

    def _list(self, collection: str, limit: Optional[int] = None, offset: Optional[int] = None,
              **filters: Any) -> List[Dict[str, Any]]:
        params = {"limit": limit, "offset": offset}
        for key, value in filters.items():
            if isinstance(value, bool):
                value = "true" if value else None
            elif hasattr(value, "isoformat"):
                value = value.isoformat()
            params[key] = value
        return self._request("GET", f"/api/{collection}", params=params)

    def _get(self, collection: str, record_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/{collection}/{record_id}")

    def _create(self, collection: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("POST", f"/api/{collection}", json=dict(data))

    def _update(self, collection: str, record_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/{collection}/{record_id}", json=dict(data))

    def _delete(self, collection: str, record_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/api/{collection}/{record_id}")

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/api/health")

    # ------------------------------------------------------------------
    # Equipment
    # ------------------------------------------------------------------

    def list_equipment(self, *, status=None, location=None, search=None, limit=None, offset=None):
        return self._list("equipment", limit, offset, status=status, location=location, search=search)

    def get_equipment(self, equipment_id: str):
        return self._get("equipment", equipment_id)

    def create_equipment(self, data: Mapping[str, Any]):
        return self._create("equipment", data)

    def update_equipment(self, equipment_id: str, data: Mapping[str, Any]):
        return self._update("equipment", equipment_id, data)

    def delete_equipment(self, equipment_id: str):
        return self._delete("equipment", equipment_id)

    # ------------------------------------------------------------------
    # Maintenance tasks
    # ------------------------------------------------------------------

    def list_maintenance_tasks(self, *, equipment_id=None, status=None, assigned_to=None,
                               upcoming_days=None, overdue=False, search=None,
                               limit=None, offset=None):
        return self._list(
            "maintenance-tasks", limit, offset,
            equipmentId=equipment_id, status=status, assignedTo=assigned_to,
            upcoming=upcoming_days, overdue=overdue, search=search,
        )

    def get_maintenance_task(self, task_id: str):
        return self._get("maintenance-tasks", task_id)

    def create_maintenance_task(self, data: Mapping[str, Any]):
        return self._create("maintenance-tasks", data)

    def update_maintenance_task(self, task_id: str, data: Mapping[str, Any]):
        return self._update("maintenance-tasks", task_id, data)

    def delete_maintenance_task(self, task_id: str):
        return self._delete("maintenance-tasks", task_id)

    def complete_maintenance_task(self, task_id: str, details: Mapping[str, Any],
                                  idempotency_key: Optional[str] = None) -> Dict[str, Any]:
        """
        Returns {"task": ..., "serviceRecord": ...}. Pass the same
        idempotency_key when retrying so the work is only logged once.
        """
        headers = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        return self._request("POST", f"/api/maintenance-tasks/{task_id}/complete",
                             json=dict(details), headers=headers)

    def start_maintenance_task(self, task_id: str):
        return self._request("POST", f"/api/maintenance-tasks/{task_id}/start")

    def skip_maintenance_task(self, task_id: str, notes: Optional[str] = None):
        payload = {"notes": notes} if notes is not None else {}
        return self._request("POST", f"/api/maintenance-tasks/{task_id}/skip", json=payload)

    # ------------------------------------------------------------------
    # Service records
    # ------------------------------------------------------------------

    def list_service_records(self, *, task_id=None, equipment_id=None, performed_by=None,
                             start_date=None, end_date=None, limit=None, offset=None):
        return self._list(
            "service-records", limit, offset,
            taskId=task_id, equipmentId=equipment_id, performedBy=performed_by,
            startDate=start_date, endDate=end_date,
        )

    def get_service_record(self, record_id: str):
        return self._get("service-records", record_id)

    def create_service_record(self, data: Mapping[str, Any]):
        return self._create("service-records", data)

    def delete_service_record(self, record_id: str):
        return self._delete("service-records", record_id)

    # ------------------------------------------------------------------
    # Metrology
    # ------------------------------------------------------------------

    def list_metrology_tools(self, *, status=None, due_calibration=False, overdue_calibration=False,
                             search=None, limit=None, offset=None):
        return self._list(
            "metrology-tools", limit, offset,
            status=status, dueCalibration=due_calibration,
            overdueCalibration=overdue_calibration, search=search,
        )

    def get_metrology_tool(self, tool_id: str):
        return self._get("metrology-tools", tool_id)

    def create_metrology_tool(self, data: Mapping[str, Any]):
        return self._create("metrology-tools", data)

    def update_metrology_tool(self, tool_id: str, data: Mapping[str, Any]):
        return self._update("metrology-tools", tool_id, data)

    def delete_metrology_tool(self, tool_id: str):
        return self._delete("metrology-tools", tool_id)

    def list_calibration_logs(self, *, tool_id=None, performed_by=None, result=None,
                              start_date=None, end_date=None, limit=None, offset=None):
        return self._list(
            "calibration-logs", limit, offset,
            toolId=tool_id, performedBy=performed_by, result=result,
            startDate=start_date, endDate=end_date,
        )

    def get_calibration_log(self, log_id: str):
        return self._get("calibration-logs", log_id)

    def record_calibration(self, tool_id: str, details: Mapping[str, Any]) -> Dict[str, Any]:
        """Returns {"tool": ..., "calibrationLog": ...}"""
        payload = dict(details)
        payload["metrologyToolId"] = tool_id
        return self._create("calibration-logs", payload)

    def delete_calibration_log(self, log_id: str):
        return self._delete("calibration-logs", log_id)

    # ------------------------------------------------------------------
    # Consumables
    # ------------------------------------------------------------------

    def list_consumables(self, *, low_inventory=False, location=None, type=None, search=None,
                         limit=None, offset=None):
        return self._list(
            "consumables", limit, offset,
            lowInventory=low_inventory, location=location, type=type, search=search,
        )

    def get_consumable(self, consumable_id: str):
        return self._get("consumables", consumable_id)

    def create_consumable(self, data: Mapping[str, Any]):
        return self._create("consumables", data)

    def update_consumable(self, consumable_id: str, data: Mapping[str, Any]):
        return self._update("consumables", consumable_id, data)

    def update_consumable_quantity(self, consumable_id: str, quantity: int):
        return self._request("PATCH", f"/api/consumables/{consumable_id}/quantity",
                             json={"quantity": quantity})

    def delete_consumable(self, consumable_id: str):
        return self._delete("consumables", consumable_id)

    # ------------------------------------------------------------------
    # Cutting tools
    # ------------------------------------------------------------------

    def list_cutting_tools(self, *, low_inventory=False, end_of_life=False, as_of=None, location=None,
                           type=None, search=None, limit=None, offset=None):
        return self._list(
            "cutting-tools", limit, offset,
            lowInventory=low_inventory, endOfLife=end_of_life, asOf=as_of,
            location=location, type=type, search=search,
        )

    def get_cutting_tool(self, tool_id: str):
        return self._get("cutting-tools", tool_id)

    def create_cutting_tool(self, data: Mapping[str, Any]):
        return self._create("cutting-tools", data)

    def update_cutting_tool(self, tool_id: str, data: Mapping[str, Any]):
        return self._update("cutting-tools", tool_id, data)

    def update_cutting_tool_quantity(self, tool_id: str, quantity: int):
        return self._request("PATCH", f"/api/cutting-tools/{tool_id}/quantity",
                             json={"quantity": quantity})

    def delete_cutting_tool(self, tool_id: str):
        return self._delete("cutting-tools", tool_id)

    # ------------------------------------------------------------------
    # Machine logs
    # ------------------------------------------------------------------

    def list_machine_logs(self, *, equipment_id=None, start=None, end=None, recent=False, hours=None,
                          error_code=None, metric_name=None, limit=None, offset=None):
        return self._list(
            "machine-logs", limit, offset,
            equipmentId=equipment_id, startDate=start, endDate=end, recent=recent, hours=hours,
            errorCode=error_code, metricName=metric_name,
        )

    def get_machine_log(self, entry_id: str):
        return self._get("machine-logs", entry_id)

    def create_machine_log(self, data: Mapping[str, Any]):
        return self._create("machine-logs", data)

    def update_machine_log(self, entry_id: str, data: Mapping[str, Any]):
        return self._update("machine-logs", entry_id, data)

    def delete_machine_log(self, entry_id: str):
        return self._delete("machine-logs", entry_id)

    # ------------------------------------------------------------------
    # Settings lists (locations, manufacturers, types, materials)
    # ------------------------------------------------------------------

    def list_settings_lists(self) -> List[str]:
        return self._request("GET", "/api/settings")

    def list_settings(self, list_name: str, limit=None, offset=None):
        return self._list(f"settings/{list_name}", limit, offset)

    def create_setting(self, list_name: str, name: str):
        return self._create(f"settings/{list_name}", {"name": name})

    def rename_setting(self, list_name: str, entry_id: str, name: str):
        return self._update(f"settings/{list_name}", entry_id, {"name": name})

    def delete_setting(self, list_name: str, entry_id: str):
        return self._delete(f"settings/{list_name}", entry_id)

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------

    def get_dashboard(self, activity_limit: Optional[int] = None) -> Dict[str, Any]:
        return self._request("GET", "/api/dashboard", params={"activityLimit": activity_limit})
