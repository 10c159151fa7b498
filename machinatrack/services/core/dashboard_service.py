"""
Dashboard Service
Aggregate counts and the recent activity feed for the shop dashboard.

Handles:
- Summary counts (upcoming maintenance, low inventory, overdue calibrations)
- Status breakdowns for equipment and maintenance tasks
- Recent activity across equipment, tasks, calibrations and service records
"""

import math
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from machinatrack.buisness.core.errors import DatabaseError
from machinatrack.data.equipment.equipment import Equipment
from machinatrack.data.inventory.consumables import Consumable
from machinatrack.data.maintenance.maintenance_tasks import MaintenanceTask
from machinatrack.data.maintenance.service_records import ServiceRecord
from machinatrack.data.metrology.calibration_logs import CalibrationLog
from machinatrack.data.metrology.metrology_tools import MetrologyTool
from machinatrack.utils.dates import add_days, today_utc


class DashboardService:
    """Read-only aggregate queries over one session"""

    def __init__(self, session: Session):
        self.session = session

    def _scalar(self, stmt, what: str):
        try:
            return self.session.scalar(stmt)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to get {what}: {e}") from e

    def get_dashboard_summary(self, today: Optional[date] = None, upcoming_days: int = 30) -> Dict[str, int]:
        today = today or today_utc()

        upcoming = self._scalar(
            select(func.count()).select_from(MaintenanceTask)
            .where(MaintenanceTask.next_due_date >= today)
            .where(MaintenanceTask.next_due_date <= add_days(today, upcoming_days))
            .where(MaintenanceTask.status.notin_(('completed', 'skipped'))),
            'upcoming maintenance count',
        )
        low_inventory = self._scalar(
            select(func.count()).select_from(Consumable)
            .where(Consumable.quantity <= Consumable.min_quantity),
            'low inventory count',
        )
        overdue_calibrations = self._scalar(
            select(func.count()).select_from(MetrologyTool)
            .where(MetrologyTool.next_calibration_date < today)
            .where(MetrologyTool.status != 'out_of_service'),
            'overdue calibration count',
        )

        return {
            'upcomingMaintenanceCount': upcoming,
            'lowInventoryCount': low_inventory,
            'overdueCalibrationsCount': overdue_calibrations,
        }

    def _status_counts(self, model, what: str) -> Dict[str, int]:
        stmt = select(model.status, func.count()).group_by(model.status)
        try:
            return {status: count for status, count in self.session.execute(stmt)}
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to get {what}: {e}") from e

    def get_equipment_status_counts(self) -> Dict[str, int]:
        return self._status_counts(Equipment, 'equipment status counts')

    def get_maintenance_status_counts(self) -> Dict[str, int]:
        return self._status_counts(MaintenanceTask, 'maintenance status counts')

    def get_recent_activity(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Newest changes across the shop, `limit` entries at most"""
        per_type = max(1, math.ceil(limit / 4))
        activities = []

        try:
            for equipment in self.session.scalars(
                select(Equipment).order_by(Equipment.updated_at.desc()).limit(per_type)
            ):
                activities.append({
                    'type': 'equipment',
                    'id': equipment.id,
                    'title': equipment.name,
                    'timestamp': equipment.updated_at,
                    'description': f"Updated equipment: {equipment.name}",
                })

            for task in self.session.scalars(
                select(MaintenanceTask).order_by(MaintenanceTask.updated_at.desc()).limit(per_type)
            ):
                activities.append({
                    'type': 'maintenance',
                    'id': task.id,
                    'title': task.description,
                    'timestamp': task.updated_at,
                    'description': f"Maintenance task: {task.description}",
                })

            for log in self.session.scalars(
                select(CalibrationLog).order_by(CalibrationLog.created_at.desc()).limit(per_type)
            ):
                tool_name = log.metrology_tool.name if log.metrology_tool else log.metrology_tool_id
                activities.append({
                    'type': 'calibration',
                    'id': log.id,
                    'title': tool_name,
                    'timestamp': log.created_at,
                    'description': f"Calibration {log.result}: {tool_name}",
                })

            for record in self.session.scalars(
                select(ServiceRecord).order_by(ServiceRecord.created_at.desc()).limit(per_type)
            ):
                activities.append({
                    'type': 'service',
                    'id': record.id,
                    'title': record.description_of_work,
                    'timestamp': record.created_at,
                    'description': f"Service by {record.performed_by}: {record.description_of_work}",
                })
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to get recent activity: {e}") from e

        activities.sort(key=lambda item: item['timestamp'], reverse=True)
        for item in activities:
            item['timestamp'] = item['timestamp'].isoformat()
        return activities[:limit]
