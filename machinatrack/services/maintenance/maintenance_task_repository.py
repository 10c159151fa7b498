"""
Maintenance Task Repository
Persists maintenance tasks together with their partsUsed rows.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import or_, select

from machinatrack.data.maintenance.maintenance_tasks import MaintenanceTask
from machinatrack.services.core.base_repository import BaseRepository
from machinatrack.utils.dates import add_days, today_utc


class MaintenanceTaskRepository(BaseRepository[MaintenanceTask]):
    model = MaintenanceTask
    resource_name = 'Maintenance task'

    def create(self, data: Dict[str, Any]) -> MaintenanceTask:
        task = MaintenanceTask.from_dict(data)
        if task.service_record_ids is None:
            task.service_record_ids = []
        task.replace_parts(data.get('parts_used'))
        self.session.add(task)
        self._flush('create')
        return task

    def update(self, record_id: str, data: Dict[str, Any]) -> Optional[MaintenanceTask]:
        task = self.find_by_id(record_id)
        if task is None:
            return None
        task.apply_dict(data)
        if 'parts_used' in data:
            task.replace_parts(data['parts_used'])
        self._flush('update')
        return task

    def find_by_equipment_id(self, equipment_id: str) -> List[MaintenanceTask]:
        stmt = (
            select(MaintenanceTask)
            .where(MaintenanceTask.equipment_id == equipment_id)
            .order_by(MaintenanceTask.updated_at.desc())
        )
        return self._all(stmt)

    def find_by_status(self, status: str) -> List[MaintenanceTask]:
        stmt = (
            select(MaintenanceTask)
            .where(MaintenanceTask.status == status)
            .order_by(MaintenanceTask.updated_at.desc())
        )
        return self._all(stmt)

    def find_by_assignee(self, assigned_to: str) -> List[MaintenanceTask]:
        stmt = (
            select(MaintenanceTask)
            .where(MaintenanceTask.assigned_to == assigned_to)
            .order_by(MaintenanceTask.updated_at.desc())
        )
        return self._all(stmt)

    def find_upcoming(self, days: int = 7, today: Optional[date] = None) -> List[MaintenanceTask]:
        """Tasks whose next due date falls within [today, today + days]"""
        start = today or today_utc()
        stmt = (
            select(MaintenanceTask)
            .where(MaintenanceTask.next_due_date >= start)
            .where(MaintenanceTask.next_due_date <= add_days(start, days))
            .order_by(MaintenanceTask.next_due_date.asc())
        )
        return self._all(stmt)

    def find_overdue(self, as_of: Optional[date] = None) -> List[MaintenanceTask]:
        """Tasks past their next due date that are not completed"""
        compare_date = as_of or today_utc()
        stmt = (
            select(MaintenanceTask)
            .where(MaintenanceTask.next_due_date < compare_date)
            .where(MaintenanceTask.status != 'completed')
            .order_by(MaintenanceTask.next_due_date.asc())
        )
        return self._all(stmt)

    def search(self, query: str) -> List[MaintenanceTask]:
        pattern = f'%{query}%'
        stmt = (
            select(MaintenanceTask)
            .where(or_(
                MaintenanceTask.description.ilike(pattern),
                MaintenanceTask.notes.ilike(pattern),
                MaintenanceTask.assigned_to.ilike(pattern),
            ))
            .order_by(MaintenanceTask.updated_at.desc())
        )
        return self._all(stmt)
