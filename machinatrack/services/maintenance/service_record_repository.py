"""
Service Record Repository
Reads always come back newest first (by service date, then insertion time).
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import select

from machinatrack.buisness.core.errors import ImmutableRecordError
from machinatrack.data.maintenance.maintenance_tasks import MaintenanceTask
from machinatrack.data.maintenance.service_records import ServiceRecord
from machinatrack.services.core.base_repository import BaseRepository


class ServiceRecordRepository(BaseRepository[ServiceRecord]):
    model = ServiceRecord
    resource_name = 'Service record'
    unique_field = 'idempotency key'

    @staticmethod
    def default_order():
        return (ServiceRecord.date.desc(), ServiceRecord.created_at.desc())

    def update(self, record_id, data):
        raise ImmutableRecordError(self.resource_name, record_id)

    def delete(self, record_id: str) -> bool:
        """Delete a record and drop its id from the owning task's serviceRecordIds"""
        record = self.find_by_id(record_id)
        if record is None:
            return False
        task = record.maintenance_task
        if task is not None and record_id in (task.service_record_ids or []):
            task.service_record_ids = [rid for rid in task.service_record_ids if rid != record_id]
        self.session.delete(record)
        self._flush('delete')
        return True

    def find_by_task_id(self, task_id: str) -> List[ServiceRecord]:
        stmt = (
            select(ServiceRecord)
            .where(ServiceRecord.maintenance_task_id == task_id)
            .order_by(*self.default_order())
        )
        return self._all(stmt)

    def find_by_performer(self, performed_by: str) -> List[ServiceRecord]:
        stmt = (
            select(ServiceRecord)
            .where(ServiceRecord.performed_by == performed_by)
            .order_by(*self.default_order())
        )
        return self._all(stmt)

    def find_by_date_range(self, start_date: date, end_date: date) -> List[ServiceRecord]:
        stmt = (
            select(ServiceRecord)
            .where(ServiceRecord.date >= start_date)
            .where(ServiceRecord.date <= end_date)
            .order_by(*self.default_order())
        )
        return self._all(stmt)

    def find_by_equipment_id(self, equipment_id: str) -> List[ServiceRecord]:
        stmt = (
            select(ServiceRecord)
            .join(MaintenanceTask, ServiceRecord.maintenance_task_id == MaintenanceTask.id)
            .where(MaintenanceTask.equipment_id == equipment_id)
            .order_by(*self.default_order())
        )
        return self._all(stmt)

    def find_by_idempotency_key(self, key: str) -> Optional[ServiceRecord]:
        stmt = select(ServiceRecord).where(ServiceRecord.idempotency_key == key)
        matches = self._all(stmt)
        return matches[0] if matches else None
