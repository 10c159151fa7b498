"""
Machine Log Repository
Entries always come back newest first by timestamp.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import select

from machinatrack.data.equipment.machine_logs import MachineLogEntry
from machinatrack.services.core.base_repository import BaseRepository
from machinatrack.utils.dates import utcnow


class MachineLogRepository(BaseRepository[MachineLogEntry]):
    model = MachineLogEntry
    resource_name = 'Machine log entry'

    @staticmethod
    def default_order():
        return (MachineLogEntry.timestamp.desc(), MachineLogEntry.created_at.desc())

    def _newest_first(self, stmt):
        return self._all(stmt.order_by(*self.default_order()))

    def find_by_equipment_id(self, equipment_id: str, limit: Optional[int] = None) -> List[MachineLogEntry]:
        stmt = select(MachineLogEntry).where(MachineLogEntry.equipment_id == equipment_id)
        if limit is not None:
            stmt = stmt.order_by(*self.default_order()).limit(limit)
            return self._all(stmt)
        return self._newest_first(stmt)

    def find_by_date_range(self, equipment_id: str, start: datetime, end: datetime) -> List[MachineLogEntry]:
        """Entries for one machine with start <= timestamp <= end"""
        stmt = (
            select(MachineLogEntry)
            .where(MachineLogEntry.equipment_id == equipment_id)
            .where(MachineLogEntry.timestamp >= start)
            .where(MachineLogEntry.timestamp <= end)
        )
        return self._newest_first(stmt)

    def find_by_error_code(self, error_code: str) -> List[MachineLogEntry]:
        stmt = select(MachineLogEntry).where(MachineLogEntry.error_code == error_code)
        return self._newest_first(stmt)

    def find_by_metric(self, metric_name: str) -> List[MachineLogEntry]:
        stmt = select(MachineLogEntry).where(MachineLogEntry.metric_name == metric_name)
        return self._newest_first(stmt)

    def find_recent(self, equipment_id: str, hours: int = 24,
                    now: Optional[datetime] = None) -> List[MachineLogEntry]:
        since = (now or utcnow()) - timedelta(hours=hours)
        stmt = (
            select(MachineLogEntry)
            .where(MachineLogEntry.equipment_id == equipment_id)
            .where(MachineLogEntry.timestamp >= since)
        )
        return self._newest_first(stmt)
