from datetime import date
from typing import List, Optional

from sqlalchemy import or_, select

from machinatrack.data.metrology.metrology_tools import MetrologyTool
from machinatrack.services.core.base_repository import BaseRepository
from machinatrack.utils.dates import today_utc


class MetrologyToolRepository(BaseRepository[MetrologyTool]):
    model = MetrologyTool
    resource_name = 'Metrology tool'
    unique_field = 'serial number'

    def find_by_status(self, status: str) -> List[MetrologyTool]:
        stmt = select(MetrologyTool).where(MetrologyTool.status == status).order_by(MetrologyTool.name)
        return self._all(stmt)

    def find_due_for_calibration(self, as_of: Optional[date] = None) -> List[MetrologyTool]:
        """Tools due on or before `as_of`; tools taken out of service are ignored"""
        compare_date = as_of or today_utc()
        stmt = (
            select(MetrologyTool)
            .where(MetrologyTool.next_calibration_date <= compare_date)
            .where(MetrologyTool.status != 'out_of_service')
            .order_by(MetrologyTool.next_calibration_date.asc())
        )
        return self._all(stmt)

    def find_overdue_calibration(self, as_of: Optional[date] = None) -> List[MetrologyTool]:
        compare_date = as_of or today_utc()
        stmt = (
            select(MetrologyTool)
            .where(MetrologyTool.next_calibration_date < compare_date)
            .where(MetrologyTool.status != 'out_of_service')
            .order_by(MetrologyTool.next_calibration_date.asc())
        )
        return self._all(stmt)

    def find_by_serial_number(self, serial_number: str) -> Optional[MetrologyTool]:
        stmt = select(MetrologyTool).where(MetrologyTool.serial_number == serial_number)
        matches = self._all(stmt)
        return matches[0] if matches else None

    def search(self, query: str) -> List[MetrologyTool]:
        pattern = f'%{query}%'
        stmt = (
            select(MetrologyTool)
            .where(or_(
                MetrologyTool.name.ilike(pattern),
                MetrologyTool.type.ilike(pattern),
                MetrologyTool.serial_number.ilike(pattern),
                MetrologyTool.manufacturer.ilike(pattern),
                MetrologyTool.location.ilike(pattern),
            ))
            .order_by(MetrologyTool.name)
        )
        return self._all(stmt)
