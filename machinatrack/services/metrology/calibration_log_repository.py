from datetime import date
from typing import List

from sqlalchemy import select

from machinatrack.buisness.core.errors import ImmutableRecordError
from machinatrack.data.metrology.calibration_logs import CalibrationLog
from machinatrack.services.core.base_repository import BaseRepository


class CalibrationLogRepository(BaseRepository[CalibrationLog]):
    model = CalibrationLog
    resource_name = 'Calibration log'

    @staticmethod
    def default_order():
        return (CalibrationLog.date.desc(), CalibrationLog.created_at.desc())

    def update(self, record_id, data):
        raise ImmutableRecordError(self.resource_name, record_id)

    def find_by_tool_id(self, tool_id: str) -> List[CalibrationLog]:
        stmt = (
            select(CalibrationLog)
            .where(CalibrationLog.metrology_tool_id == tool_id)
            .order_by(*self.default_order())
        )
        return self._all(stmt)

    def find_by_date_range(self, start_date: date, end_date: date) -> List[CalibrationLog]:
        stmt = (
            select(CalibrationLog)
            .where(CalibrationLog.date >= start_date)
            .where(CalibrationLog.date <= end_date)
            .order_by(*self.default_order())
        )
        return self._all(stmt)

    def find_by_performer(self, performed_by: str) -> List[CalibrationLog]:
        stmt = (
            select(CalibrationLog)
            .where(CalibrationLog.performed_by == performed_by)
            .order_by(*self.default_order())
        )
        return self._all(stmt)

    def find_by_result(self, result: str) -> List[CalibrationLog]:
        stmt = (
            select(CalibrationLog)
            .where(CalibrationLog.result == result)
            .order_by(*self.default_order())
        )
        return self._all(stmt)
