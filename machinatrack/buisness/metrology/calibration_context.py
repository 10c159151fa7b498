"""
Metrology Tool Context
Records calibration events and keeps the tool's calibration schedule in step.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from machinatrack.buisness.core.errors import NotFoundError
from machinatrack.buisness.core.validation import PayloadValidator
from machinatrack.data.metrology.calibration_logs import CALIBRATION_RESULTS, CalibrationLog
from machinatrack.data.metrology.metrology_tools import MetrologyTool
from machinatrack.logger import get_logger
from machinatrack.services.core.unit_of_work import UnitOfWork
from machinatrack.utils.dates import add_days, today_utc

logger = get_logger("machinatrack.buisness.metrology")


@dataclass
class CalibrationDetails:
    performed_by: str
    result: str
    calibration_date: Optional[date] = None
    notes: Optional[str] = None
    certificate_url: Optional[str] = None

    @staticmethod
    def check_fields(validator: PayloadValidator):
        """Add the calibration fields to a validator that may check other fields too"""
        validator.date('date')
        validator.string('performedBy', required=True, max_length=200)
        validator.choice('result', CALIBRATION_RESULTS, required=True)
        validator.string('notes')
        validator.string('certificateUrl', max_length=500)

    @classmethod
    def from_dict(cls, payload: Any) -> 'CalibrationDetails':
        """
        Raises:
            ValidationError: One detail entry per invalid field
        """
        validator = PayloadValidator(payload)
        cls.check_fields(validator)
        return cls.from_cleaned(validator.result("Invalid calibration data"))

    @classmethod
    def from_cleaned(cls, cleaned: Dict[str, Any]) -> 'CalibrationDetails':
        return cls(
            performed_by=cleaned['performed_by'],
            result=cleaned['result'],
            calibration_date=cleaned.get('date'),
            notes=cleaned.get('notes'),
            certificate_url=cleaned.get('certificate_url'),
        )


@dataclass
class CalibrationResult:
    tool: MetrologyTool
    calibration_log: CalibrationLog

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tool': self.tool.to_dict(),
            'calibrationLog': self.calibration_log.to_dict(),
        }


def compute_tool_update(interval_days: int, result: str, calibration_date: date) -> Dict[str, Any]:
    """The next due date follows the interval whatever the result"""
    return {
        'last_calibration_date': calibration_date,
        'next_calibration_date': add_days(calibration_date, interval_days),
        'status': 'calibrated' if result in ('pass', 'adjusted') else 'out_of_calibration',
    }


class MetrologyToolContext:

    def __init__(self, uow: UnitOfWork, tool_id: str):
        self._uow = uow
        self._tool_id = tool_id

    @property
    def tool(self) -> MetrologyTool:
        tool = self._uow.metrology_tools.find_by_id(self._tool_id)
        if tool is None:
            raise NotFoundError('Metrology tool', self._tool_id)
        return tool

    def record_calibration(self, details) -> CalibrationResult:
        """
        Append a calibration log and reschedule the tool, in one transaction.

        Args:
            details: CalibrationDetails, or a raw camelCase payload
                     ({date?, performedBy, result, notes?, certificateUrl?})

        Returns:
            CalibrationResult with the updated tool and the new log

        Raises:
            ValidationError, NotFoundError, DatabaseError
        """
        if not isinstance(details, CalibrationDetails):
            details = CalibrationDetails.from_dict(details)
        calibration_date = details.calibration_date or today_utc()

        tool = self.tool
        update = compute_tool_update(tool.calibration_interval_days, details.result, calibration_date)

        with self._uow.transaction():
            log = self._uow.calibration_logs.create({
                'metrology_tool_id': tool.id,
                'date': calibration_date,
                'performed_by': details.performed_by,
                'result': details.result,
                'notes': details.notes,
                'certificate_url': details.certificate_url,
                'next_due_date': update['next_calibration_date'],
            })
            self._uow.metrology_tools.update(tool.id, update)

        logger.info(
            f"Calibration recorded for tool {tool.id}: result={details.result}, "
            f"status={tool.status}, next_calibration_date={tool.next_calibration_date}"
        )
        return CalibrationResult(tool=tool, calibration_log=log)
