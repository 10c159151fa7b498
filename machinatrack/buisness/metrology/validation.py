from typing import Any, Dict

from machinatrack.buisness.core.validation import PayloadValidator
from machinatrack.data.metrology.metrology_tools import METROLOGY_STATUSES


def validate_metrology_tool(payload: Any, partial: bool = False) -> Dict[str, Any]:
    validator = PayloadValidator(payload, partial=partial)
    validator.string('name', required=True, max_length=200)
    validator.string('type', required=True, max_length=100)
    validator.string('serialNumber', required=True, max_length=100)
    validator.string('manufacturer', max_length=200)
    validator.integer('calibrationIntervalDays', required=True, minimum=1)
    validator.date('lastCalibrationDate')
    validator.date('nextCalibrationDate')
    validator.string('location', max_length=200)
    validator.choice('status', METROLOGY_STATUSES)
    validator.string('imageUrl', max_length=500)
    validator.string('notes')
    return validator.result("Invalid metrology tool data")
