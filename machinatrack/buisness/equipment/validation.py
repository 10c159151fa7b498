from typing import Any, Dict

from machinatrack.buisness.core.validation import PayloadValidator
from machinatrack.data.equipment.equipment import EQUIPMENT_STATUSES


def validate_equipment(payload: Any, partial: bool = False) -> Dict[str, Any]:
    validator = PayloadValidator(payload, partial=partial)
    validator.string('name', required=True, max_length=200)
    validator.string('model', required=True, max_length=200)
    validator.string('serialNumber', required=True, max_length=100)
    validator.string('location', required=True, max_length=200)
    validator.date('purchaseDate')
    validator.choice('status', EQUIPMENT_STATUSES)
    validator.string('imageUrl', max_length=500)
    validator.string('notes')
    return validator.result("Invalid equipment data")


def _metric_value(validator: PayloadValidator):
    """metricValue: a number or a non-empty string, stored as text"""
    field = 'metricValue'
    if field not in validator.payload:
        if not validator.partial:
            validator.error(field, f"{field} is required")
        return
    value = validator.payload[field]
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        validator.error(field, f"{field} must be a number or a string")
        return
    if isinstance(value, str) and not value.strip():
        validator.error(field, f"{field} must not be empty")
        return
    validator.cleaned['metric_value'] = str(value)


def validate_machine_log(payload: Any, partial: bool = False) -> Dict[str, Any]:
    validator = PayloadValidator(payload, partial=partial)
    validator.string('equipmentId', required=True)
    validator.datetime('timestamp', required=True)
    validator.string('errorCode', max_length=100)
    validator.string('metricName', required=True, max_length=200)
    _metric_value(validator)
    validator.string('notes')
    return validator.result("Invalid machine log data")
