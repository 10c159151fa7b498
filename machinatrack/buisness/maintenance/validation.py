"""
Validation for maintenance task and service record payloads.
"""

from typing import Any, Dict

from machinatrack.buisness.core.validation import PayloadValidator
from machinatrack.data.maintenance.maintenance_tasks import MAINTENANCE_STATUSES


def _parts_used(validator: PayloadValidator):
    """partsUsed: list of {partName, quantity >= 1}, stored as parts_used"""
    if 'partsUsed' not in validator.payload:
        return
    value = validator.payload['partsUsed']
    if value is None:
        validator.cleaned['parts_used'] = []
        return
    if not isinstance(value, list):
        validator.error('partsUsed', "partsUsed must be a list")
        return

    parts = []
    for index, item in enumerate(value):
        field = f'partsUsed[{index}]'
        if not isinstance(item, dict):
            validator.error(field, f"{field} must be an object")
            continue
        name = item.get('partName')
        quantity = item.get('quantity')
        if not isinstance(name, str) or not name.strip():
            validator.error(f'{field}.partName', "partName is required")
            continue
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            validator.error(f'{field}.quantity', "quantity must be an integer of at least 1")
            continue
        parts.append({'part_name': name, 'quantity': quantity})
    validator.cleaned['parts_used'] = parts


def validate_maintenance_task(payload: Any, partial: bool = False) -> Dict[str, Any]:
    validator = PayloadValidator(payload, partial=partial)
    validator.string('equipmentId', required=True)
    validator.string('description', required=True, max_length=500)
    validator.integer('frequencyDays', minimum=1)
    validator.date('lastPerformedDate')
    validator.date('nextDueDate')
    validator.string('assignedTo', max_length=200)
    validator.string('notes')
    validator.choice('status', MAINTENANCE_STATUSES)
    _parts_used(validator)
    return validator.result("Invalid maintenance task data")


def validate_service_record(payload: Any) -> Dict[str, Any]:
    """Direct service record entry; the completion workflow has its own payload"""
    validator = PayloadValidator(payload)
    validator.string('maintenanceTaskId', required=True)
    validator.date('date', required=True)
    validator.string('performedBy', required=True, max_length=200)
    validator.string('descriptionOfWork', required=True)
    validator.number('cost', minimum=0)
    validator.string('notes')
    validator.string_list('attachments')
    return validator.result("Invalid service record data")
