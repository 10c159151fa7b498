from datetime import date, datetime

import pytest

from machinatrack.buisness.core.errors import ValidationError
from machinatrack.buisness.core.validation import PayloadValidator, to_snake
from machinatrack.buisness.inventory.validation import validate_consumable, validate_quantity
from machinatrack.buisness.maintenance.validation import validate_maintenance_task


def test_to_snake():
    assert to_snake('serialNumber') == 'serial_number'
    assert to_snake('calibrationIntervalDays') == 'calibration_interval_days'
    assert to_snake('name') == 'name'


def test_payload_must_be_object():
    with pytest.raises(ValidationError, match='JSON object'):
        PayloadValidator(['not', 'a', 'dict'])


def test_partial_update_skips_missing_required_fields():
    cleaned = validate_maintenance_task({'status': 'overdue'}, partial=True)
    assert cleaned == {'status': 'overdue'}


def test_required_field_cannot_be_nulled_on_update():
    with pytest.raises(ValidationError) as excinfo:
        validate_maintenance_task({'description': None}, partial=True)
    assert excinfo.value.details == [{'field': 'description', 'message': 'description is required'}]


def test_task_payload_is_converted():
    cleaned = validate_maintenance_task({
        'equipmentId': 'e1',
        'description': 'Grease',
        'frequencyDays': 14.0,
        'nextDueDate': '2025-07-01T00:00:00.000Z',
        'partsUsed': [{'partName': 'Grease cartridge', 'quantity': 2}],
    })
    assert cleaned == {
        'equipment_id': 'e1',
        'description': 'Grease',
        'frequency_days': 14,
        'next_due_date': date(2025, 7, 1),
        'parts_used': [{'part_name': 'Grease cartridge', 'quantity': 2}],
    }


@pytest.mark.parametrize('payload, field', [
    ({'nextDueDate': '07/01/2025'}, 'nextDueDate'),
    ({'status': 'done'}, 'status'),
    ({'frequencyDays': True}, 'frequencyDays'),
    ({'partsUsed': [{'partName': 'Filter', 'quantity': 0}]}, 'partsUsed[0].quantity'),
    ({'partsUsed': [{'quantity': 1}]}, 'partsUsed[0].partName'),
])
def test_task_payload_errors(payload, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_maintenance_task(payload, partial=True)
    assert [d['field'] for d in excinfo.value.details] == [field]


def test_consumable_costs_cannot_be_negative():
    with pytest.raises(ValidationError) as excinfo:
        validate_consumable({
            'name': 'Insert', 'type': 'Insert', 'quantity': 1, 'minQuantity': 0,
            'location': 'Crib', 'costPerUnit': -2,
        })
    assert excinfo.value.details[0]['field'] == 'costPerUnit'


def test_validate_quantity():
    assert validate_quantity({'quantity': 0}) == 0
    with pytest.raises(ValidationError):
        validate_quantity({})


def test_explicit_null_rejected_for_non_nullable_fields():
    validator = PayloadValidator({'status': None, 'count': None, 'notes': None}, partial=True)
    validator.choice('status', ('open', 'closed'))
    validator.integer('count', nullable=False)
    validator.string('notes')
    with pytest.raises(ValidationError) as excinfo:
        validator.result()
    assert excinfo.value.details == [
        {'field': 'status', 'message': 'status must not be null'},
        {'field': 'count', 'message': 'count must not be null'},
    ]


def test_datetime_field_is_normalized_to_utc():
    validator = PayloadValidator({'timestamp': '2025-06-18T12:30:00+02:00'})
    validator.datetime('timestamp', required=True)
    assert validator.result() == {'timestamp': datetime(2025, 6, 18, 10, 30)}
