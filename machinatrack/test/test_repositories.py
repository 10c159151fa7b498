"""
Repository behaviour against an in-memory database.
"""

from datetime import date, datetime

import pytest

from machinatrack.buisness.core.errors import DuplicateError, ImmutableRecordError


def test_equipment_crud(uow, equipment):
    assert uow.equipment.find_by_id(equipment.id).name == 'Haas VF-2'

    with uow.transaction():
        updated = uow.equipment.update(equipment.id, {'status': 'maintenance', 'id': 'hijacked'})
    assert updated.status == 'maintenance'
    assert updated.id == equipment.id

    assert uow.equipment.update('missing', {'status': 'maintenance'}) is None
    assert uow.equipment.delete('missing') is False
    assert uow.equipment.count() == 1


def test_duplicate_serial_number_raises(uow, equipment):
    with pytest.raises(DuplicateError) as excinfo:
        with uow.transaction():
            uow.equipment.create({
                'name': 'Second mill',
                'model': 'VF-2',
                'serial_number': 'VF2-0001',
                'location': 'Bay 2',
            })
    assert excinfo.value.status_code == 409
    assert 'serial number' in str(excinfo.value)
    assert uow.equipment.count() == 1


def test_equipment_finders(uow, equipment):
    with uow.transaction():
        uow.equipment.create({
            'name': 'Mazak Lathe',
            'model': 'QT-250',
            'serial_number': 'QT-0002',
            'location': 'Bay 2',
            'status': 'decommissioned',
        })

    assert [e.serial_number for e in uow.equipment.find_by_status('decommissioned')] == ['QT-0002']
    assert [e.name for e in uow.equipment.find_by_location('Bay 1')] == ['Haas VF-2']
    assert uow.equipment.find_by_serial_number('QT-0002').name == 'Mazak Lathe'
    assert uow.equipment.find_by_serial_number('nope') is None
    assert [e.name for e in uow.equipment.search('mazak')] == ['Mazak Lathe']


def test_deleting_equipment_cascades_to_tasks_and_records(uow, equipment, make_task):
    task = make_task(parts_used=[{'part_name': 'Filter', 'quantity': 1}])
    with uow.transaction():
        record = uow.service_records.create({
            'maintenance_task_id': task.id,
            'date': date(2025, 6, 1),
            'performed_by': 'Dana',
            'description_of_work': 'Changed filter',
        })

    assert uow.equipment.find_by_id(equipment.id).to_dict()['maintenanceScheduleIds'] == [task.id]

    with uow.transaction():
        assert uow.equipment.delete(equipment.id) is True

    assert uow.maintenance_tasks.find_by_id(task.id) is None
    assert uow.service_records.find_by_id(record.id) is None


def test_parts_used_replaced_wholesale(uow, make_task):
    task = make_task(parts_used=[
        {'part_name': 'Way lube', 'quantity': 1},
        {'part_name': 'Wiper', 'quantity': 2},
    ])
    assert task.to_dict()['partsUsed'] == [
        {'partName': 'Way lube', 'quantity': 1},
        {'partName': 'Wiper', 'quantity': 2},
    ]

    with uow.transaction():
        uow.maintenance_tasks.update(task.id, {'parts_used': [{'part_name': 'Filter', 'quantity': 3}]})

    assert uow.maintenance_tasks.find_by_id(task.id).parts_used == [{'partName': 'Filter', 'quantity': 3}]


def test_upcoming_and_overdue_tasks(uow, make_task):
    today = date(2025, 6, 18)
    due_soon = make_task(description='Due soon', next_due_date=date(2025, 6, 20))
    make_task(description='Far away', next_due_date=date(2025, 9, 1))
    late = make_task(description='Late', next_due_date=date(2025, 6, 1))
    make_task(description='Late but done', next_due_date=date(2025, 6, 1), status='completed')

    assert [t.id for t in uow.maintenance_tasks.find_upcoming(7, today=today)] == [due_soon.id]
    assert [t.id for t in uow.maintenance_tasks.find_overdue(as_of=today)] == [late.id]


def test_task_finders(uow, equipment, make_task):
    assigned = make_task(assigned_to='Sam', description='Grease ballscrews')
    make_task(status='in_progress')

    assert [t.id for t in uow.maintenance_tasks.find_by_assignee('Sam')] == [assigned.id]
    assert len(uow.maintenance_tasks.find_by_status('in_progress')) == 1
    assert len(uow.maintenance_tasks.find_by_equipment_id(equipment.id)) == 2
    assert [t.id for t in uow.maintenance_tasks.search('ballscrew')] == [assigned.id]


def test_service_records_sorted_newest_first(uow, equipment, make_task):
    task = make_task()
    with uow.transaction():
        for day in (1, 15, 8):
            uow.service_records.create({
                'maintenance_task_id': task.id,
                'date': date(2025, 6, day),
                'performed_by': 'Dana',
                'description_of_work': f'Visit {day}',
            })

    dates = [r.date.day for r in uow.service_records.find_by_task_id(task.id)]
    assert dates == [15, 8, 1]
    assert [r.date.day for r in uow.service_records.find_all()] == [15, 8, 1]
    assert len(uow.service_records.find_by_equipment_id(equipment.id)) == 3
    assert len(uow.service_records.find_by_performer('Dana')) == 3
    in_range = uow.service_records.find_by_date_range(date(2025, 6, 5), date(2025, 6, 10))
    assert [r.description_of_work for r in in_range] == ['Visit 8']


def test_deleting_service_record_unlinks_task(uow, make_task):
    task = make_task()
    with uow.transaction():
        record = uow.service_records.create({
            'maintenance_task_id': task.id,
            'date': date(2025, 6, 1),
            'performed_by': 'Dana',
            'description_of_work': 'Changed filter',
        })
        task.service_record_ids = [record.id]

    with uow.transaction():
        assert uow.service_records.delete(record.id) is True

    assert uow.maintenance_tasks.find_by_id(task.id).service_record_ids == []


def test_service_records_cannot_be_updated(uow, make_task):
    with pytest.raises(ImmutableRecordError) as excinfo:
        uow.service_records.update('any', {'notes': 'edited'})
    assert excinfo.value.status_code == 409

    task = make_task()
    with uow.transaction():
        record = uow.service_records.create({
            'maintenance_task_id': task.id,
            'date': date(2025, 6, 1),
            'performed_by': 'Dana',
            'description_of_work': 'Changed coolant',
        })

    # Edits made straight on the mapped object are rejected at flush time
    with pytest.raises(ImmutableRecordError, match='immutable'):
        with uow.transaction():
            record.performed_by = 'Someone else'
    assert uow.service_records.find_by_id(record.id).performed_by == 'Dana'


def test_calibration_queries_skip_out_of_service_tools(uow, make_tool):
    as_of = date(2025, 6, 18)
    due_today = make_tool('T1', next_calibration_date=as_of)
    overdue = make_tool('T2', next_calibration_date=date(2025, 5, 1))
    make_tool('T3', next_calibration_date=date(2025, 5, 1), status='out_of_service')
    make_tool('T4', next_calibration_date=date(2025, 12, 1))

    due_ids = {t.id for t in uow.metrology_tools.find_due_for_calibration(as_of)}
    assert due_ids == {due_today.id, overdue.id}
    assert [t.id for t in uow.metrology_tools.find_overdue_calibration(as_of)] == [overdue.id]
    assert uow.metrology_tools.find_by_serial_number('T4') is not None
    assert len(uow.metrology_tools.search('micrometer')) == 4


def test_consumable_queries(uow):
    with uow.transaction():
        low = uow.consumables.create({
            'name': 'CNMG Insert', 'type': 'Insert', 'quantity': 2, 'min_quantity': 10,
            'location': 'Crib A',
        })
        uow.consumables.create({
            'name': 'End Mill', 'type': 'End Mill', 'quantity': 12, 'min_quantity': 5,
            'location': 'Crib B', 'end_of_life_date': date(2025, 6, 1),
        })

    assert [c.id for c in uow.consumables.find_low_inventory()] == [low.id]
    assert low.to_dict()['lowInventory'] is True
    assert [c.name for c in uow.consumables.find_by_location('Crib B')] == ['End Mill']
    assert [c.name for c in uow.consumables.find_by_type('Insert')] == ['CNMG Insert']
    assert [c.name for c in uow.consumables.find_end_of_life(date(2025, 6, 18))] == ['End Mill']
    assert [c.name for c in uow.consumables.search('cnmg')] == ['CNMG Insert']

    with uow.transaction():
        uow.consumables.update_quantity(low.id, 25)
    assert uow.consumables.find_by_id(low.id).is_low_inventory is False


def test_find_all_paginates(uow):
    with uow.transaction():
        for index in range(5):
            uow.consumables.create({
                'name': f'Item {index}', 'type': 'Misc', 'quantity': 1, 'min_quantity': 0,
                'location': 'Crib',
            })

    assert len(uow.consumables.find_all(limit=2)) == 2
    assert len(uow.consumables.find_all(limit=10, offset=4)) == 1
    assert uow.consumables.count() == 5


def test_cutting_tool_queries(uow):
    with uow.transaction():
        tap = uow.cutting_tools.create({
            'name': '1/4-20 Tap', 'type': 'Tap', 'material': 'HSS', 'size': '1/4-20',
            'quantity': 1, 'min_quantity': 3, 'location': 'Crib B',
        })
        uow.cutting_tools.create({
            'name': '1/2in End Mill', 'type': 'End Mill', 'material': 'Carbide', 'size': '1/2in',
            'quantity': 8, 'min_quantity': 2, 'location': 'Crib A', 'end_of_life_date': date(2025, 6, 1),
        })

    assert [t.id for t in uow.cutting_tools.find_low_inventory()] == [tap.id]
    assert [t.name for t in uow.cutting_tools.find_by_type('End Mill')] == ['1/2in End Mill']
    assert [t.name for t in uow.cutting_tools.find_by_location('Crib B')] == ['1/4-20 Tap']
    assert [t.name for t in uow.cutting_tools.search('carbide')] == ['1/2in End Mill']
    assert [t.name for t in uow.cutting_tools.find_end_of_life(date(2025, 6, 18))] == ['1/2in End Mill']

    # Cutting tools live in their own table
    assert uow.consumables.count() == 0

    with uow.transaction():
        uow.cutting_tools.update_quantity(tap.id, 10)
    assert uow.cutting_tools.find_by_id(tap.id).to_dict()['lowInventory'] is False


def test_machine_log_queries(uow, equipment):
    with uow.transaction():
        other = uow.equipment.create({
            'name': 'Mazak QT-250', 'model': 'QT-250', 'serial_number': 'QT-1', 'location': 'Bay 2',
        })
        load = uow.machine_logs.create({
            'equipment_id': equipment.id, 'timestamp': datetime(2025, 6, 18, 8, 0),
            'metric_name': 'spindle_load_pct', 'metric_value': '55',
        })
        alarm = uow.machine_logs.create({
            'equipment_id': equipment.id, 'timestamp': datetime(2025, 6, 18, 11, 30),
            'error_code': 'ALM-108', 'metric_name': 'servo_state', 'metric_value': 'OVERLOAD',
        })
        old = uow.machine_logs.create({
            'equipment_id': equipment.id, 'timestamp': datetime(2025, 6, 10, 9, 0),
            'metric_name': 'spindle_load_pct', 'metric_value': '61.5',
        })
        uow.machine_logs.create({
            'equipment_id': other.id, 'timestamp': datetime(2025, 6, 18, 9, 0),
            'metric_name': 'spindle_load_pct', 'metric_value': '40',
        })

    assert [e.id for e in uow.machine_logs.find_by_equipment_id(equipment.id)] == [alarm.id, load.id, old.id]
    assert [e.id for e in uow.machine_logs.find_by_equipment_id(equipment.id, limit=1)] == [alarm.id]
    assert [e.id for e in uow.machine_logs.find_by_error_code('ALM-108')] == [alarm.id]
    assert len(uow.machine_logs.find_by_metric('spindle_load_pct')) == 3
    assert [e.id for e in uow.machine_logs.find_by_date_range(
        equipment.id, datetime(2025, 6, 18), datetime(2025, 6, 18, 23, 59))] == [alarm.id, load.id]
    assert [e.id for e in uow.machine_logs.find_recent(
        equipment.id, hours=3, now=datetime(2025, 6, 18, 12, 0))] == [alarm.id]

    # Numeric text comes back as a number, state strings stay strings
    assert load.to_dict()['metricValue'] == 55
    assert old.to_dict()['metricValue'] == 61.5
    assert alarm.to_dict()['metricValue'] == 'OVERLOAD'

    with uow.transaction():
        uow.equipment.delete(equipment.id)
    assert uow.machine_logs.count() == 1


def test_settings_lists(uow):
    locations = uow.settings['locations']
    with uow.transaction():
        locations.create({'name': 'Bay 2'})
        locations.create({'name': 'Bay 1'})
        uow.settings['manufacturers'].create({'name': 'Bay 1'})

    assert [entry.name for entry in locations.find_all()] == ['Bay 1', 'Bay 2']
    assert locations.find_by_name('Bay 2') is not None
    assert uow.settings['manufacturers'].count() == 1

    with pytest.raises(DuplicateError) as excinfo:
        with uow.transaction():
            locations.create({'name': 'Bay 1'})
    assert str(excinfo.value) == 'Location with this name already exists'
