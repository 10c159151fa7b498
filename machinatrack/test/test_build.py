"""
Database build and debug data loading.
"""

from datetime import date

from machinatrack.build import build_database


def test_build_without_debug_data(app, uow):
    assert build_database(enable_debug_data=False, app=app) == {}
    assert uow.equipment.count() == 0


def test_build_inserts_sample_shop(app, uow):
    summary = build_database(enable_debug_data=True, app=app)

    assert {name: entry['status'] for name, entry in summary.items()} == {
        'settings': 'inserted',
        'equipment': 'inserted',
        'metrology': 'inserted',
        'inventory': 'inserted',
    }
    assert uow.equipment.count() == 3
    assert uow.consumables.count() == 3
    assert uow.cutting_tools.count() == 2
    assert [tap.name for tap in uow.cutting_tools.find_low_inventory()] == ['1/4-20 Spiral Point Tap']
    assert uow.settings['locations'].find_by_name('QC Lab') is not None

    # The sample completion runs through the completion workflow
    mill = uow.equipment.find_by_serial_number('HAAS-VF2-1001')
    lube_task = next(t for t in mill.maintenance_tasks if t.frequency_days == 7)
    assert lube_task.last_performed_date == date(2025, 6, 13)
    assert lube_task.next_due_date == date(2025, 6, 20)
    assert len(lube_task.service_record_ids) == 1

    alarms = uow.machine_logs.find_by_error_code('ALM-108')
    assert [entry.equipment_id for entry in alarms] == [mill.id]
    assert [entry.metric_name for entry in uow.machine_logs.find_by_equipment_id(mill.id)] == [
        'servo_state', 'coolant_temp_c', 'spindle_load_pct',
    ]

    # The sample calibrations run through the calibration workflow
    caliper = uow.metrology_tools.find_by_serial_number('STAR-799A-6')
    assert caliper.status == 'out_of_calibration'
    assert caliper.next_calibration_date == date(2025, 2, 28)


def test_build_skips_present_data(app):
    build_database(enable_debug_data=True, app=app)
    summary = build_database(enable_debug_data=True, app=app)

    assert all(entry == {'status': 'skipped', 'reason': 'data_present'} for entry in summary.values())
