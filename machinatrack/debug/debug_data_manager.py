#!/usr/bin/env python3
"""
Debug Data Manager
Central controller for sample shop data insertion

Handles:
- Loading debug data JSON files from debug/data/
- Checking if data is already present (by serial number / name)
- Inserting through the same validators, repositories and workflows the API uses
- Following build order: settings → equipment (with tasks and machine logs) → metrology → inventory
- Fail-fast error handling
"""

from pathlib import Path
import json

from machinatrack import db
from machinatrack.buisness.equipment.validation import validate_equipment, validate_machine_log
from machinatrack.buisness.inventory.validation import validate_consumable, validate_cutting_tool
from machinatrack.buisness.maintenance.maintenance_task_context import MaintenanceTaskContext
from machinatrack.buisness.maintenance.validation import validate_maintenance_task
from machinatrack.buisness.metrology.calibration_context import MetrologyToolContext
from machinatrack.buisness.metrology.validation import validate_metrology_tool
from machinatrack.buisness.settings.validation import validate_lookup_name
from machinatrack.logger import get_logger
from machinatrack.services.core.unit_of_work import UnitOfWork
from machinatrack.utils.dates import parse_iso_date

logger = get_logger("machinatrack.debug_data_manager")

MODULES = ['settings', 'equipment', 'metrology', 'inventory']


def insert_debug_data(enabled=True, modules=None):
    """
    Insert debug data for the given modules

    Args:
        enabled (bool): Whether to insert debug data (default: True)
        modules (list, optional): Module names to insert, in build order (default: all)

    Returns:
        dict: Summary of inserted data

    Raises:
        Exception: If any debug data insertion fails (fail-fast)
    """
    if not enabled:
        logger.info("Debug data insertion is disabled")
        return {}

    uow = UnitOfWork(db.session)
    summary = {}

    for module_name in modules or MODULES:
        debug_data = _load_debug_data_file(module_name)
        if not debug_data:
            logger.info(f"No debug data file found for {module_name}, skipping")
            summary[module_name] = {'status': 'skipped', 'reason': 'file_not_found'}
            continue

        if _check_debug_data_present(uow, module_name, debug_data):
            logger.info(f"Debug data for {module_name} already present, skipping")
            summary[module_name] = {'status': 'skipped', 'reason': 'data_present'}
            continue

        logger.info(f"Inserting debug data for {module_name}...")
        try:
            count = _INSERTERS[module_name](uow, debug_data)
        except Exception as e:
            logger.error(f"Failed to insert debug data for {module_name}: {e}")
            db.session.rollback()
            raise
        summary[module_name] = {'status': 'inserted', 'count': count}
        logger.info(f"Successfully inserted debug data for {module_name}")

    logger.info("Debug data insertion completed successfully")
    return summary


def _load_debug_data_file(module_name):
    """
    Load debug data JSON file for a module

    Returns:
        dict: Debug data or None if file doesn't exist
    """
    debug_file = Path(__file__).parent / 'data' / f'{module_name}.json'

    if not debug_file.exists():
        return None

    try:
        with open(debug_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {debug_file}: {e}")
        raise
    logger.debug(f"Loaded debug data file: {debug_file}")
    return data


def _check_debug_data_present(uow, module_name, debug_data):
    """True when any record of the module's sample data already exists"""
    if module_name == 'equipment':
        return any(
            uow.equipment.find_by_serial_number(item['serialNumber'])
            for item in debug_data.get('equipment', [])
        )
    if module_name == 'metrology':
        return any(
            uow.metrology_tools.find_by_serial_number(item['serialNumber'])
            for item in debug_data.get('metrologyTools', [])
        )
    if module_name == 'inventory':
        names = {item['name'] for item in debug_data.get('consumables', [])}
        names.update(item['name'] for item in debug_data.get('cuttingTools', []))
        stocked = uow.consumables.find_all(limit=1000) + uow.cutting_tools.find_all(limit=1000)
        return any(item.name in names for item in stocked)
    if module_name == 'settings':
        return any(
            uow.settings[list_name].find_by_name(name)
            for list_name, entries in debug_data.items()
            for name in entries
        )
    return False


def _insert_equipment(uow, debug_data):
    """
    Equipment entries may nest `maintenanceTasks` and `machineLogs`; a task
    may list `completions`, each replayed through the completion workflow.
    """
    count = 0
    completions = []

    with uow.transaction():
        for item in debug_data.get('equipment', []):
            tasks = item.get('maintenanceTasks', [])
            equipment_payload = {
                k: v for k, v in item.items() if k not in ('maintenanceTasks', 'machineLogs')
            }
            equipment = uow.equipment.create(validate_equipment(equipment_payload))
            count += 1

            for log_item in item.get('machineLogs', []):
                uow.machine_logs.create(validate_machine_log({**log_item, 'equipmentId': equipment.id}))
                count += 1

            for task_item in tasks:
                task_payload = {k: v for k, v in task_item.items() if k != 'completions'}
                task_payload['equipmentId'] = equipment.id
                task = uow.maintenance_tasks.create(validate_maintenance_task(task_payload))
                count += 1
                for completion in task_item.get('completions', []):
                    completions.append((task.id, completion))

    for task_id, completion in completions:
        details = {k: v for k, v in completion.items() if k != 'date'}
        MaintenanceTaskContext(uow, task_id).complete(details, today=parse_iso_date(completion['date']))
        count += 1

    return count


def _insert_metrology(uow, debug_data):
    count = 0
    calibrations = []

    with uow.transaction():
        for item in debug_data.get('metrologyTools', []):
            tool_payload = {k: v for k, v in item.items() if k != 'calibrations'}
            tool = uow.metrology_tools.create(validate_metrology_tool(tool_payload))
            count += 1
            for calibration in item.get('calibrations', []):
                calibrations.append((tool.id, calibration))

    for tool_id, calibration in calibrations:
        MetrologyToolContext(uow, tool_id).record_calibration(calibration)
        count += 1

    return count


def _insert_inventory(uow, debug_data):
    consumables = debug_data.get('consumables', [])
    cutting_tools = debug_data.get('cuttingTools', [])
    with uow.transaction():
        for item in consumables:
            uow.consumables.create(validate_consumable(item))
        for item in cutting_tools:
            uow.cutting_tools.create(validate_cutting_tool(item))
    return len(consumables) + len(cutting_tools)


def _insert_settings(uow, debug_data):
    """settings.json maps each settings list slug to its entry names"""
    count = 0
    with uow.transaction():
        for list_name, names in debug_data.items():
            for name in names:
                uow.settings[list_name].create({'name': validate_lookup_name({'name': name})})
                count += 1
    return count


_INSERTERS = {
    'settings': _insert_settings,
    'equipment': _insert_equipment,
    'metrology': _insert_metrology,
    'inventory': _insert_inventory,
}
