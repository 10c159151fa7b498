"""
Data layer: SQLAlchemy models for the shop's records
"""

from .equipment.equipment import Equipment
from .equipment.machine_logs import MachineLogEntry
from .maintenance.maintenance_tasks import MaintenanceTask, MaintenancePart
from .maintenance.service_records import ServiceRecord
from .metrology.metrology_tools import MetrologyTool
from .metrology.calibration_logs import CalibrationLog
from .inventory.consumables import Consumable
from .inventory.cutting_tools import CuttingTool
from .settings.lookups import (
    ConsumableMaterial,
    ConsumableType,
    CuttingToolMaterial,
    CuttingToolType,
    Location,
    Manufacturer,
    MetrologyToolType,
)

__all__ = [
    'Equipment',
    'MachineLogEntry',
    'MaintenanceTask',
    'MaintenancePart',
    'ServiceRecord',
    'MetrologyTool',
    'CalibrationLog',
    'Consumable',
    'CuttingTool',
    'Location',
    'Manufacturer',
    'MetrologyToolType',
    'ConsumableType',
    'ConsumableMaterial',
    'CuttingToolType',
    'CuttingToolMaterial',
]
