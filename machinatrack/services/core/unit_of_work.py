"""
Unit of Work
Groups every repository over a single session and owns the commit boundary.
"""

from contextlib import contextmanager

from sqlalchemy.orm import Session

from machinatrack.buisness.core.errors import DatabaseError
from machinatrack.logger import get_logger
from machinatrack.services.core.dashboard_service import DashboardService
from machinatrack.services.equipment.equipment_repository import EquipmentRepository
from machinatrack.services.equipment.machine_log_repository import MachineLogRepository
from machinatrack.services.inventory.consumable_repository import ConsumableRepository
from machinatrack.services.inventory.cutting_tool_repository import CuttingToolRepository
from machinatrack.services.maintenance.maintenance_task_repository import MaintenanceTaskRepository
from machinatrack.services.maintenance.service_record_repository import ServiceRecordRepository
from machinatrack.services.metrology.calibration_log_repository import CalibrationLogRepository
from machinatrack.services.metrology.metrology_tool_repository import MetrologyToolRepository
from machinatrack.services.settings.lookup_repository import lookup_repositories

logger = get_logger("machinatrack.services.unit_of_work")


class UnitOfWork:
    """
    Repositories for one request (or one test) sharing a session.

    Usage:
        uow = UnitOfWork(db.session)
        with uow.transaction():
            uow.equipment.create({...})
    """

    def __init__(self, session: Session):
        self.session = session
        self.equipment = EquipmentRepository(session)
        self.maintenance_tasks = MaintenanceTaskRepository(session)
        self.service_records = ServiceRecordRepository(session)
        self.metrology_tools = MetrologyToolRepository(session)
        self.calibration_logs = CalibrationLogRepository(session)
        self.machine_logs = MachineLogRepository(session)
        self.consumables = ConsumableRepository(session)
        self.cutting_tools = CuttingToolRepository(session)
        self.settings = lookup_repositories(session)
        self.dashboard = DashboardService(session)

    @contextmanager
    def transaction(self):
        """Commit when the block exits cleanly; otherwise roll back and re-raise"""
        try:
            yield self
            self.session.commit()
        except Exception as e:
            self.session.rollback()
            if isinstance(e, DatabaseError) and e.status_code < 500:
                logger.warning(f"Transaction rolled back: {type(e).__name__}: {e}")
            else:
                logger.error(f"Transaction rolled back: {type(e).__name__}: {e}")
            raise
