"""
Maintenance Task Context
Business logic for the maintenance task lifecycle.

Handles:
- Completion: service record creation plus the recurrence transition, in one transaction
- Idempotent retries of a completion (Idempotency-Key)
- Start and skip transitions
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from machinatrack.buisness.core.errors import DuplicateError, NotFoundError
from machinatrack.buisness.core.validation import PayloadValidator
from machinatrack.data.maintenance.maintenance_tasks import MaintenanceTask
from machinatrack.data.maintenance.service_records import ServiceRecord
from machinatrack.logger import get_logger
from machinatrack.services.core.unit_of_work import UnitOfWork
from machinatrack.utils.dates import add_days, today_utc

logger = get_logger("machinatrack.buisness.maintenance")


@dataclass
class CompletionDetails:
    """Work-performed details supplied when a task is completed"""
    performed_by: str
    description_of_work: str
    cost: Optional[float] = None
    notes: Optional[str] = None
    attachments: Optional[List[str]] = None
    idempotency_key: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any, idempotency_key: Optional[str] = None) -> 'CompletionDetails':
        """
        Build from a camelCase request payload.

        Args:
            payload: {performedBy, descriptionOfWork, cost?, notes?, attachments?, idempotencyKey?}
            idempotency_key: Key from the Idempotency-Key header; wins over the payload field

        Raises:
            ValidationError: One detail entry per invalid field
        """
        validator = PayloadValidator(payload)
        validator.string('performedBy', required=True, max_length=200)
        validator.string('descriptionOfWork', required=True)
        validator.number('cost', minimum=0)
        validator.string('notes')
        validator.string_list('attachments')
        validator.string('idempotencyKey', max_length=200)
        cleaned = validator.result("Invalid completion data")

        return cls(
            performed_by=cleaned['performed_by'],
            description_of_work=cleaned['description_of_work'],
            cost=cleaned.get('cost'),
            notes=cleaned.get('notes'),
            attachments=cleaned.get('attachments'),
            idempotency_key=idempotency_key or cleaned.get('idempotency_key'),
        )


@dataclass
class CompletionResult:
    task: MaintenanceTask
    service_record: ServiceRecord
    replayed: bool = field(default=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'task': self.task.to_dict(),
            'serviceRecord': self.service_record.to_dict(),
        }


def compute_task_update(frequency_days: Optional[int], prior_record_ids: Optional[List[str]],
                        record_id: str, today: date) -> Dict[str, Any]:
    """
    Task fields after a completion on `today`.

    A positive frequency reschedules the task and puts it back to pending.
    Anything else (missing, zero or negative) is a one-time task: its due date
    is cleared and it settles in completed.
    """
    if frequency_days and frequency_days > 0:
        next_due_date = add_days(today, frequency_days)
        status = 'pending'
    else:
        next_due_date = None
        status = 'completed'

    return {
        'last_performed_date': today,
        'next_due_date': next_due_date,
        'status': status,
        'service_record_ids': list(prior_record_ids or []) + [record_id],
    }


class MaintenanceTaskContext:
    """
    Workflow operations on a single maintenance task.

    Every operation runs inside `uow.transaction()`, so the service record and
    the task update are committed together or not at all.
    """

    def __init__(self, uow: UnitOfWork, task_id: str):
        self._uow = uow
        self._task_id = task_id

    @property
    def task_id(self) -> str:
        return self._task_id

    @property
    def task(self) -> MaintenanceTask:
        """The current task row; raises NotFoundError when it does not exist"""
        task = self._uow.maintenance_tasks.find_by_id(self._task_id)
        if task is None:
            raise NotFoundError('Maintenance task', self._task_id)
        return task

    def complete(self, details, today: Optional[date] = None) -> CompletionResult:
        """
        Record completed work and move the task to its next state.

        Args:
            details: CompletionDetails, or a raw camelCase payload
            today: Completion date (defaults to the UTC calendar date)

        Returns:
            CompletionResult with the updated task and the service record

        Raises:
            ValidationError: Invalid payload, raised before anything is read or written
            NotFoundError: Task does not exist
            DuplicateError: Idempotency key already used by another task
            DatabaseError: Persistence failure (transaction rolled back)
        """
        if not isinstance(details, CompletionDetails):
            details = CompletionDetails.from_dict(details)
        today = today or today_utc()

        task = self.task

        with self._uow.transaction():
            if details.idempotency_key:
                existing = self._uow.service_records.find_by_idempotency_key(details.idempotency_key)
                if existing is not None:
                    if existing.maintenance_task_id != task.id:
                        raise DuplicateError('Service record', 'idempotency key')
                    logger.info(
                        f"Completion of task {task.id} replayed for idempotency key "
                        f"{details.idempotency_key}; returning service record {existing.id}"
                    )
                    return CompletionResult(task=task, service_record=existing, replayed=True)

            record = self._uow.service_records.create({
                'maintenance_task_id': task.id,
                'date': today,
                'performed_by': details.performed_by,
                'description_of_work': details.description_of_work,
                'cost': details.cost,
                'notes': details.notes,
                'attachments': details.attachments,
                'idempotency_key': details.idempotency_key,
            })

            update = compute_task_update(task.frequency_days, task.service_record_ids, record.id, today)
            self._uow.maintenance_tasks.update(task.id, update)

        logger.info(
            f"Maintenance task {task.id} completed by {details.performed_by}: "
            f"status={task.status}, next_due_date={task.next_due_date}, service_record={record.id}"
        )
        return CompletionResult(task=task, service_record=record)

    def start(self) -> MaintenanceTask:
        """Mark the task in progress"""
        task = self.task
        with self._uow.transaction():
            self._uow.maintenance_tasks.update(task.id, {'status': 'in_progress'})
        logger.info(f"Maintenance task {task.id} started")
        return task

    def skip(self, notes: Optional[str] = None) -> MaintenanceTask:
        """Mark the task skipped; notes, when given, replace the task notes"""
        task = self.task
        update = {'status': 'skipped'}
        if notes is not None:
            update['notes'] = notes
        with self._uow.transaction():
            self._uow.maintenance_tasks.update(task.id, update)
        logger.info(f"Maintenance task {task.id} skipped")
        return task
