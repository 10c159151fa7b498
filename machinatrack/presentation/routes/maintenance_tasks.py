"""
Maintenance task routes
CRUD plus the complete/start/skip workflow endpoints
"""

from flask import Blueprint, request

from machinatrack.buisness.core.errors import NotFoundError
from machinatrack.buisness.core.validation import PayloadValidator
from machinatrack.buisness.maintenance.maintenance_task_context import (
    CompletionDetails,
    MaintenanceTaskContext,
)
from machinatrack.buisness.maintenance.validation import validate_maintenance_task
from machinatrack.logger import get_logger
from machinatrack.presentation.routes.responses import (
    flag_arg,
    get_uow,
    int_arg,
    json_payload,
    list_response,
    pagination_args,
    success_response,
)
from machinatrack.utils.logging_sanitizer import sanitize_dict

logger = get_logger("machinatrack.routes.maintenance")

bp = Blueprint('maintenance_tasks', __name__)


def _require_equipment(uow, data):
    equipment_id = data.get('equipment_id')
    if equipment_id is not None and uow.equipment.find_by_id(equipment_id) is None:
        raise NotFoundError('Equipment', equipment_id)


@bp.route('', methods=['GET'])
def list_maintenance_tasks():
    """
    List maintenance tasks.

    Filters (first match wins): equipmentId, status, assignedTo,
    upcoming=<days>, overdue=true, search
    """
    uow = get_uow()
    repo = uow.maintenance_tasks
    limit, offset = pagination_args()

    equipment_id = request.args.get('equipmentId')
    status = request.args.get('status')
    assigned_to = request.args.get('assignedTo')
    search = request.args.get('search', '').strip()

    if equipment_id:
        return list_response(repo.find_by_equipment_id(equipment_id), limit, offset)
    if status:
        return list_response(repo.find_by_status(status), limit, offset)
    if assigned_to:
        return list_response(repo.find_by_assignee(assigned_to), limit, offset)
    if 'upcoming' in request.args:
        return list_response(repo.find_upcoming(int_arg('upcoming', 7)), limit, offset)
    if flag_arg('overdue'):
        return list_response(repo.find_overdue(), limit, offset)
    if search:
        return list_response(repo.search(search), limit, offset)
    return list_response(repo.find_all(limit, offset), limit, offset, repo.count())


@bp.route('', methods=['POST'])
def create_maintenance_task():
    payload = json_payload()
    data = validate_maintenance_task(payload)
    logger.info(f"Creating maintenance task: {sanitize_dict(payload)}")

    uow = get_uow()
    _require_equipment(uow, data)
    with uow.transaction():
        task = uow.maintenance_tasks.create(data)
    return success_response(task.to_dict(), 201)


@bp.route('/<task_id>', methods=['GET'])
def get_maintenance_task(task_id):
    task = get_uow().maintenance_tasks.find_by_id(task_id)
    if task is None:
        raise NotFoundError('Maintenance task', task_id)
    return success_response(task.to_dict())


@bp.route('/<task_id>', methods=['PUT'])
def update_maintenance_task(task_id):
    payload = json_payload()
    data = validate_maintenance_task(payload, partial=True)
    logger.info(f"Updating maintenance task {task_id}: {sanitize_dict(payload)}")

    uow = get_uow()
    _require_equipment(uow, data)
    with uow.transaction():
        task = uow.maintenance_tasks.update(task_id, data)
        if task is None:
            raise NotFoundError('Maintenance task', task_id)
    return success_response(task.to_dict())


@bp.route('/<task_id>', methods=['DELETE'])
def delete_maintenance_task(task_id):
    uow = get_uow()
    with uow.transaction():
        if not uow.maintenance_tasks.delete(task_id):
            raise NotFoundError('Maintenance task', task_id)
    logger.info(f"Deleted maintenance task {task_id}")
    return success_response({'id': task_id})


@bp.route('/<task_id>/complete', methods=['POST'])
def complete_maintenance_task(task_id):
    """
    Complete a task: creates a service record and advances the schedule.
    An Idempotency-Key header (or idempotencyKey field) makes retries safe.
    """
    payload = json_payload()
    logger.info(f"Completing maintenance task {task_id}: {sanitize_dict(payload)}")
    details = CompletionDetails.from_dict(payload, idempotency_key=request.headers.get('Idempotency-Key'))

    result = MaintenanceTaskContext(get_uow(), task_id).complete(details)
    return success_response(result.to_dict())


@bp.route('/<task_id>/start', methods=['POST'])
def start_maintenance_task(task_id):
    task = MaintenanceTaskContext(get_uow(), task_id).start()
    return success_response(task.to_dict())


@bp.route('/<task_id>/skip', methods=['POST'])
def skip_maintenance_task(task_id):
    payload = json_payload()
    notes = None
    if payload is not None:
        validator = PayloadValidator(payload)
        validator.string('notes')
        notes = validator.result("Invalid skip data").get('notes')

    task = MaintenanceTaskContext(get_uow(), task_id).skip(notes)
    return success_response(task.to_dict())
