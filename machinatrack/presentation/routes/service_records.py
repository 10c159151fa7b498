"""
Service record routes
Records are append-only: there is no update endpoint.
"""

from flask import Blueprint, request

from machinatrack.buisness.core.errors import NotFoundError, ValidationError
from machinatrack.buisness.maintenance.validation import validate_service_record
from machinatrack.logger import get_logger
from machinatrack.presentation.routes.responses import (
    date_arg,
    get_uow,
    json_payload,
    list_response,
    pagination_args,
    success_response,
)
from machinatrack.utils.logging_sanitizer import sanitize_dict

logger = get_logger("machinatrack.routes.service_records")

bp = Blueprint('service_records', __name__)


@bp.route('', methods=['GET'])
def list_service_records():
    """Filters: taskId, equipmentId, performedBy, startDate+endDate"""
    uow = get_uow()
    repo = uow.service_records
    limit, offset = pagination_args()

    task_id = request.args.get('taskId')
    equipment_id = request.args.get('equipmentId')
    performed_by = request.args.get('performedBy')
    start_date = date_arg('startDate')
    end_date = date_arg('endDate')

    if task_id:
        return list_response(repo.find_by_task_id(task_id), limit, offset)
    if equipment_id:
        return list_response(repo.find_by_equipment_id(equipment_id), limit, offset)
    if performed_by:
        return list_response(repo.find_by_performer(performed_by), limit, offset)
    if start_date or end_date:
        if not (start_date and end_date):
            raise ValidationError("startDate and endDate must be given together")
        return list_response(repo.find_by_date_range(start_date, end_date), limit, offset)
    return list_response(repo.find_all(limit, offset), limit, offset, repo.count())


@bp.route('', methods=['POST'])
def create_service_record():
    """Log work directly against a task without changing the task's schedule"""
    payload = json_payload()
    data = validate_service_record(payload)
    logger.info(f"Creating service record: {sanitize_dict(payload)}")

    uow = get_uow()
    task = uow.maintenance_tasks.find_by_id(data['maintenance_task_id'])
    if task is None:
        raise NotFoundError('Maintenance task', data['maintenance_task_id'])

    with uow.transaction():
        record = uow.service_records.create(data)
        task.service_record_ids = list(task.service_record_ids or []) + [record.id]
    return success_response(record.to_dict(), 201)


@bp.route('/<record_id>', methods=['GET'])
def get_service_record(record_id):
    record = get_uow().service_records.find_by_id(record_id)
    if record is None:
        raise NotFoundError('Service record', record_id)
    return success_response(record.to_dict())


@bp.route('/<record_id>', methods=['DELETE'])
def delete_service_record(record_id):
    uow = get_uow()
    with uow.transaction():
        if not uow.service_records.delete(record_id):
            raise NotFoundError('Service record', record_id)
    logger.info(f"Deleted service record {record_id}")
    return success_response({'id': record_id})
