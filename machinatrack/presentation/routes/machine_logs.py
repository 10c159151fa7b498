"""
Machine log routes
Readings and alarms reported per machine, newest first
"""

from flask import Blueprint, request

from machinatrack.buisness.core.errors import NotFoundError, ValidationError
from machinatrack.buisness.equipment.validation import validate_machine_log
from machinatrack.logger import get_logger
from machinatrack.presentation.routes.responses import (
    datetime_arg,
    flag_arg,
    get_uow,
    int_arg,
    json_payload,
    list_response,
    pagination_args,
    success_response,
)
from machinatrack.utils.logging_sanitizer import sanitize_dict

logger = get_logger("machinatrack.routes.machine_logs")

bp = Blueprint('machine_logs', __name__)

DEFAULT_RECENT_HOURS = 24


def _require_equipment(uow, data):
    equipment_id = data.get('equipment_id')
    if equipment_id is not None and uow.equipment.find_by_id(equipment_id) is None:
        raise NotFoundError('Equipment', equipment_id)


@bp.route('', methods=['GET'])
def list_machine_logs():
    """
    List machine log entries.

    Filters (first match wins):
        equipmentId + startDate + endDate
        equipmentId + recent=true (hours=<n>, default 24)
        equipmentId
        errorCode
        metricName
    """
    uow = get_uow()
    repo = uow.machine_logs
    limit, offset = pagination_args()

    equipment_id = request.args.get('equipmentId')
    error_code = request.args.get('errorCode')
    metric_name = request.args.get('metricName')
    start = datetime_arg('startDate')
    end = datetime_arg('endDate', end_of_day=True)

    if equipment_id and (start or end):
        if not (start and end):
            raise ValidationError("startDate and endDate must be given together")
        return list_response(repo.find_by_date_range(equipment_id, start, end), limit, offset)
    if equipment_id and flag_arg('recent'):
        hours = int_arg('hours', DEFAULT_RECENT_HOURS)
        return list_response(repo.find_recent(equipment_id, hours), limit, offset)
    if equipment_id:
        return list_response(repo.find_by_equipment_id(equipment_id), limit, offset)
    if error_code:
        return list_response(repo.find_by_error_code(error_code), limit, offset)
    if metric_name:
        return list_response(repo.find_by_metric(metric_name), limit, offset)
    return list_response(repo.find_all(limit, offset), limit, offset, repo.count())


@bp.route('', methods=['POST'])
def create_machine_log():
    payload = json_payload()
    data = validate_machine_log(payload)
    logger.debug(f"Creating machine log entry: {sanitize_dict(payload)}")

    uow = get_uow()
    _require_equipment(uow, data)
    with uow.transaction():
        entry = uow.machine_logs.create(data)
    return success_response(entry.to_dict(), 201)


@bp.route('/<entry_id>', methods=['GET'])
def get_machine_log(entry_id):
    entry = get_uow().machine_logs.find_by_id(entry_id)
    if entry is None:
        raise NotFoundError('Machine log entry', entry_id)
    return success_response(entry.to_dict())


@bp.route('/<entry_id>', methods=['PUT'])
def update_machine_log(entry_id):
    payload = json_payload()
    data = validate_machine_log(payload, partial=True)
    logger.info(f"Updating machine log entry {entry_id}: {sanitize_dict(payload)}")

    uow = get_uow()
    _require_equipment(uow, data)
    with uow.transaction():
        entry = uow.machine_logs.update(entry_id, data)
        if entry is None:
            raise NotFoundError('Machine log entry', entry_id)
    return success_response(entry.to_dict())


@bp.route('/<entry_id>', methods=['DELETE'])
def delete_machine_log(entry_id):
    uow = get_uow()
    with uow.transaction():
        if not uow.machine_logs.delete(entry_id):
            raise NotFoundError('Machine log entry', entry_id)
    logger.info(f"Deleted machine log entry {entry_id}")
    return success_response({'id': entry_id})
