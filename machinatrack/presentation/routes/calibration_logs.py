"""
Calibration log routes
POST runs the calibration workflow; logs are never edited afterwards.
"""

from flask import Blueprint, request

from machinatrack.buisness.core.errors import NotFoundError, ValidationError
from machinatrack.buisness.core.validation import PayloadValidator
from machinatrack.buisness.metrology.calibration_context import CalibrationDetails, MetrologyToolContext
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

logger = get_logger("machinatrack.routes.calibration")

bp = Blueprint('calibration_logs', __name__)


@bp.route('', methods=['GET'])
def list_calibration_logs():
    """Filters: toolId, performedBy, result, startDate+endDate"""
    uow = get_uow()
    repo = uow.calibration_logs
    limit, offset = pagination_args()

    tool_id = request.args.get('toolId')
    performed_by = request.args.get('performedBy')
    result = request.args.get('result')
    start_date = date_arg('startDate')
    end_date = date_arg('endDate')

    if tool_id:
        return list_response(repo.find_by_tool_id(tool_id), limit, offset)
    if performed_by:
        return list_response(repo.find_by_performer(performed_by), limit, offset)
    if result:
        return list_response(repo.find_by_result(result), limit, offset)
    if start_date or end_date:
        if not (start_date and end_date):
            raise ValidationError("startDate and endDate must be given together")
        return list_response(repo.find_by_date_range(start_date, end_date), limit, offset)
    return list_response(repo.find_all(limit, offset), limit, offset, repo.count())


@bp.route('', methods=['POST'])
def create_calibration_log():
    """Record a calibration: {metrologyToolId, date?, performedBy, result, notes?, certificateUrl?}"""
    payload = json_payload()
    validator = PayloadValidator(payload)
    validator.string('metrologyToolId', required=True)
    CalibrationDetails.check_fields(validator)
    cleaned = validator.result("Invalid calibration data")
    details = CalibrationDetails.from_cleaned(cleaned)
    tool_id = cleaned['metrology_tool_id']
    logger.info(f"Recording calibration: {sanitize_dict(payload)}")

    result = MetrologyToolContext(get_uow(), tool_id).record_calibration(details)
    return success_response(result.to_dict(), 201)


@bp.route('/<log_id>', methods=['GET'])
def get_calibration_log(log_id):
    log = get_uow().calibration_logs.find_by_id(log_id)
    if log is None:
        raise NotFoundError('Calibration log', log_id)
    return success_response(log.to_dict())


@bp.route('/<log_id>', methods=['DELETE'])
def delete_calibration_log(log_id):
    uow = get_uow()
    with uow.transaction():
        if not uow.calibration_logs.delete(log_id):
            raise NotFoundError('Calibration log', log_id)
    logger.info(f"Deleted calibration log {log_id}")
    return success_response({'id': log_id})
