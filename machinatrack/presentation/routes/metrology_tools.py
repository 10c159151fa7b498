"""
Metrology tool routes
"""

from flask import Blueprint, request

from machinatrack.buisness.core.errors import NotFoundError
from machinatrack.buisness.metrology.validation import validate_metrology_tool
from machinatrack.logger import get_logger
from machinatrack.presentation.routes.responses import (
    flag_arg,
    get_uow,
    json_payload,
    list_response,
    pagination_args,
    success_response,
)
from machinatrack.utils.logging_sanitizer import sanitize_dict

logger = get_logger("machinatrack.routes.metrology")

bp = Blueprint('metrology_tools', __name__)


@bp.route('', methods=['GET'])
def list_metrology_tools():
    """Filters: status, dueCalibration=true, overdueCalibration=true, search"""
    uow = get_uow()
    repo = uow.metrology_tools
    limit, offset = pagination_args()

    status = request.args.get('status')
    search = request.args.get('search', '').strip()

    if status:
        return list_response(repo.find_by_status(status), limit, offset)
    if flag_arg('dueCalibration'):
        return list_response(repo.find_due_for_calibration(), limit, offset)
    if flag_arg('overdueCalibration'):
        return list_response(repo.find_overdue_calibration(), limit, offset)
    if search:
        return list_response(repo.search(search), limit, offset)
    return list_response(repo.find_all(limit, offset), limit, offset, repo.count())


@bp.route('', methods=['POST'])
def create_metrology_tool():
    payload = json_payload()
    data = validate_metrology_tool(payload)
    logger.info(f"Creating metrology tool: {sanitize_dict(payload)}")

    uow = get_uow()
    with uow.transaction():
        tool = uow.metrology_tools.create(data)
    return success_response(tool.to_dict(), 201)


@bp.route('/<tool_id>', methods=['GET'])
def get_metrology_tool(tool_id):
    tool = get_uow().metrology_tools.find_by_id(tool_id)
    if tool is None:
        raise NotFoundError('Metrology tool', tool_id)
    return success_response(tool.to_dict())


@bp.route('/<tool_id>', methods=['PUT'])
def update_metrology_tool(tool_id):
    payload = json_payload()
    data = validate_metrology_tool(payload, partial=True)
    logger.info(f"Updating metrology tool {tool_id}: {sanitize_dict(payload)}")

    uow = get_uow()
    with uow.transaction():
        tool = uow.metrology_tools.update(tool_id, data)
        if tool is None:
            raise NotFoundError('Metrology tool', tool_id)
    return success_response(tool.to_dict())


@bp.route('/<tool_id>', methods=['DELETE'])
def delete_metrology_tool(tool_id):
    uow = get_uow()
    with uow.transaction():
        if not uow.metrology_tools.delete(tool_id):
            raise NotFoundError('Metrology tool', tool_id)
    logger.info(f"Deleted metrology tool {tool_id}")
    return success_response({'id': tool_id})
