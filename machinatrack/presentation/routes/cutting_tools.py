"""
Cutting tool inventory routes
Same filters and quantity endpoint as consumables
"""

from flask import Blueprint, request

from machinatrack.buisness.core.errors import NotFoundError
from machinatrack.buisness.inventory.validation import validate_cutting_tool, validate_quantity
from machinatrack.logger import get_logger
from machinatrack.presentation.routes.responses import (
    date_arg,
    flag_arg,
    get_uow,
    json_payload,
    list_response,
    pagination_args,
    success_response,
)
from machinatrack.utils.logging_sanitizer import sanitize_dict

logger = get_logger("machinatrack.routes.cutting_tools")

bp = Blueprint('cutting_tools', __name__)


@bp.route('', methods=['GET'])
def list_cutting_tools():
    """Filters: lowInventory=true, endOfLife=true (asOf=<date>), location, type, search"""
    uow = get_uow()
    repo = uow.cutting_tools
    limit, offset = pagination_args()

    location = request.args.get('location')
    tool_type = request.args.get('type')
    search = request.args.get('search', '').strip()

    if flag_arg('lowInventory'):
        return list_response(repo.find_low_inventory(), limit, offset)
    if flag_arg('endOfLife'):
        return list_response(repo.find_end_of_life(date_arg('asOf')), limit, offset)
    if location:
        return list_response(repo.find_by_location(location), limit, offset)
    if tool_type:
        return list_response(repo.find_by_type(tool_type), limit, offset)
    if search:
        return list_response(repo.search(search), limit, offset)
    return list_response(repo.find_all(limit, offset), limit, offset, repo.count())


@bp.route('', methods=['POST'])
def create_cutting_tool():
    payload = json_payload()
    data = validate_cutting_tool(payload)
    logger.info(f"Creating cutting tool: {sanitize_dict(payload)}")

    uow = get_uow()
    with uow.transaction():
        tool = uow.cutting_tools.create(data)
    return success_response(tool.to_dict(), 201)


@bp.route('/<tool_id>', methods=['GET'])
def get_cutting_tool(tool_id):
    tool = get_uow().cutting_tools.find_by_id(tool_id)
    if tool is None:
        raise NotFoundError('Cutting tool', tool_id)
    return success_response(tool.to_dict())


@bp.route('/<tool_id>', methods=['PUT'])
def update_cutting_tool(tool_id):
    payload = json_payload()
    data = validate_cutting_tool(payload, partial=True)
    logger.info(f"Updating cutting tool {tool_id}: {sanitize_dict(payload)}")

    uow = get_uow()
    with uow.transaction():
        tool = uow.cutting_tools.update(tool_id, data)
        if tool is None:
            raise NotFoundError('Cutting tool', tool_id)
    return success_response(tool.to_dict())


@bp.route('/<tool_id>/quantity', methods=['PATCH'])
def update_cutting_tool_quantity(tool_id):
    quantity = validate_quantity(json_payload())

    uow = get_uow()
    with uow.transaction():
        tool = uow.cutting_tools.update_quantity(tool_id, quantity)
        if tool is None:
            raise NotFoundError('Cutting tool', tool_id)
    logger.info(f"Cutting tool {tool_id} quantity set to {quantity}")
    return success_response(tool.to_dict())


@bp.route('/<tool_id>', methods=['DELETE'])
def delete_cutting_tool(tool_id):
    uow = get_uow()
    with uow.transaction():
        if not uow.cutting_tools.delete(tool_id):
            raise NotFoundError('Cutting tool', tool_id)
    logger.info(f"Deleted cutting tool {tool_id}")
    return success_response({'id': tool_id})
