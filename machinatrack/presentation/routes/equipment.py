"""
Equipment routes
"""

from flask import Blueprint, request

from machinatrack.buisness.core.errors import NotFoundError
from machinatrack.buisness.equipment.validation import validate_equipment
from machinatrack.logger import get_logger
from machinatrack.presentation.routes.responses import (
    get_uow,
    json_payload,
    list_response,
    pagination_args,
    success_response,
)
from machinatrack.utils.logging_sanitizer import sanitize_dict

logger = get_logger("machinatrack.routes.equipment")

bp = Blueprint('equipment', __name__)


@bp.route('', methods=['GET'])
def list_equipment():
    """List equipment, optionally filtered by status, location or a search term"""
    uow = get_uow()
    limit, offset = pagination_args()

    status = request.args.get('status')
    location = request.args.get('location')
    search = request.args.get('search', '').strip()

    if status:
        return list_response(uow.equipment.find_by_status(status), limit, offset)
    if location:
        return list_response(uow.equipment.find_by_location(location), limit, offset)
    if search:
        return list_response(uow.equipment.search(search), limit, offset)
    return list_response(uow.equipment.find_all(limit, offset), limit, offset, uow.equipment.count())


@bp.route('', methods=['POST'])
def create_equipment():
    payload = json_payload()
    data = validate_equipment(payload)
    logger.info(f"Creating equipment: {sanitize_dict(payload)}")

    uow = get_uow()
    with uow.transaction():
        equipment = uow.equipment.create(data)
    return success_response(equipment.to_dict(), 201)


@bp.route('/<equipment_id>', methods=['GET'])
def get_equipment(equipment_id):
    equipment = get_uow().equipment.find_by_id(equipment_id)
    if equipment is None:
        raise NotFoundError('Equipment', equipment_id)
    return success_response(equipment.to_dict())


@bp.route('/<equipment_id>', methods=['PUT'])
def update_equipment(equipment_id):
    payload = json_payload()
    data = validate_equipment(payload, partial=True)
    logger.info(f"Updating equipment {equipment_id}: {sanitize_dict(payload)}")

    uow = get_uow()
    with uow.transaction():
        equipment = uow.equipment.update(equipment_id, data)
        if equipment is None:
            raise NotFoundError('Equipment', equipment_id)
    return success_response(equipment.to_dict())


@bp.route('/<equipment_id>', methods=['DELETE'])
def delete_equipment(equipment_id):
    uow = get_uow()
    with uow.transaction():
        if not uow.equipment.delete(equipment_id):
            raise NotFoundError('Equipment', equipment_id)
    logger.info(f"Deleted equipment {equipment_id}")
    return success_response({'id': equipment_id})
