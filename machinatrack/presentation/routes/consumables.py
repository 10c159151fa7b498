"""
Consumable inventory routes
"""

from flask import Blueprint, request

from machinatrack.buisness.core.errors import NotFoundError
from machinatrack.buisness.inventory.validation import validate_consumable, validate_quantity
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

logger = get_logger("machinatrack.routes.inventory")

bp = Blueprint('consumables', __name__)


@bp.route('', methods=['GET'])
def list_consumables():
    """Filters: lowInventory=true, location, type, search"""
    uow = get_uow()
    repo = uow.consumables
    limit, offset = pagination_args()

    location = request.args.get('location')
    consumable_type = request.args.get('type')
    search = request.args.get('search', '').strip()

    if flag_arg('lowInventory'):
        return list_response(repo.find_low_inventory(), limit, offset)
    if location:
        return list_response(repo.find_by_location(location), limit, offset)
    if consumable_type:
        return list_response(repo.find_by_type(consumable_type), limit, offset)
    if search:
        return list_response(repo.search(search), limit, offset)
    return list_response(repo.find_all(limit, offset), limit, offset, repo.count())


@bp.route('', methods=['POST'])
def create_consumable():
    payload = json_payload()
    data = validate_consumable(payload)
    logger.info(f"Creating consumable: {sanitize_dict(payload)}")

    uow = get_uow()
    with uow.transaction():
        consumable = uow.consumables.create(data)
    return success_response(consumable.to_dict(), 201)


@bp.route('/<consumable_id>', methods=['GET'])
def get_consumable(consumable_id):
    consumable = get_uow().consumables.find_by_id(consumable_id)
    if consumable is None:
        raise NotFoundError('Consumable', consumable_id)
    return success_response(consumable.to_dict())


@bp.route('/<consumable_id>', methods=['PUT'])
def update_consumable(consumable_id):
    payload = json_payload()
    data = validate_consumable(payload, partial=True)
    logger.info(f"Updating consumable {consumable_id}: {sanitize_dict(payload)}")

    uow = get_uow()
    with uow.transaction():
        consumable = uow.consumables.update(consumable_id, data)
        if consumable is None:
            raise NotFoundError('Consumable', consumable_id)
    return success_response(consumable.to_dict())


@bp.route('/<consumable_id>/quantity', methods=['PATCH'])
def update_consumable_quantity(consumable_id):
    quantity = validate_quantity(json_payload())

    uow = get_uow()
    with uow.transaction():
        consumable = uow.consumables.update_quantity(consumable_id, quantity)
        if consumable is None:
            raise NotFoundError('Consumable', consumable_id)
    logger.info(f"Consumable {consumable_id} quantity set to {quantity}")
    return success_response(consumable.to_dict())


@bp.route('/<consumable_id>', methods=['DELETE'])
def delete_consumable(consumable_id):
    uow = get_uow()
    with uow.transaction():
        if not uow.consumables.delete(consumable_id):
            raise NotFoundError('Consumable', consumable_id)
    logger.info(f"Deleted consumable {consumable_id}")
    return success_response({'id': consumable_id})
