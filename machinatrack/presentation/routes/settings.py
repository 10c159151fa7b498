"""
Settings routes
CRUD over the named pick lists, one URL per list:
    /api/settings/locations, /api/settings/manufacturers, ...
"""

from flask import Blueprint

from machinatrack.buisness.core.errors import NotFoundError
from machinatrack.buisness.settings.validation import validate_lookup_name
from machinatrack.logger import get_logger
from machinatrack.presentation.routes.responses import (
    get_uow,
    json_payload,
    list_response,
    pagination_args,
    success_response,
)

logger = get_logger("machinatrack.routes.settings")

bp = Blueprint('settings', __name__)


def _repository(uow, list_name):
    repo = uow.settings.get(list_name)
    if repo is None:
        raise NotFoundError('Settings list', list_name)
    return repo


@bp.route('', methods=['GET'])
def list_settings_lists():
    return success_response(sorted(get_uow().settings))


@bp.route('/<list_name>', methods=['GET'])
def list_entries(list_name):
    repo = _repository(get_uow(), list_name)
    limit, offset = pagination_args()
    return list_response(repo.find_all(limit, offset), limit, offset, repo.count())


@bp.route('/<list_name>', methods=['POST'])
def create_entry(list_name):
    uow = get_uow()
    repo = _repository(uow, list_name)
    name = validate_lookup_name(json_payload())

    with uow.transaction():
        entry = repo.create({'name': name})
    logger.info(f"Added {repo.resource_name} '{name}'")
    return success_response(entry.to_dict(), 201)


@bp.route('/<list_name>/<entry_id>', methods=['GET'])
def get_entry(list_name, entry_id):
    repo = _repository(get_uow(), list_name)
    entry = repo.find_by_id(entry_id)
    if entry is None:
        raise NotFoundError(repo.resource_name, entry_id)
    return success_response(entry.to_dict())


@bp.route('/<list_name>/<entry_id>', methods=['PUT'])
def update_entry(list_name, entry_id):
    uow = get_uow()
    repo = _repository(uow, list_name)
    name = validate_lookup_name(json_payload())

    with uow.transaction():
        entry = repo.update(entry_id, {'name': name})
        if entry is None:
            raise NotFoundError(repo.resource_name, entry_id)
    logger.info(f"Renamed {repo.resource_name} {entry_id} to '{name}'")
    return success_response(entry.to_dict())


@bp.route('/<list_name>/<entry_id>', methods=['DELETE'])
def delete_entry(list_name, entry_id):
    uow = get_uow()
    repo = _repository(uow, list_name)
    with uow.transaction():
        if not repo.delete(entry_id):
            raise NotFoundError(repo.resource_name, entry_id)
    logger.info(f"Deleted {repo.resource_name} {entry_id}")
    return success_response({'id': entry_id})
