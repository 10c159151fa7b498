"""
JSON envelope helpers shared by every API blueprint.

Every response body has the shape
    {success, data?, error?, details?, pagination?}
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

from flask import jsonify, request

from machinatrack import db
from machinatrack.buisness.core.errors import ValidationError
from machinatrack.services.core.unit_of_work import UnitOfWork
from machinatrack.utils.dates import parse_iso_date, parse_iso_datetime

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


def success_response(data: Any = None, status: int = 200, pagination: Optional[Dict[str, Any]] = None):
    body = {'success': True, 'data': data}
    if pagination is not None:
        body['pagination'] = pagination
    return jsonify(body), status


def error_response(message: str, status: int, details: Optional[List[dict]] = None):
    body = {'success': False, 'error': message}
    if details:
        body['details'] = details
    return jsonify(body), status


def get_uow() -> UnitOfWork:
    """Unit of work bound to the request's scoped session"""
    return UnitOfWork(db.session)


def json_payload() -> Any:
    """Request body as parsed JSON, or None when the body is not JSON"""
    return request.get_json(silent=True)


def _int_arg(name: str, default: int, minimum: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"Invalid query parameter {name}",
                              [{'field': name, 'message': f"{name} must be an integer"}])
    if value < minimum:
        raise ValidationError(f"Invalid query parameter {name}",
                              [{'field': name, 'message': f"{name} must be at least {minimum}"}])
    return value


def pagination_args() -> Tuple[int, int]:
    """(limit, offset) from the query string; limit is capped at MAX_LIMIT"""
    limit = min(_int_arg('limit', DEFAULT_LIMIT, 1), MAX_LIMIT)
    offset = _int_arg('offset', 0, 0)
    return limit, offset


def int_arg(name: str, default: int) -> int:
    return _int_arg(name, default, 0)


def flag_arg(name: str) -> bool:
    return request.args.get(name, '').lower() in ('true', '1', 'yes')


def date_arg(name: str):
    raw = request.args.get(name)
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"Invalid query parameter {name}",
                              [{'field': name, 'message': f"{name} must be an ISO date (YYYY-MM-DD)"}])


def datetime_arg(name: str, end_of_day: bool = False):
    """
    ISO timestamp from the query string. With end_of_day, a bare date such as
    2025-06-30 means the last instant of that day.
    """
    raw = request.args.get(name)
    try:
        value = parse_iso_datetime(raw)
    except ValueError:
        raise ValidationError(f"Invalid query parameter {name}",
                              [{'field': name, 'message': f"{name} must be an ISO timestamp"}])
    if value is not None and end_of_day and 'T' not in raw:
        value += timedelta(days=1, microseconds=-1)
    return value


def pagination_meta(limit: int, offset: int, total: int) -> Dict[str, Any]:
    return {
        'limit': limit,
        'offset': offset,
        'total': total,
        'hasMore': offset + limit < total,
    }


def list_response(items: List[Any], limit: int, offset: int, total: Optional[int] = None):
    """
    Serialize a list of records.

    When `total` is None the items are a complete filtered result and the
    requested page is sliced out here.
    """
    if total is None:
        total = len(items)
        items = items[offset:offset + limit]
    return success_response(
        [item.to_dict() for item in items],
        pagination=pagination_meta(limit, offset, total),
    )
