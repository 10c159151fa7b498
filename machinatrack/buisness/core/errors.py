"""
Error taxonomy shared by repositories, business contexts and routes.

Routes translate these into the JSON envelope:
    ValidationError -> 400, NotFoundError -> 404, DuplicateError -> 409,
    ImmutableRecordError -> 409, DatabaseError -> 500
"""

from typing import Any, List, Optional


class DatabaseError(Exception):
    """Persistence failure, or the base of every domain error below"""

    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class NotFoundError(DatabaseError):
    status_code = 404

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(f"{resource} with id {resource_id} not found", code='not_found')
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(DatabaseError):
    """Payload failed validation. `details` lists one entry per bad field."""

    status_code = 400

    def __init__(self, message: str, details: Optional[List[dict]] = None):
        super().__init__(message, code='validation')
        self.details = details or []


class DuplicateError(DatabaseError):
    status_code = 409

    def __init__(self, resource: str, field: str):
        super().__init__(f"{resource} with this {field} already exists", code='duplicate')
        self.resource = resource
        self.field = field


class ImmutableRecordError(DatabaseError):
    """An append-only record (service record, calibration log) was asked to change"""

    status_code = 409

    def __init__(self, resource: str, resource_id: Any = None):
        target = f"{resource} {resource_id}" if resource_id is not None else resource
        super().__init__(f"{target} is immutable once created", code='immutable')
        self.resource = resource
        self.resource_id = resource_id
