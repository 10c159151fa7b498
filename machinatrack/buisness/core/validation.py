"""
Payload validation shared by every write endpoint.

A PayloadValidator walks a camelCase JSON payload field by field, collects
one error entry per bad field and produces a snake_case dict ready for the
repositories. `partial=True` is used for updates: missing fields are simply
left out instead of reported as required.
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from machinatrack.buisness.core.errors import ValidationError
from machinatrack.utils.dates import parse_iso_date, parse_iso_datetime

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def to_snake(name: str) -> str:
    """serialNumber -> serial_number"""
    return _CAMEL_BOUNDARY.sub('_', name).lower()


class PayloadValidator:

    def __init__(self, payload: Any, partial: bool = False):
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        self.payload = payload
        self.partial = partial
        self.errors: List[Dict[str, str]] = []
        self.cleaned: Dict[str, Any] = {}

    def error(self, field: str, message: str):
        self.errors.append({'field': field, 'message': message})

    def _take(self, field: str, required: bool, nullable: bool = True):
        """
        Returns (present, value). Reports a missing required field unless
        this is a partial update. An explicit null is only accepted for
        optional nullable fields.
        """
        if field not in self.payload:
            if required and not self.partial:
                self.error(field, f"{field} is required")
            return False, None
        value = self.payload[field]
        if value is None and required:
            self.error(field, f"{field} is required")
            return False, None
        if value is None and not nullable:
            self.error(field, f"{field} must not be null")
            return False, None
        return True, value

    def _store(self, field: str, value: Any, column: Optional[str]):
        self.cleaned[column or to_snake(field)] = value

    def string(self, field: str, required: bool = False, max_length: Optional[int] = None,
               column: Optional[str] = None, nullable: bool = True):
        present, value = self._take(field, required, nullable)
        if not present:
            return
        if value is not None:
            if not isinstance(value, str):
                self.error(field, f"{field} must be a string")
                return
            if required and not value.strip():
                self.error(field, f"{field} must not be empty")
                return
            if max_length is not None and len(value) > max_length:
                self.error(field, f"{field} must be at most {max_length} characters")
                return
        self._store(field, value, column)

    def integer(self, field: str, required: bool = False, minimum: Optional[int] = None,
                column: Optional[str] = None, nullable: bool = True):
        present, value = self._take(field, required, nullable)
        if not present:
            return
        if value is not None:
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            if isinstance(value, bool) or not isinstance(value, int):
                self.error(field, f"{field} must be an integer")
                return
            if minimum is not None and value < minimum:
                self.error(field, f"{field} must be at least {minimum}")
                return
        self._store(field, value, column)

    def number(self, field: str, required: bool = False, minimum: Optional[float] = None,
               column: Optional[str] = None, nullable: bool = True):
        present, value = self._take(field, required, nullable)
        if not present:
            return
        if value is not None:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                self.error(field, f"{field} must be a number")
                return
            if minimum is not None and value < minimum:
                self.error(field, f"{field} must be at least {minimum}")
                return
        self._store(field, value, column)

    def date(self, field: str, required: bool = False, column: Optional[str] = None,
             nullable: bool = True):
        present, value = self._take(field, required, nullable)
        if not present:
            return
        if value is not None:
            try:
                value = parse_iso_date(value)
            except ValueError:
                self.error(field, f"{field} must be an ISO date (YYYY-MM-DD)")
                return
            if value is None and required:
                self.error(field, f"{field} is required")
                return
        self._store(field, value, column)

    def datetime(self, field: str, required: bool = False, column: Optional[str] = None,
                 nullable: bool = True):
        present, value = self._take(field, required, nullable)
        if not present:
            return
        if value is not None:
            try:
                value = parse_iso_datetime(value)
            except ValueError:
                self.error(field, f"{field} must be an ISO timestamp")
                return
            if value is None and required:
                self.error(field, f"{field} is required")
                return
        self._store(field, value, column)

    def choice(self, field: str, choices: Iterable[str], required: bool = False,
               column: Optional[str] = None, nullable: bool = False):
        present, value = self._take(field, required, nullable)
        if not present:
            return
        if value is not None and value not in choices:
            self.error(field, f"{field} must be one of: {', '.join(choices)}")
            return
        self._store(field, value, column)

    def string_list(self, field: str, column: Optional[str] = None):
        present, value = self._take(field, False)
        if not present:
            return
        if value is not None:
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                self.error(field, f"{field} must be a list of strings")
                return
        self._store(field, value, column)

    def result(self, message: str = "Invalid request data") -> Dict[str, Any]:
        if self.errors:
            raise ValidationError(message, self.errors)
        return self.cleaned
