"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods used by repositories and the debug data loader

Column names are snake_case in storage and camelCase on the wire; to_dict
emits the wire shape so routes can hand it straight to jsonify.
"""

from datetime import date, datetime
from sqlalchemy import inspect
from machinatrack.logger import get_logger

logger = get_logger("machinatrack.buisness.core.data_insertion")

AUDIT_FIELDS = ('created_at', 'updated_at')


def to_camel(name):
    """
    Convert a snake_case column name to its camelCase API name.

    >>> to_camel('next_due_date')
    'nextDueDate'
    """
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - apply_dict(): Update an existing instance from dictionary
    - to_dict(): Convert model instance to its API dictionary
    - column_keys(): Names of mapped columns
    """

    # Columns left out of to_dict (storage-only bookkeeping)
    _private_columns = ()

    @classmethod
    def column_keys(cls):
        return {c.key for c in inspect(cls).columns}

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): snake_case column values
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not added to any session)
        """
        if skip_fields is None:
            skip_fields = []

        columns = cls.column_keys()

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            if key in AUDIT_FIELDS and value is None:
                continue
            filtered_data[key] = value

        return cls(**filtered_data)

    def apply_dict(self, data_dict, skip_fields=None):
        """
        Copy known column values from a dictionary onto this instance.

        `id` and the audit timestamps are never overwritten.
        """
        skip = set(skip_fields or ()) | {'id', *AUDIT_FIELDS}
        columns = self.column_keys()
        for key, value in data_dict.items():
            if key in columns and key not in skip:
                setattr(self, key, value)
        return self

    def to_dict(self, include_audit_fields=True):
        """
        Convert model instance to its API dictionary (camelCase keys, ISO dates)

        Args:
            include_audit_fields (bool): Whether to include createdAt/updatedAt

        Returns:
            dict: Dictionary representation of the model
        """
        result = {}

        mapper = inspect(self.__class__)

        for column in mapper.columns:
            if column.key in self._private_columns:
                continue
            if not include_audit_fields and column.key in AUDIT_FIELDS:
                continue

            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            result[to_camel(column.key)] = value

        return result
