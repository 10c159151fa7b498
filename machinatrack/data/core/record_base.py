import uuid
from machinatrack import db
from machinatrack.buisness.core.data_insertion_mixin import DataInsertionMixin
from machinatrack.utils.dates import utcnow


def new_id():
    return str(uuid.uuid4())


class RecordBase(db.Model, DataInsertionMixin):
    """Abstract base class for all shop records: opaque string id plus timestamps"""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)
