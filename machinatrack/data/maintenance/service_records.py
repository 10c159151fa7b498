from machinatrack.buisness.core.errors import ImmutableRecordError
from machinatrack.data.core.record_base import RecordBase
from machinatrack import db
from sqlalchemy import event
from sqlalchemy.orm import relationship


class ServiceRecord(RecordBase):
    """
    Append-only log of one completed maintenance event.
    Rows are inserted and deleted, never updated.
    """
    __tablename__ = 'service_records'

    maintenance_task_id = db.Column(db.String(36), db.ForeignKey('maintenance_tasks.id', ondelete='CASCADE'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    performed_by = db.Column(db.String(200), nullable=False)
    description_of_work = db.Column(db.Text, nullable=False)
    cost = db.Column(db.Float, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    attachments = db.Column(db.JSON, nullable=True)

    # Set when the record was created by a completion request carrying an Idempotency-Key
    idempotency_key = db.Column(db.String(200), unique=True, nullable=True)

    maintenance_task = relationship('MaintenanceTask', back_populates='service_records')

    def __repr__(self):
        return f'<ServiceRecord {self.id}: task {self.maintenance_task_id} on {self.date}>'


@event.listens_for(ServiceRecord, 'before_update')
def _reject_service_record_update(mapper, connection, target):
    raise ImmutableRecordError('Service record', target.id)
