from machinatrack.data.core.record_base import RecordBase
from machinatrack import db
from sqlalchemy.orm import relationship

MAINTENANCE_STATUSES = ('pending', 'in_progress', 'completed', 'overdue', 'skipped')


class MaintenanceTask(RecordBase):
    """
    A recurring (frequency_days set) or one-time upkeep obligation for a piece of equipment.

    service_record_ids keeps completion order (oldest first); service record
    reads re-sort by date independently.
    """
    __tablename__ = 'maintenance_tasks'

    equipment_id = db.Column(db.String(36), db.ForeignKey('equipment.id', ondelete='CASCADE'), nullable=False, index=True)
    description = db.Column(db.String(500), nullable=False)
    frequency_days = db.Column(db.Integer, nullable=True)
    last_performed_date = db.Column(db.Date, nullable=True)
    next_due_date = db.Column(db.Date, nullable=True, index=True)
    assigned_to = db.Column(db.String(200), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='pending')
    service_record_ids = db.Column(db.JSON, nullable=False, default=list)

    # Relationships
    equipment = relationship('Equipment', back_populates='maintenance_tasks')
    parts = relationship(
        'MaintenancePart',
        back_populates='maintenance_task',
        cascade='all, delete-orphan',
        order_by='MaintenancePart.sequence_order',
        lazy='selectin',
    )
    service_records = relationship(
        'ServiceRecord',
        back_populates='maintenance_task',
        cascade='all, delete-orphan',
    )

    @property
    def is_recurring(self):
        # Zero or negative frequencies count as one-time tasks
        return bool(self.frequency_days and self.frequency_days > 0)

    @property
    def parts_used(self):
        return [part.to_part_dict() for part in self.parts]

    def replace_parts(self, parts_used):
        """Swap the parts list wholesale; orphaned rows are deleted by the cascade"""
        self.parts = [
            MaintenancePart(part_name=item['part_name'], quantity=item['quantity'], sequence_order=index)
            for index, item in enumerate(parts_used or [])
        ]

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        result['serviceRecordIds'] = list(self.service_record_ids or [])
        result['partsUsed'] = self.parts_used
        return result

    def __repr__(self):
        return f'<MaintenanceTask {self.id}: {self.description} - {self.status}>'


class MaintenancePart(RecordBase):
    """One partsUsed entry of a maintenance task"""
    __tablename__ = 'maintenance_parts'

    maintenance_task_id = db.Column(db.String(36), db.ForeignKey('maintenance_tasks.id', ondelete='CASCADE'), nullable=False, index=True)
    part_name = db.Column(db.String(200), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    sequence_order = db.Column(db.Integer, nullable=False, default=0)

    maintenance_task = relationship('MaintenanceTask', back_populates='parts')

    def to_part_dict(self):
        return {'partName': self.part_name, 'quantity': self.quantity}

    def __repr__(self):
        return f'<MaintenancePart {self.part_name} x{self.quantity}>'
