from machinatrack.data.core.record_base import RecordBase
from machinatrack import db

EQUIPMENT_STATUSES = ('operational', 'maintenance', 'decommissioned')


class Equipment(RecordBase):
    __tablename__ = 'equipment'

    name = db.Column(db.String(200), nullable=False)
    model = db.Column(db.String(200), nullable=False)
    serial_number = db.Column(db.String(100), unique=True, nullable=False)
    location = db.Column(db.String(200), nullable=False)
    purchase_date = db.Column(db.Date, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='operational')
    image_url = db.Column(db.String(500), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    # Relationships
    maintenance_tasks = db.relationship(
        'MaintenanceTask',
        back_populates='equipment',
        cascade='all, delete-orphan',
        order_by='MaintenanceTask.created_at',
    )
    machine_logs = db.relationship(
        'MachineLogEntry',
        back_populates='equipment',
        cascade='all, delete-orphan',
        order_by='MachineLogEntry.timestamp.desc()',
    )

    @property
    def maintenance_schedule_ids(self):
        return [task.id for task in self.maintenance_tasks]

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        result['maintenanceScheduleIds'] = self.maintenance_schedule_ids
        return result

    def __repr__(self):
        return f'<Equipment {self.name} ({self.serial_number})>'
