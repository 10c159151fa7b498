from machinatrack.data.core.record_base import RecordBase
from machinatrack import db
from sqlalchemy.orm import relationship

METROLOGY_STATUSES = (
    'calibrated',
    'due_calibration',
    'out_of_service',
    'awaiting_calibration',
    'out_of_calibration',
)


class MetrologyTool(RecordBase):
    __tablename__ = 'metrology_tools'

    name = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(100), nullable=False)
    serial_number = db.Column(db.String(100), unique=True, nullable=False)
    manufacturer = db.Column(db.String(200), nullable=True)
    calibration_interval_days = db.Column(db.Integer, nullable=False)
    last_calibration_date = db.Column(db.Date, nullable=True)
    next_calibration_date = db.Column(db.Date, nullable=True, index=True)
    location = db.Column(db.String(200), nullable=True)
    status = db.Column(db.String(30), nullable=False, default='awaiting_calibration')
    image_url = db.Column(db.String(500), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    calibration_logs = relationship(
        'CalibrationLog',
        back_populates='metrology_tool',
        cascade='all, delete-orphan',
        order_by='CalibrationLog.date.desc()',
    )

    @property
    def calibration_log_ids(self):
        return [log.id for log in self.calibration_logs]

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        result['calibrationLogIds'] = self.calibration_log_ids
        return result

    def __repr__(self):
        return f'<MetrologyTool {self.name} ({self.serial_number}) - {self.status}>'
