from machinatrack.buisness.core.errors import ImmutableRecordError
from machinatrack.data.core.record_base import RecordBase
from machinatrack import db
from sqlalchemy import event
from sqlalchemy.orm import relationship

CALIBRATION_RESULTS = ('pass', 'fail', 'adjusted')


class CalibrationLog(RecordBase):
    """Immutable record of one calibration event for a metrology tool"""
    __tablename__ = 'calibration_logs'

    metrology_tool_id = db.Column(db.String(36), db.ForeignKey('metrology_tools.id', ondelete='CASCADE'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    performed_by = db.Column(db.String(200), nullable=False)
    result = db.Column(db.String(20), nullable=False)
    notes = db.Column(db.Text, nullable=True)
    certificate_url = db.Column(db.String(500), nullable=True)
    next_due_date = db.Column(db.Date, nullable=True)

    metrology_tool = relationship('MetrologyTool', back_populates='calibration_logs')

    @property
    def passed(self):
        return self.result in ('pass', 'adjusted')

    def __repr__(self):
        return f'<CalibrationLog {self.id}: tool {self.metrology_tool_id} {self.result} on {self.date}>'


@event.listens_for(CalibrationLog, 'before_update')
def _reject_calibration_log_update(mapper, connection, target):
    raise ImmutableRecordError('Calibration log', target.id)
