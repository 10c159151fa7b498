import math

from machinatrack.data.core.record_base import RecordBase
from machinatrack import db
from sqlalchemy.orm import relationship


class MachineLogEntry(RecordBase):
    """
    One reading or alarm reported by a machine.

    metric_value is stored as text so a controller can report either a number
    (spindle load, coolant temperature) or a state string ("ALARM", "E-STOP");
    numeric text is handed back as a number.
    """
    __tablename__ = 'machine_log_entries'

    equipment_id = db.Column(db.String(36), db.ForeignKey('equipment.id', ondelete='CASCADE'), nullable=False, index=True)
    timestamp = db.Column(db.DateTime, nullable=False, index=True)
    error_code = db.Column(db.String(100), nullable=True, index=True)
    metric_name = db.Column(db.String(200), nullable=False, index=True)
    metric_value = db.Column(db.String(200), nullable=False)
    notes = db.Column(db.Text, nullable=True)

    equipment = relationship('Equipment', back_populates='machine_logs')

    @property
    def metric_number(self):
        """metric_value as an int or float, or None when it is not numeric"""
        try:
            number = float(self.metric_value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() and '.' not in self.metric_value else number

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        number = self.metric_number
        if number is not None:
            result['metricValue'] = number
        return result

    def __repr__(self):
        return f'<MachineLogEntry {self.metric_name}={self.metric_value} @ {self.timestamp}>'
