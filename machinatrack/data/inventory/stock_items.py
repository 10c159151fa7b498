from machinatrack.data.core.record_base import RecordBase
from machinatrack import db


class StockItemBase(RecordBase):
    """
    Abstract base for counted shop stock (consumables, cutting tools).

    An item is low on inventory once quantity falls to min_quantity or below.
    """

    __abstract__ = True

    name = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(100), nullable=False)
    material = db.Column(db.String(100), nullable=True)
    size = db.Column(db.String(100), nullable=True)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    min_quantity = db.Column(db.Integer, nullable=False, default=0)
    location = db.Column(db.String(200), nullable=False)
    tool_life_hours = db.Column(db.Float, nullable=True)
    remaining_tool_life_hours = db.Column(db.Float, nullable=True)
    last_used_date = db.Column(db.Date, nullable=True)
    end_of_life_date = db.Column(db.Date, nullable=True)
    supplier = db.Column(db.String(200), nullable=True)
    cost_per_unit = db.Column(db.Float, nullable=True)
    image_url = db.Column(db.String(500), nullable=True)
    notes = db.Column(db.Text, nullable=True)

    @property
    def is_low_inventory(self):
        return self.quantity <= self.min_quantity

    def to_dict(self, include_audit_fields=True):
        result = super().to_dict(include_audit_fields)
        result['lowInventory'] = self.is_low_inventory
        return result
