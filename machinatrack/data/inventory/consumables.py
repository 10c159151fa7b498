from machinatrack.data.inventory.stock_items import StockItemBase


class Consumable(StockItemBase):
    """Stocked consumable (inserts, coolant, filters...) with a reorder threshold"""
    __tablename__ = 'consumables'

    def __repr__(self):
        return f'<Consumable {self.name}: {self.quantity}/{self.min_quantity}>'
