from machinatrack.data.inventory.stock_items import StockItemBase


class CuttingTool(StockItemBase):
    """End mills, drills, taps and other tooling kept in the crib"""
    __tablename__ = 'cutting_tools'

    def __repr__(self):
        return f'<CuttingTool {self.name} ({self.size}): {self.quantity}/{self.min_quantity}>'
