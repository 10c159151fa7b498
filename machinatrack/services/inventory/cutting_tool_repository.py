from machinatrack.data.inventory.cutting_tools import CuttingTool
from machinatrack.services.inventory.stock_item_repository import StockItemRepository


class CuttingToolRepository(StockItemRepository[CuttingTool]):
    model = CuttingTool
    resource_name = 'Cutting tool'
