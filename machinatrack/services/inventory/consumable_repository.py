from machinatrack.data.inventory.consumables import Consumable
from machinatrack.services.inventory.stock_item_repository import StockItemRepository


class ConsumableRepository(StockItemRepository[Consumable]):
    model = Consumable
    resource_name = 'Consumable'
