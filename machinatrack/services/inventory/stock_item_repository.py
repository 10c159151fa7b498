"""
Stock Item Repository
Queries shared by every counted-stock table (consumables, cutting tools).
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import or_, select

from machinatrack.services.core.base_repository import BaseRepository, ModelT
from machinatrack.utils.dates import today_utc


class StockItemRepository(BaseRepository[ModelT]):

    def find_low_inventory(self) -> List[ModelT]:
        item = self.model
        stmt = (
            select(item)
            .where(item.quantity <= item.min_quantity)
            .order_by(item.quantity.asc(), item.name.asc())
        )
        return self._all(stmt)

    def find_by_location(self, location: str) -> List[ModelT]:
        stmt = select(self.model).where(self.model.location == location).order_by(self.model.name)
        return self._all(stmt)

    def find_by_type(self, item_type: str) -> List[ModelT]:
        stmt = select(self.model).where(self.model.type == item_type).order_by(self.model.name)
        return self._all(stmt)

    def find_end_of_life(self, as_of: Optional[date] = None) -> List[ModelT]:
        compare_date = as_of or today_utc()
        stmt = (
            select(self.model)
            .where(self.model.end_of_life_date <= compare_date)
            .order_by(self.model.end_of_life_date.asc())
        )
        return self._all(stmt)

    def search(self, query: str) -> List[ModelT]:
        item = self.model
        pattern = f'%{query}%'
        stmt = (
            select(item)
            .where(or_(
                item.name.ilike(pattern),
                item.type.ilike(pattern),
                item.material.ilike(pattern),
                item.size.ilike(pattern),
                item.location.ilike(pattern),
                item.supplier.ilike(pattern),
                item.notes.ilike(pattern),
            ))
            .order_by(item.name)
        )
        return self._all(stmt)

    def update_quantity(self, record_id: str, quantity: int) -> Optional[ModelT]:
        return self.update(record_id, {'quantity': quantity})
