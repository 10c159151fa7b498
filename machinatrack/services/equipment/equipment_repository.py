from typing import List, Optional

from sqlalchemy import or_, select

from machinatrack.data.equipment.equipment import Equipment
from machinatrack.services.core.base_repository import BaseRepository


class EquipmentRepository(BaseRepository[Equipment]):
    model = Equipment
    resource_name = 'Equipment'
    unique_field = 'serial number'

    def find_by_status(self, status: str) -> List[Equipment]:
        stmt = select(Equipment).where(Equipment.status == status).order_by(Equipment.name)
        return self._all(stmt)

    def find_by_location(self, location: str) -> List[Equipment]:
        stmt = select(Equipment).where(Equipment.location == location).order_by(Equipment.name)
        return self._all(stmt)

    def find_by_serial_number(self, serial_number: str) -> Optional[Equipment]:
        stmt = select(Equipment).where(Equipment.serial_number == serial_number)
        matches = self._all(stmt)
        return matches[0] if matches else None

    def search(self, query: str) -> List[Equipment]:
        pattern = f'%{query}%'
        stmt = (
            select(Equipment)
            .where(or_(
                Equipment.name.ilike(pattern),
                Equipment.model.ilike(pattern),
                Equipment.serial_number.ilike(pattern),
                Equipment.location.ilike(pattern),
                Equipment.notes.ilike(pattern),
            ))
            .order_by(Equipment.name)
        )
        return self._all(stmt)
