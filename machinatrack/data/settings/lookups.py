"""
Settings lookup lists: the named values offered in pick lists across the app
(locations, manufacturers, tool and consumable types and materials).
"""

from machinatrack.data.core.record_base import RecordBase
from machinatrack import db


class LookupBase(RecordBase):
    """A uniquely named entry in one settings list"""

    __abstract__ = True

    name = db.Column(db.String(100), unique=True, nullable=False)

    def __repr__(self):
        return f'<{type(self).__name__} {self.name}>'


class Location(LookupBase):
    __tablename__ = 'locations'


class Manufacturer(LookupBase):
    __tablename__ = 'manufacturers'


class MetrologyToolType(LookupBase):
    __tablename__ = 'metrology_tool_types'


class ConsumableType(LookupBase):
    __tablename__ = 'consumable_types'


class ConsumableMaterial(LookupBase):
    __tablename__ = 'consumable_materials'


class CuttingToolType(LookupBase):
    __tablename__ = 'cutting_tool_types'


class CuttingToolMaterial(LookupBase):
    __tablename__ = 'cutting_tool_materials'


# URL slug -> (model, display name)
LOOKUP_LISTS = {
    'locations': (Location, 'Location'),
    'manufacturers': (Manufacturer, 'Manufacturer'),
    'metrology-tool-types': (MetrologyToolType, 'Metrology tool type'),
    'consumable-types': (ConsumableType, 'Consumable type'),
    'consumable-materials': (ConsumableMaterial, 'Consumable material'),
    'cutting-tool-types': (CuttingToolType, 'Cutting tool type'),
    'cutting-tool-materials': (CuttingToolMaterial, 'Cutting tool material'),
}
