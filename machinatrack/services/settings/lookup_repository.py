"""
Lookup Repository
One repository class serves every settings list; each instance is bound to
one lookup model. Lists are ordered by name.
"""

from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from machinatrack.data.settings.lookups import LOOKUP_LISTS, LookupBase
from machinatrack.services.core.base_repository import BaseRepository


class LookupRepository(BaseRepository[LookupBase]):
    unique_field = 'name'

    def __init__(self, session: Session, model, resource_name: str):
        super().__init__(session)
        self.model = model
        self.resource_name = resource_name

    def default_order(self):
        return (self.model.name.asc(),)

    def find_by_name(self, name: str) -> Optional[LookupBase]:
        matches = self._all(select(self.model).where(self.model.name == name))
        return matches[0] if matches else None


def lookup_repositories(session: Session) -> Dict[str, LookupRepository]:
    """Repositories for every settings list, keyed by URL slug"""
    return {
        slug: LookupRepository(session, model, resource_name)
        for slug, (model, resource_name) in LOOKUP_LISTS.items()
    }
