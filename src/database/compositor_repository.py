# src/database/compositor_repository.py
# Read access to compositors (ItemAmbiente, MarcaMaterial) using SQLAlchemy ORM.

from typing import List, Optional, Type, Union
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from .base_repository import BaseRepository
from src.domain.catalog import ItemAmbiente, MarcaMaterial
from src.utils.logger import logger
from src.api.errors import DatabaseError

Compositor = Union[ItemAmbiente, MarcaMaterial]

class CompositorRepository(BaseRepository):
    """
    Shared queries for compositor tables. Subclasses set the mapped model and
    the name of the column that points at the compositor's family.
    """
    model: Type[Compositor]
    family_attr: str

    @property
    def family_column(self):
        return getattr(self.model, self.family_attr)

    def find_by_id(self, db: Session, compositor_id: int) -> Optional[Compositor]:
        """Finds a compositor by its ID."""
        name = self.model.__name__
        logger.debug(f"ORM: Finding {name} by ID {compositor_id}")
        try:
            compositor = db.get(self.model, compositor_id)
            if not compositor:
                logger.debug(f"ORM: {name} not found by ID {compositor_id}.")
            return compositor
        except SQLAlchemyError as e:
            logger.error(f"ORM: Database error finding {name} by ID {compositor_id}: {e}", exc_info=True)
            raise DatabaseError(f"Database error finding {name} by ID: {e}") from e

    def find_by_family(self, db: Session, family_id: int) -> List[Compositor]:
        """Finds every compositor belonging to a family (all items of an ambiente, all brands of a material)."""
        stmt = (
            select(self.model)
            .where(self.family_column == family_id)
            .order_by(self.model.id)
        )
        return self._scalars(db, stmt, self.model.__name__, f"by {self.family_attr}={family_id}")


class ItemAmbienteRepository(CompositorRepository):
    model = ItemAmbiente
    family_attr = 'ambiente_id'


class MarcaMaterialRepository(CompositorRepository):
    model = MarcaMaterial
    family_attr = 'material_id'
