# src/database/composicao_repository.py
# Handles database operations for compositions (Padrão <-> compositor) using SQLAlchemy ORM.

from typing import List, Type, Union
from sqlalchemy import select, delete
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from .base_repository import BaseRepository
from src.domain.catalog import ItemAmbiente, MarcaMaterial
from src.domain.composicao import ComposicaoAmbiente, ComposicaoMaterial
from src.utils.logger import logger
from src.api.errors import DatabaseError

Composicao = Union[ComposicaoAmbiente, ComposicaoMaterial]

class ComposicaoRepository(BaseRepository):
    """
    Shared queries for the two composition tables.

    Subclasses set the composition model, the compositor model it points at,
    and the compositor columns holding the family and member ids. Methods
    expect the caller's Session and never commit.
    """
    model: Type[Composicao]
    compositor_model: Type[Union[ItemAmbiente, MarcaMaterial]]
    family_attr: str
    member_attr: str

    @property
    def family_column(self):
        return getattr(self.compositor_model, self.family_attr)

    @property
    def member_column(self):
        return getattr(self.compositor_model, self.member_attr)

    def _select_joined(self):
        return select(self.model).join(self.model.compositor).order_by(self.model.id)

    def _fetch(self, db: Session, stmt, description: str) -> List[Composicao]:
        return self._scalars(db, stmt, self.model.__name__, description)

    # --- Queries ---

    def find_by_padrao(self, db: Session, padrao_id: int) -> List[Composicao]:
        stmt = select(self.model).where(self.model.padrao_id == padrao_id).order_by(self.model.id)
        return self._fetch(db, stmt, f"for padrao {padrao_id}")

    def find_by_family(self, db: Session, family_id: int) -> List[Composicao]:
        """Compositions whose compositor belongs to the given family, across all Padrões."""
        stmt = self._select_joined().where(self.family_column == family_id)
        return self._fetch(db, stmt, f"by {self.family_attr}={family_id}")

    def find_filtered_by_family(self, db: Session, padrao_id: int, family_id: int) -> List[Composicao]:
        stmt = (
            self._select_joined()
            .where(self.model.padrao_id == padrao_id)
            .where(self.family_column == family_id)
        )
        return self._fetch(db, stmt, f"for padrao {padrao_id} and {self.family_attr}={family_id}")

    def find_filtered_by_member(self, db: Session, padrao_id: int, member_id: int) -> List[Composicao]:
        stmt = (
            self._select_joined()
            .where(self.model.padrao_id == padrao_id)
            .where(self.member_column == member_id)
        )
        return self._fetch(db, stmt, f"for padrao {padrao_id} and {self.member_attr}={member_id}")

    def find_filtered(self, db: Session, padrao_id: int, family_id: int, member_id: int) -> List[Composicao]:
        stmt = (
            self._select_joined()
            .where(self.model.padrao_id == padrao_id)
            .where(self.family_column == family_id)
            .where(self.member_column == member_id)
        )
        return self._fetch(
            db, stmt,
            f"for padrao {padrao_id}, {self.family_attr}={family_id} and {self.member_attr}={member_id}"
        )

    # --- Writes ---

    def save(self, db: Session, composicao: Composicao) -> Composicao:
        """Adds one composition to the session and flushes to obtain its ID."""
        name = self.model.__name__
        try:
            db.add(composicao)
            db.flush()
            logger.info(f"ORM: {name} added to session (ID: {composicao.id}). Commit pending.")
            return composicao
        except SQLAlchemyError as e:
            logger.error(f"ORM: Database error adding {name}: {e}", exc_info=True)
            raise DatabaseError(f"Failed to add {name}: {e}") from e

    def save_all(self, db: Session, composicoes: List[Composicao]) -> List[Composicao]:
        """Adds a batch of compositions with a single flush."""
        name = self.model.__name__
        try:
            db.add_all(composicoes)
            db.flush()
            logger.info(f"ORM: {len(composicoes)} {name} added to session in one batch. Commit pending.")
            return composicoes
        except SQLAlchemyError as e:
            logger.error(f"ORM: Database error adding {name} batch: {e}", exc_info=True)
            raise DatabaseError(f"Failed to add {name} batch: {e}") from e

    def delete_by_id(self, db: Session, composicao_id: int) -> int:
        """
        Deletes one composition by its own ID without checking that it exists.
        Returns the number of affected rows (0 or 1).
        """
        name = self.model.__name__
        try:
            stmt = (
                delete(self.model)
                .where(self.model.id == composicao_id)
                .execution_options(synchronize_session=False)
            )
            affected = db.execute(stmt).rowcount
            logger.info(f"ORM: Delete {name} ID {composicao_id} affected {affected} row(s). Commit pending.")
            return affected
        except SQLAlchemyError as e:
            logger.error(f"ORM: Database error deleting {name} ID {composicao_id}: {e}", exc_info=True)
            raise DatabaseError(f"Failed to delete {name}: {e}") from e

    def delete_by_padrao_and_family(self, db: Session, padrao_id: int, family_id: int) -> int:
        """Bulk-deletes every composition of a Padrão whose compositor is in the family. Returns affected rows."""
        name = self.model.__name__
        try:
            family_compositores = select(self.compositor_model.id).where(self.family_column == family_id)
            stmt = (
                delete(self.model)
                .where(self.model.padrao_id == padrao_id)
                .where(self.model.compositor_id.in_(family_compositores))
                .execution_options(synchronize_session=False)
            )
            affected = db.execute(stmt).rowcount
            logger.info(
                f"ORM: Bulk delete of {name} for padrao {padrao_id} and {self.family_attr}={family_id} "
                f"affected {affected} row(s). Commit pending."
            )
            return affected
        except SQLAlchemyError as e:
            logger.error(f"ORM: Database error bulk deleting {name} for padrao {padrao_id}: {e}", exc_info=True)
            raise DatabaseError(f"Failed to delete {name} batch: {e}") from e


class ComposicaoAmbienteRepository(ComposicaoRepository):
    model = ComposicaoAmbiente
    compositor_model = ItemAmbiente
    family_attr = 'ambiente_id'
    member_attr = 'item_id'


class ComposicaoMaterialRepository(ComposicaoRepository):
    model = ComposicaoMaterial
    compositor_model = MarcaMaterial
    family_attr = 'material_id'
    member_attr = 'marca_id'
