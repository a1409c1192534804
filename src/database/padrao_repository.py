# src/database/padrao_repository.py
# Handles read access to Padrões using SQLAlchemy ORM.

from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from .base_repository import BaseRepository
from src.domain.catalog import Padrao
from src.utils.logger import logger
from src.api.errors import DatabaseError

class PadraoRepository(BaseRepository):
    """Repository for Padrões. Methods expect the caller's Session."""

    def find_by_id(self, db: Session, padrao_id: int) -> Optional[Padrao]:
        """Finds a Padrão by its ID."""
        logger.debug(f"ORM: Finding padrao by ID {padrao_id}")
        try:
            padrao = db.get(Padrao, padrao_id)
            if padrao:
                logger.debug(f"ORM: Padrao found by ID {padrao_id}.")
            else:
                logger.debug(f"ORM: Padrao not found by ID {padrao_id}.")
            return padrao
        except SQLAlchemyError as e:
            logger.error(f"ORM: Database error finding padrao by ID {padrao_id}: {e}", exc_info=True)
            raise DatabaseError(f"Database error finding padrao by ID: {e}") from e
