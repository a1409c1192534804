# src/database/base_repository.py
# Base class for the catalog repositories.

from typing import Any, List

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from src.utils.logger import logger
from src.api.errors import DatabaseError

class BaseRepository:
    """
    Holds the engine for a repository. Methods never open their own session:
    they receive the Session of the service's unit of work (get_db_session)
    and never commit.
    """

    def __init__(self, engine: Engine):
        if not isinstance(engine, Engine):
            raise TypeError("engine must be an instance of sqlalchemy.engine.Engine")
        self.engine = engine
        logger.debug(f"{self.__class__.__name__} bound to database '{engine.url.database}'.")

    def _scalars(self, db: Session, stmt, entity: str, description: str) -> List[Any]:
        """Runs a select and returns its entities, wrapping driver errors in DatabaseError."""
        logger.debug(f"ORM: Finding {entity} {description}")
        try:
            rows = list(db.scalars(stmt).all())
            logger.debug(f"ORM: Found {len(rows)} {entity} {description}.")
            return rows
        except SQLAlchemyError as e:
            logger.error(f"ORM: Database error finding {entity} {description}: {e}", exc_info=True)
            raise DatabaseError(f"Database error finding {entity}: {e}") from e
