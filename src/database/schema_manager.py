# src/database/schema_manager.py
# Gerencia a criação inicial das tabelas do catálogo.

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .base import Base
from src.utils.logger import logger
from src.api.errors import DatabaseError

class SchemaManager:
    def __init__(self, engine: Engine):
        self.engine = engine

    def initialize_schema(self):
        """Cria as tabelas ausentes e confere se todos os modelos têm tabela."""
        # Registra os modelos ORM em Base.metadata antes do create_all
        import src.domain  # noqa: F401

        expected = Base.table_names()
        try:
            logger.info(f"Verificando esquema do catálogo ({len(expected)} tabelas)...")
            Base.metadata.create_all(bind=self.engine)
            existing = set(inspect(self.engine).get_table_names())
        except SQLAlchemyError as e:
            logger.critical(f"Falha na inicialização do esquema do banco de dados: {e}", exc_info=True)
            raise DatabaseError(f"Falha na inicialização do esquema: {e}") from e

        missing = [t for t in expected if t not in existing]
        if missing:
            raise DatabaseError(f"Tabelas ausentes após create_all: {missing}")
        logger.info(f"Tabelas do catálogo prontas: {expected}")
