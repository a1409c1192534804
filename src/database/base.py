# src/database/base.py
# Base declarativa compartilhada pelos modelos ORM do catálogo.

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Nomes de constraints estáveis entre create_all e as migrações do Alembic
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

class Base(DeclarativeBase):
    """Base para Padrão, famílias, membros, compositores e composições."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @classmethod
    def table_names(cls):
        return sorted(cls.metadata.tables)
