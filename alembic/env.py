# alembic/env.py
# Migrações do catálogo. A URL do banco vem do Config da aplicação (.env),
# não do alembic.ini.

import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

try:
    from src.config import config as app_config
    from src.database.base import Base
    import src.domain  # noqa: F401  registra os modelos em Base.metadata
except ImportError as e:
    print(f"Erro ao importar o pacote 'src' ({e}). Execute o alembic na raiz do projeto.")
    sys.exit(1)

alembic_config = context.config
if alembic_config.config_file_name is not None:
    fileConfig(alembic_config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    if not app_config.SQLALCHEMY_DATABASE_URI:
        print("Erro: SQLALCHEMY_DATABASE_URI não configurado (DB_TYPE / POSTGRES_* / DATABASE_PATH).")
        sys.exit(1)
    return app_config.SQLALCHEMY_DATABASE_URI


def run_migrations_offline() -> None:
    """Gera o SQL das migrações sem conectar ao banco."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Aplica as migrações; no SQLite usa batch mode para ALTER TABLE."""
    # '%' da senha codificada precisa de escape no configparser
    alembic_config.set_main_option('sqlalchemy.url', _database_url().replace('%', '%%'))
    connectable = engine_from_config(
        alembic_config.get_section(alembic_config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
