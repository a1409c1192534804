# src/database/__init__.py
# Engine e fábrica de sessões do catálogo, e a unidade de trabalho get_db_session.
# Logger e erros são importados localmente: o Alembic importa este pacote
# (via src.database.base) antes de a aplicação existir.

import threading
from typing import Optional, Generator
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from .base import Base

_sqla_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
_engine_lock = threading.Lock()

def _engine_options(database_uri: str, pool_size: int, max_overflow: int) -> dict:
    options = {"pool_recycle": 3600, "pool_pre_ping": True}
    # SQLite não aceita pool_size/max_overflow
    if not database_uri.startswith("sqlite"):
        options.update(pool_size=pool_size, max_overflow=max_overflow)
    return options

def _verify_connection(engine: Engine):
    from src.utils.logger import logger
    from src.api.errors import DatabaseError

    try:
        with engine.connect():
            logger.info(f"Conexão com o banco '{engine.url.database}' estabelecida.")
    except SQLAlchemyError as conn_err:
        logger.critical(f"Falha ao conectar ao banco de dados: {conn_err}", exc_info=True)
        raise DatabaseError(f"Failed to connect to the database: {conn_err}") from conn_err

def init_sqlalchemy(database_uri: str, pool_size: int = 10, max_overflow: int = 20) -> Engine:
    """
    Cria o engine, testa a conexão, cria a fábrica de sessões e garante o
    esquema do catálogo. Chamadas repetidas devolvem o engine já criado.
    """
    from src.utils.logger import logger
    from src.api.errors import DatabaseError, ConfigurationError
    from .schema_manager import SchemaManager

    global _sqla_engine, _session_factory
    with _engine_lock:
        if _sqla_engine is not None and _session_factory is not None:
            logger.warning("SQLAlchemy já inicializado; reutilizando o engine existente.")
            return _sqla_engine

        if not database_uri:
            raise ConfigurationError("Database URI is missing in configuration.")

        logger.info("Inicializando engine SQLAlchemy e fábrica de sessões...")
        engine = None
        try:
            engine = create_engine(database_uri, **_engine_options(database_uri, pool_size, max_overflow))
            _verify_connection(engine)
            SchemaManager(engine).initialize_schema()
        except (DatabaseError, ConfigurationError):
            if engine is not None:
                engine.dispose()
            raise
        except SQLAlchemyError as e:
            logger.critical(f"Falha na inicialização do SQLAlchemy: {e}", exc_info=True)
            if engine is not None:
                engine.dispose()
            raise DatabaseError(f"SQLAlchemy initialization failed: {e}") from e

        _sqla_engine = engine
        # expire_on_commit=False: respostas são montadas logo após o commit
        _session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        logger.info("SQLAlchemy inicializado.")
        return _sqla_engine

@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Unidade de trabalho de uma operação de serviço.

    Commit ao sair normalmente, rollback em qualquer exceção, close sempre.
    Erros do SQLAlchemy sobem como DatabaseError; as demais exceções
    (NotFoundError, ValidationError...) sobem inalteradas após o rollback.
    """
    from src.utils.logger import logger
    from src.api.errors import DatabaseError

    if _session_factory is None:
        raise RuntimeError("Database session factory has not been initialized.")

    db = _session_factory()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as sql_ex:
        db.rollback()
        logger.error(f"Erro de banco na unidade de trabalho; rollback executado: {sql_ex}", exc_info=True)
        raise DatabaseError(f"Database operation failed: {sql_ex}") from sql_ex
    except Exception as e:
        db.rollback()
        logger.debug(f"Rollback da unidade de trabalho por {type(e).__name__}: {e}")
        raise
    finally:
        db.close()

def get_engine() -> Optional[Engine]:
    """Engine inicializado, ou None antes de init_sqlalchemy()."""
    return _sqla_engine

def dispose_sqlalchemy_engine():
    """Fecha o pool de conexões. Chamado no encerramento da aplicação e nos testes."""
    from src.utils.logger import logger

    global _sqla_engine, _session_factory
    with _engine_lock:
        if _sqla_engine is None:
            return
        try:
            _sqla_engine.dispose()
            logger.info("Pool de conexões do SQLAlchemy descartado.")
        except SQLAlchemyError as e:
            logger.error(f"Erro ao descartar o pool do SQLAlchemy: {e}", exc_info=True)
        finally:
            _sqla_engine = None
            _session_factory = None

__all__ = [
    "init_sqlalchemy",
    "get_db_session",
    "get_engine",
    "dispose_sqlalchemy_engine",
    "Base",
]
