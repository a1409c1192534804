# src/app.py
# Fábrica da aplicação Flask da API de composições de Padrões.

import atexit
import sys

from flask import Flask, jsonify
from flask_cors import CORS
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from src.config import Config
from src.config.settings import DEFAULT_SECRET_KEY
from src.api import register_blueprints
from src.api.errors import register_error_handlers, ConfigurationError, DatabaseError
from src.database import get_db_session, init_sqlalchemy, dispose_sqlalchemy_engine
from src.database.padrao_repository import PadraoRepository
from src.database.compositor_repository import ItemAmbienteRepository, MarcaMaterialRepository
from src.database.composicao_repository import ComposicaoAmbienteRepository, ComposicaoMaterialRepository
from src.services import ComposicaoService
from src.utils.catalog_mapper import CatalogMapper
from src.utils.logger import logger, configure_logger

def _check_secret_key(app: Flask):
    secret = app.config.get('SECRET_KEY')
    if secret and secret != DEFAULT_SECRET_KEY:
        return
    logger.critical("ALERTA DE SEGURANÇA: SECRET_KEY não definida ou com o valor padrão!")
    if not app.config.get('APP_DEBUG', False):
        raise ConfigurationError("SECRET_KEY deve ser configurada com um valor seguro em produção.")
    logger.warning("Usando SECRET_KEY padrão no modo de depuração.")

def _init_database(config_object: Config) -> Engine:
    """Inicializa o SQLAlchemy; encerra o processo se o banco não estiver disponível."""
    try:
        if not config_object.SQLALCHEMY_DATABASE_URI:
            raise ConfigurationError("SQLALCHEMY_DATABASE_URI não está configurado.")
        engine = init_sqlalchemy(
            config_object.SQLALCHEMY_DATABASE_URI,
            pool_size=config_object.DB_POOL_SIZE,
            max_overflow=config_object.DB_MAX_OVERFLOW,
        )
    except (DatabaseError, ConfigurationError, SQLAlchemyError) as db_init_err:
        logger.critical(f"Falha ao inicializar o banco de dados: {db_init_err}", exc_info=True)
        sys.exit(1)
    atexit.register(dispose_sqlalchemy_engine)
    return engine

def _build_composicao_service(engine: Engine) -> ComposicaoService:
    return ComposicaoService(
        PadraoRepository(engine),
        ComposicaoAmbienteRepository(engine),
        ComposicaoMaterialRepository(engine),
        ItemAmbienteRepository(engine),
        MarcaMaterialRepository(engine),
        CatalogMapper(),
    )

def _register_health_check(app: Flask):
    @app.route('/health', methods=['GET'])
    def health_check():
        db_error = None
        try:
            with get_db_session() as db:
                db.execute(text("SELECT 1"))
        except (DatabaseError, RuntimeError) as e:
            logger.error(f"Health check do banco falhou: {e}")
            db_error = str(e)

        status_code = 200 if db_error is None else 503
        return jsonify({
            "status": "ok" if db_error is None else "degraded",
            "database": "ok" if db_error is None else "error",
            "database_error": db_error,
        }), status_code

def create_app(config_object: Config) -> Flask:
    """
    Cria e configura a aplicação Flask.

    Args:
        config_object: Config com as configurações de Flask, log e banco.

    Returns:
        A aplicação com o ComposicaoService em app.config['composicao_service'].
    """
    app = Flask("Catalog-Backend")
    app.config.from_object(config_object)

    configure_logger(config_object.LOG_LEVEL)
    logger.info(f"Iniciando a API de composições (debug={config_object.APP_DEBUG}).")

    _check_secret_key(app)
    CORS(app, supports_credentials=True, resources={r"/api/*": {"origins": "*"}})

    engine = _init_database(config_object)
    logger.info(f"Banco de dados pronto: {config_object.masked_database_uri()}")

    app.config['composicao_service'] = _build_composicao_service(engine)

    register_blueprints(app)
    register_error_handlers(app)
    _register_health_check(app)

    logger.info("Aplicação Catalog-Backend configurada.")
    return app
