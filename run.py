# run.py
# Starts the catalog composition API with the configuration read from .env.
import sys

from src.app import create_app
from src.config.settings import load_config
from src.utils.logger import logger

config = load_config()

if __name__ == '__main__':
    if not config.SQLALCHEMY_DATABASE_URI:
        logger.critical("Banco de dados não configurado: defina DB_TYPE e as variáveis POSTGRES_* ou DATABASE_PATH.")
        sys.exit(1)

    app = create_app(config)
    logger.info(f"Servindo a API de composições em {config.APP_HOST}:{config.APP_PORT} "
                f"(banco: {config.masked_database_uri()})")

    try:
        app.run(host=config.APP_HOST, port=config.APP_PORT, debug=config.APP_DEBUG)
    except OSError as e:
        logger.critical(f"Não foi possível iniciar o servidor: {e}", exc_info=True)
        sys.exit(1)
