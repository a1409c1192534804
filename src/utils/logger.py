# src/utils/logger.py
# Logger único da API de composições: console + arquivo rotativo seguro entre processos.

import logging
import os
import sys
from concurrent_log_handler import ConcurrentRotatingFileHandler
from typing import Optional, Tuple

LOGGER_NAME = "CatalogAPI"
DEFAULT_LOG_DIRECTORY = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "logs"
)
LOG_FILENAME = "app.log"
LOG_LEVEL_DEFAULT = "DEBUG"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d | %(funcName)s] - %(message)s'
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 10

def _resolve_level(level_str: str) -> Tuple[int, str]:
    numeric_level = getattr(logging, str(level_str).upper(), None)
    if not isinstance(numeric_level, int):
        print(f"Aviso: Nível de log inválido '{level_str}'. Usando {LOG_LEVEL_DEFAULT}.", file=sys.stderr)
        return logging.DEBUG, LOG_LEVEL_DEFAULT
    return numeric_level, str(level_str).upper()

def _file_handler(formatter: logging.Formatter) -> Optional[logging.Handler]:
    # LOG_DIR permite separar os logs da árvore do projeto (containers, testes)
    log_directory = os.environ.get('LOG_DIR', DEFAULT_LOG_DIRECTORY)
    try:
        os.makedirs(log_directory, exist_ok=True)
        handler = ConcurrentRotatingFileHandler(
            filename=os.path.join(log_directory, LOG_FILENAME),
            mode='a',
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8',
        )
    except OSError as e:
        print(f"Erro ao configurar log em arquivo ({log_directory}): {e}", file=sys.stderr)
        return None
    handler.setFormatter(formatter)
    return handler

class Logger:
    """Singleton que configura o logger da API uma única vez por processo."""
    _instance = None
    _logger = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, name: str = LOGGER_NAME, log_level: Optional[str] = None):
        if self._initialized:
            # Já configurado: só reaplica o nível
            if log_level is not None:
                self._logger.setLevel(_resolve_level(log_level)[0])
            return

        if log_level is None:
            try:
                from src.config import config  # importação atrasada (config -> logger)
                log_level = config.LOG_LEVEL
            except ImportError:
                log_level = LOG_LEVEL_DEFAULT
        numeric_level, level_name = _resolve_level(log_level)

        self._logger = logging.getLogger(name)
        self._logger.setLevel(numeric_level)

        if not self._logger.handlers:
            formatter = logging.Formatter(LOG_FORMAT)
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

            file_handler = _file_handler(formatter)
            if file_handler is not None:
                self._logger.addHandler(file_handler)
                print(f"Log configurado. Nível: {level_name}. Arquivo: {getattr(file_handler, 'baseFilename', LOG_FILENAME)}")

        self._initialized = True

    def get_logger(self) -> logging.Logger:
        if not self._logger:
            raise RuntimeError("Logger não foi inicializado.")
        return self._logger

logger = Logger().get_logger()

def configure_logger(level: str) -> logging.Logger:
    """Reaplica o nível de log (ex.: o LOG_LEVEL do Config passado a create_app)."""
    return Logger(log_level=level).get_logger()
