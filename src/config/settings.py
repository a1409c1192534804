# src/config/settings.py
# Configuração da API de composições, lida do ambiente (.env na raiz do projeto).

from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv
import os
import logging
import sys
from urllib.parse import quote_plus

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
load_dotenv(dotenv_path=os.path.join(PROJECT_ROOT, '.env'))

DEFAULT_SECRET_KEY = 'default_secret_key_change_me_in_env'

def _env(name: str, default: Optional[str] = None):
    return field(default_factory=lambda: os.environ.get(name, default))

def _env_int(name: str, default: int):
    return field(default_factory=lambda: int(os.environ.get(name, default)))

def _env_bool(name: str, default: str):
    return field(default_factory=lambda: os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes'))

@dataclass
class Config:
    """
    Configuração da aplicação.

    Os campos vêm das variáveis de ambiente; SQLALCHEMY_DATABASE_URI é
    montada a partir de DB_TYPE, a menos que seja passada explicitamente
    (como fazem os testes).
    """
    # Flask
    SECRET_KEY: str = _env('SECRET_KEY', DEFAULT_SECRET_KEY)
    APP_HOST: str = _env('APP_HOST', '0.0.0.0')
    APP_PORT: int = _env_int('APP_PORT', 5004)
    APP_DEBUG: bool = _env_bool('APP_DEBUG', 'True')
    LOG_LEVEL: str = _env('LOG_LEVEL', 'DEBUG')

    # Banco de dados: POSTGRES ou SQLITE
    DB_TYPE: str = _env('DB_TYPE', 'POSTGRES')

    POSTGRES_HOST: str = _env('POSTGRES_HOST', 'localhost')
    POSTGRES_PORT: int = _env_int('POSTGRES_PORT', 5432)
    POSTGRES_USER: str = _env('POSTGRES_USER', '')
    POSTGRES_PASSWORD: str = _env('POSTGRES_PASSWORD', '')
    POSTGRES_DB: str = _env('POSTGRES_DB', '')

    DATABASE_PATH: Optional[str] = _env('DATABASE_PATH')

    # Pool de conexões (ignorado no SQLite)
    DB_POOL_SIZE: int = _env_int('DB_POOL_SIZE', 10)
    DB_MAX_OVERFLOW: int = _env_int('DB_MAX_OVERFLOW', 20)

    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    def __post_init__(self):
        self.LOG_LEVEL = str(self.LOG_LEVEL).upper()
        if self.LOG_LEVEL not in logging._nameToLevel:
            print(f"Warning: Invalid LOG_LEVEL '{self.LOG_LEVEL}'. Defaulting to DEBUG.", file=sys.stderr)
            self.LOG_LEVEL = 'DEBUG'
        self.DB_TYPE = str(self.DB_TYPE).upper()

        if not self.SQLALCHEMY_DATABASE_URI:
            self.SQLALCHEMY_DATABASE_URI = self._build_database_uri()

    def _build_database_uri(self) -> Optional[str]:
        if self.DB_TYPE == 'POSTGRES':
            return self._postgres_uri()
        if self.DB_TYPE == 'SQLITE':
            return self._sqlite_uri()
        print(f"Warning: Unsupported DB_TYPE '{self.DB_TYPE}'. No database URI configured.", file=sys.stderr)
        return None

    def _postgres_uri(self) -> Optional[str]:
        if not all([self.POSTGRES_HOST, self.POSTGRES_USER, self.POSTGRES_PASSWORD, self.POSTGRES_DB]):
            print("Warning: Missing PostgreSQL connection details (POSTGRES_*).", file=sys.stderr)
            return None
        password = quote_plus(self.POSTGRES_PASSWORD)
        return (f"postgresql+psycopg://{self.POSTGRES_USER}:{password}"
                f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}")

    def _sqlite_uri(self) -> Optional[str]:
        if not self.DATABASE_PATH:
            print("Warning: DB_TYPE is SQLITE but DATABASE_PATH is not set.", file=sys.stderr)
            return None
        path = self.DATABASE_PATH
        if not os.path.isabs(path):
            path = os.path.join(PROJECT_ROOT, path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return f"sqlite:///{path}"

    def masked_database_uri(self) -> str:
        """URI do banco com a senha mascarada, para logs."""
        uri = str(self.SQLALCHEMY_DATABASE_URI)
        if self.POSTGRES_PASSWORD:
            uri = uri.replace(quote_plus(self.POSTGRES_PASSWORD), '********')
        return uri

_config_instance: Optional[Config] = None

def load_config() -> Config:
    """Carrega (uma vez) e devolve o Config do processo."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
        print("--- Configuration Loaded ---")
        print(f"  APP: {_config_instance.APP_HOST}:{_config_instance.APP_PORT} (debug={_config_instance.APP_DEBUG})")
        print(f"  LOG_LEVEL: {_config_instance.LOG_LEVEL}")
        print(f"  DB_TYPE: {_config_instance.DB_TYPE}")
        print(f"  SQLALCHEMY_DATABASE_URI: {_config_instance.masked_database_uri()}")
        print("--------------------------")
    return _config_instance

config = load_config()
