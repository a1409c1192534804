# src/api/__init__.py
# Camada HTTP. As rotas são importadas dentro de register_blueprints para que
# domain/database possam importar src.api.errors sem carregar o Flask das rotas.

from flask import Flask

from src.utils.logger import logger

API_PREFIX = '/api/padroes'

def register_blueprints(app: Flask):
    """Registra os blueprints da API de composições na aplicação."""
    from .routes.composicoes import composicoes_bp

    for bp, prefix in ((composicoes_bp, API_PREFIX),):
        app.register_blueprint(bp, url_prefix=prefix)
        logger.debug(f"Blueprint '{bp.name}' registrado em '{prefix}'.")
    logger.info(f"{len(app.blueprints)} blueprint(s) da API registrados.")

__all__ = ["register_blueprints", "API_PREFIX"]
