# src/utils/__init__.py
# Makes 'utils' a package. Exports the logger; import catalog_mapper directly.

from .logger import logger, configure_logger

__all__ = [
    "logger",
    "configure_logger",
]
