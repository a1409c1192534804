# src/services/__init__.py
# Makes 'services' a package. Exports service classes.

from .composicao_service import ComposicaoService

__all__ = [
    "ComposicaoService",
]
