# src/domain/compositor_type.py
# Discriminador do tipo de composição (ambiente x material).

from enum import Enum
from typing import Union

from src.api.errors import InvalidCompositorError

class CompositorType(str, Enum):
    """Tipos de compositor que podem ser associados a um Padrão."""
    AMBIENTE = "AMBIENTE"
    MATERIAL = "MATERIAL"

    @classmethod
    def from_value(cls, value: Union["CompositorType", str, None]) -> "CompositorType":
        """
        Resolve um tipo de compositor a partir do enum ou de uma string
        (sem diferenciar maiúsculas/minúsculas).

        Raises:
            InvalidCompositorError: se o valor não corresponder a nenhum tipo.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidCompositorError(value)
