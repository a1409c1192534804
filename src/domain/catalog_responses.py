# src/domain/catalog_responses.py
# Defines the response/parameter dataclasses returned by the composition service.

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional, Mapping

_TRUE_VALUES = ('1', 'true', 'yes', 'sim')

def _as_bool(value: Optional[str]) -> bool:
    return str(value).strip().lower() in _TRUE_VALUES if value is not None else False

@dataclass(frozen=True)
class LoadCatalogParams:
    """
    Shapes how a Padrão is mapped to its response.

    load_ambientes / load_materiais embed the Padrão's compositors of that kind;
    only_active drops inactive Padrões from lookups by compositor.
    """
    load_ambientes: bool = False
    load_materiais: bool = False
    only_active: bool = False

    @classmethod
    def from_query_args(cls, args: Mapping[str, str]) -> 'LoadCatalogParams':
        """Builds the params from request query args ('true'/'false')."""
        return cls(
            load_ambientes=_as_bool(args.get('load_ambientes')),
            load_materiais=_as_bool(args.get('load_materiais')),
            only_active=_as_bool(args.get('only_active')),
        )

@dataclass(frozen=True)
class CompositorResponse:
    """An ItemAmbiente or MarcaMaterial, flattened to family + member."""
    id: int
    compositor_type: str
    family_id: int
    family_name: str
    member_id: int
    member_name: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True)
class ComposicaoResponse:
    """One association between a Padrão and a compositor."""
    id: int
    padrao_id: int
    padrao_name: str
    compositor: CompositorResponse

    @property
    def compositor_id(self) -> int:
        return self.compositor.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'padrao_id': self.padrao_id,
            'padrao_name': self.padrao_name,
            'compositor': self.compositor.to_dict(),
        }

@dataclass(frozen=True)
class PadraoResponse:
    """
    A Padrão as returned to callers. ambientes / materiais stay None unless
    requested through LoadCatalogParams.
    """
    id: int
    name: str
    description: Optional[str]
    is_active: bool
    ambientes: Optional[List[CompositorResponse]] = field(default=None)
    materiais: Optional[List[CompositorResponse]] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'is_active': self.is_active,
        }
        if self.ambientes is not None:
            data['ambientes'] = [c.to_dict() for c in self.ambientes]
        if self.materiais is not None:
            data['materiais'] = [c.to_dict() for c in self.materiais]
        return data
