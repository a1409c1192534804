# src/utils/catalog_mapper.py
# Converts catalog ORM objects into the response dataclasses.
# Must be called while the owning session is still open (lazy collections).

from typing import List, Union

from src.domain.catalog import Padrao, ItemAmbiente, MarcaMaterial
from src.domain.composicao import ComposicaoAmbiente, ComposicaoMaterial
from src.domain.catalog_responses import (
    LoadCatalogParams, CompositorResponse, ComposicaoResponse, PadraoResponse
)

Compositor = Union[ItemAmbiente, MarcaMaterial]
Composicao = Union[ComposicaoAmbiente, ComposicaoMaterial]

class CatalogMapper:
    """Maps Padrões, compositors and compositions to response objects."""

    def compositor_to_response(self, compositor: Compositor) -> CompositorResponse:
        family = compositor.family
        member = compositor.member
        return CompositorResponse(
            id=compositor.id,
            compositor_type=compositor.compositor_type.value,
            family_id=family.id,
            family_name=family.name,
            member_id=member.id,
            member_name=member.name,
        )

    def composicao_to_response(self, composicao: Composicao) -> ComposicaoResponse:
        return ComposicaoResponse(
            id=composicao.id,
            padrao_id=composicao.padrao.id,
            padrao_name=composicao.padrao.name,
            compositor=self.compositor_to_response(composicao.compositor),
        )

    def padrao_to_response(self, padrao: Padrao, params: LoadCatalogParams) -> PadraoResponse:
        ambientes = None
        materiais = None
        if params.load_ambientes:
            ambientes = self._compositores_of(padrao.composicoes_ambiente)
        if params.load_materiais:
            materiais = self._compositores_of(padrao.composicoes_material)
        return PadraoResponse(
            id=padrao.id,
            name=padrao.name,
            description=padrao.description,
            is_active=padrao.is_active,
            ambientes=ambientes,
            materiais=materiais,
        )

    def _compositores_of(self, composicoes: List[Composicao]) -> List[CompositorResponse]:
        return [self.compositor_to_response(c.compositor) for c in composicoes]
