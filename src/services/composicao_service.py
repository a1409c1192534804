# src/services/composicao_service.py
# Business logic for the compositions between Padrões and their compositors
# (itens de ambiente e marcas de material).

from dataclasses import dataclass
from typing import List, Optional, Union
from sqlalchemy.exc import SQLAlchemyError

from src.database import get_db_session
from src.database.padrao_repository import PadraoRepository
from src.database.compositor_repository import (
    CompositorRepository, ItemAmbienteRepository, MarcaMaterialRepository
)
from src.database.composicao_repository import (
    ComposicaoRepository, ComposicaoAmbienteRepository, ComposicaoMaterialRepository
)
from src.domain.catalog import Padrao
from src.domain.compositor_type import CompositorType
from src.domain.catalog_responses import (
    LoadCatalogParams, CompositorResponse, ComposicaoResponse, PadraoResponse
)
from src.utils.catalog_mapper import CatalogMapper
from src.utils.logger import logger
from src.api.errors import NotFoundError, ValidationError, ServiceError, DatabaseError

CompositorTypeLike = Union[CompositorType, str]

@dataclass(frozen=True)
class CompositorBinding:
    """Repositories and labels of one compositor kind."""
    compositor_type: CompositorType
    composicao_repository: ComposicaoRepository
    compositor_repository: CompositorRepository
    compositor_label: str
    family_label: str

    def new_composicao(self, padrao: Padrao, compositor):
        return self.composicao_repository.model(padrao=padrao, compositor=compositor)


# Colunas de ID são Integer (32 bits)
MAX_ID = 2**31 - 1

def _require_id(value, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"O campo '{field_name}' deve ser um inteiro positivo.")
    if value > MAX_ID:
        raise ValidationError(f"O campo '{field_name}' excede o maior ID suportado ({MAX_ID}).")
    return value

def _optional_id(value, field_name: str) -> Optional[int]:
    return None if value is None else _require_id(value, field_name)


class ComposicaoService:
    """
    Camada de serviço das composições de Padrão usando ORM Sessions.

    Cada operação pública roda em uma única unidade de trabalho
    (get_db_session): commit ao final, rollback em qualquer erro.
    """

    def __init__(self,
                 padrao_repository: PadraoRepository,
                 composicao_ambiente_repository: ComposicaoAmbienteRepository,
                 composicao_material_repository: ComposicaoMaterialRepository,
                 item_ambiente_repository: ItemAmbienteRepository,
                 marca_material_repository: MarcaMaterialRepository,
                 catalog_mapper: CatalogMapper):
        self.padrao_repository = padrao_repository
        self.catalog_mapper = catalog_mapper
        self._bindings = {
            CompositorType.AMBIENTE: CompositorBinding(
                compositor_type=CompositorType.AMBIENTE,
                composicao_repository=composicao_ambiente_repository,
                compositor_repository=item_ambiente_repository,
                compositor_label="associação de ambiente e item",
                family_label="ambiente",
            ),
            CompositorType.MATERIAL: CompositorBinding(
                compositor_type=CompositorType.MATERIAL,
                composicao_repository=composicao_material_repository,
                compositor_repository=marca_material_repository,
                compositor_label="associação de marca e material",
                family_label="material",
            ),
        }
        logger.info("ComposicaoService inicializado (ORM).")

    # --- Helpers ---

    def _binding_for(self, comp_type: CompositorTypeLike) -> CompositorBinding:
        """Único ponto de despacho pelo tipo de compositor."""
        return self._bindings[CompositorType.from_value(comp_type)]

    def _get_padrao(self, db, padrao_id: int) -> Padrao:
        padrao = self.padrao_repository.find_by_id(db, padrao_id)
        if not padrao:
            raise NotFoundError(f"Nenhum padrão encontrado com ID: {padrao_id}")
        return padrao

    def _get_compositor(self, db, binding: CompositorBinding, compositor_id: int):
        compositor = binding.compositor_repository.find_by_id(db, compositor_id)
        if not compositor:
            raise NotFoundError(f"Nenhuma {binding.compositor_label} encontrada com ID: {compositor_id}")
        return compositor

    # --- Consultas ---

    def find_padroes_by_compositor(self, family_id: int, params: Optional[LoadCatalogParams],
                                   comp_type: CompositorTypeLike) -> List[PadraoResponse]:
        """
        Retorna os Padrões (sem repetição, na ordem em que aparecem) que possuem
        alguma composição com compositores da família informada
        (ID do ambiente ou do material).
        """
        binding = self._binding_for(comp_type)
        _require_id(family_id, 'family_id')
        params = params or LoadCatalogParams()

        logger.debug(f"Buscando padrões por {binding.family_label} ID {family_id} ({params}).")
        try:
            with get_db_session() as db:
                composicoes = binding.composicao_repository.find_by_family(db, family_id)
                padroes = list(dict.fromkeys(c.padrao for c in composicoes))
                if params.only_active:
                    padroes = [p for p in padroes if p.is_active]
                result = [self.catalog_mapper.padrao_to_response(p, params) for p in padroes]
            logger.debug(f"Encontrados {len(result)} padrões para {binding.family_label} ID {family_id}.")
            return result
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao buscar padrões por {binding.family_label} ID {family_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível buscar os padrões: {e}") from e

    def find_compositores_by_padrao(self, padrao_id: int, family_id: Optional[int],
                                    member_id: Optional[int],
                                    comp_type: CompositorTypeLike) -> List[CompositorResponse]:
        """
        Retorna os compositores associados ao Padrão, opcionalmente filtrados
        pela família (ambiente/material) e/ou pelo membro (item/marca).
        """
        binding = self._binding_for(comp_type)
        _require_id(padrao_id, 'padrao_id')
        _optional_id(family_id, 'family_id')
        _optional_id(member_id, 'member_id')
        repository = binding.composicao_repository

        try:
            with get_db_session() as db:
                if family_id is None and member_id is None:
                    composicoes = repository.find_by_padrao(db, padrao_id)
                elif member_id is None:
                    composicoes = repository.find_filtered_by_family(db, padrao_id, family_id)
                elif family_id is None:
                    composicoes = repository.find_filtered_by_member(db, padrao_id, member_id)
                else:
                    composicoes = repository.find_filtered(db, padrao_id, family_id, member_id)
                result = [self.catalog_mapper.compositor_to_response(c.compositor) for c in composicoes]
            logger.debug(f"Encontrados {len(result)} compositores {binding.compositor_type.value} para o padrão {padrao_id}.")
            return result
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao buscar compositores do padrão {padrao_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível buscar os compositores: {e}") from e

    # --- Associação ---

    def add_single_association(self, padrao_id: int, compositor_id: int,
                               comp_type: CompositorTypeLike) -> ComposicaoResponse:
        """Associa um único compositor ao Padrão."""
        binding = self._binding_for(comp_type)
        _require_id(padrao_id, 'padrao_id')
        _require_id(compositor_id, 'compositor_id')

        logger.info(f"Associando compositor {binding.compositor_type.value} ID {compositor_id} ao padrão {padrao_id}.")
        try:
            with get_db_session() as db:
                padrao = self._get_padrao(db, padrao_id)
                compositor = self._get_compositor(db, binding, compositor_id)
                composicao = binding.composicao_repository.save(db, binding.new_composicao(padrao, compositor))
                result = self.catalog_mapper.composicao_to_response(composicao)
            logger.info(f"Composição (ID: {result.id}) criada para o padrão {padrao_id}.")
            return result
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao associar compositor {compositor_id} ao padrão {padrao_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível criar a composição: {e}") from e

    def add_all_associations(self, padrao_id: int, family_id: int,
                             comp_type: CompositorTypeLike) -> List[ComposicaoResponse]:
        """Associa ao Padrão todos os compositores da família, em um único lote."""
        binding = self._binding_for(comp_type)
        _require_id(padrao_id, 'padrao_id')
        _require_id(family_id, 'family_id')

        logger.info(f"Associando todos os compositores do {binding.family_label} ID {family_id} ao padrão {padrao_id}.")
        try:
            with get_db_session() as db:
                padrao = self._get_padrao(db, padrao_id)
                compositores = binding.compositor_repository.find_by_family(db, family_id)
                if not compositores:
                    raise NotFoundError(
                        f"Nenhuma {binding.compositor_label} encontrada para o {binding.family_label} ID: {family_id}"
                    )
                composicoes = [binding.new_composicao(padrao, c) for c in compositores]
                binding.composicao_repository.save_all(db, composicoes)
                result = [self.catalog_mapper.composicao_to_response(c) for c in composicoes]
            logger.info(f"{len(result)} composições criadas para o padrão {padrao_id}.")
            return result
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao associar {binding.family_label} {family_id} ao padrão {padrao_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível criar as composições: {e}") from e

    # --- Remoção ---

    def remove_all_associations(self, padrao_id: int, family_id: int,
                                comp_type: CompositorTypeLike) -> None:
        """
        Remove do Padrão todas as composições cujos compositores pertencem à
        família. Falha com NotFoundError se nenhuma linha for removida.
        """
        binding = self._binding_for(comp_type)
        _require_id(padrao_id, 'padrao_id')
        _require_id(family_id, 'family_id')

        logger.info(f"Removendo composições do {binding.family_label} ID {family_id} do padrão {padrao_id}.")
        try:
            with get_db_session() as db:
                removed = binding.composicao_repository.delete_by_padrao_and_family(db, padrao_id, family_id)
                if not removed:
                    raise NotFoundError(
                        f"Nenhuma composição de {binding.family_label} encontrada para o padrão "
                        f"{padrao_id} e {binding.family_label} {family_id}"
                    )
            logger.info(f"{removed} composições removidas do padrão {padrao_id}.")
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao remover composições do padrão {padrao_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível remover as composições: {e}") from e

    def remove_single_association(self, composicao_id: int, comp_type: CompositorTypeLike) -> None:
        """
        Remove uma composição pelo seu próprio ID. Um ID inexistente não gera
        erro (diferente de remove_all_associations).
        """
        binding = self._binding_for(comp_type)
        _require_id(composicao_id, 'composicao_id')

        logger.info(f"Removendo composição {binding.compositor_type.value} ID {composicao_id}.")
        try:
            with get_db_session() as db:
                removed = binding.composicao_repository.delete_by_id(db, composicao_id)
            if not removed:
                logger.debug(f"Composição {binding.compositor_type.value} ID {composicao_id} não existia; nada removido.")
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao remover composição ID {composicao_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível remover a composição: {e}") from e
