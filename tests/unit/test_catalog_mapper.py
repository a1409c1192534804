"""
Unit tests for CatalogMapper and the response dataclasses.

Uses transient ORM objects; no database is involved.
"""

from src.domain import (
    Padrao, Ambiente, Item, Material, Marca, ItemAmbiente, MarcaMaterial,
    ComposicaoAmbiente, ComposicaoMaterial, LoadCatalogParams,
)
from src.utils.catalog_mapper import CatalogMapper


def _padrao():
    return Padrao(id=1, name="Padrão Essencial", description="Linha de entrada", is_active=True)


def _item_ambiente():
    return ItemAmbiente(id=3, ambiente=Ambiente(id=2, name="Sala"), item=Item(id=4, name="Sofá"))


def _marca_material():
    return MarcaMaterial(id=8, material=Material(id=6, name="Piso"), marca=Marca(id=7, name="Portobello"))


class TestCompositorMapping:

    def test_item_ambiente_maps_family_and_member(self):
        response = CatalogMapper().compositor_to_response(_item_ambiente())
        assert response.to_dict() == {
            "id": 3,
            "compositor_type": "AMBIENTE",
            "family_id": 2,
            "family_name": "Sala",
            "member_id": 4,
            "member_name": "Sofá",
        }

    def test_marca_material_maps_family_and_member(self):
        response = CatalogMapper().compositor_to_response(_marca_material())
        assert response.compositor_type == "MATERIAL"
        assert (response.family_id, response.family_name) == (6, "Piso")
        assert (response.member_id, response.member_name) == (7, "Portobello")


class TestComposicaoMapping:

    def test_composicao_references_padrao_and_compositor(self):
        composicao = ComposicaoAmbiente(id=11, padrao=_padrao(), compositor=_item_ambiente())
        response = CatalogMapper().composicao_to_response(composicao)

        assert response.id == 11
        assert response.padrao_id == 1
        assert response.padrao_name == "Padrão Essencial"
        assert response.compositor_id == 3
        assert response.to_dict()["compositor"]["family_name"] == "Sala"


class TestPadraoMapping:

    def test_default_params_do_not_embed_compositors(self):
        response = CatalogMapper().padrao_to_response(_padrao(), LoadCatalogParams())
        data = response.to_dict()

        assert response.ambientes is None and response.materiais is None
        assert "ambientes" not in data and "materiais" not in data
        assert data["name"] == "Padrão Essencial"
        assert data["is_active"] is True

    def test_load_flags_embed_compositors_of_each_kind(self):
        padrao = _padrao()
        ComposicaoAmbiente(id=11, padrao=padrao, compositor=_item_ambiente())
        ComposicaoMaterial(id=12, padrao=padrao, compositor=_marca_material())

        response = CatalogMapper().padrao_to_response(
            padrao, LoadCatalogParams(load_ambientes=True, load_materiais=True)
        )

        assert [c.id for c in response.ambientes] == [3]
        assert [c.id for c in response.materiais] == [8]
        assert response.to_dict()["materiais"][0]["member_name"] == "Portobello"

    def test_only_requested_kind_is_embedded(self):
        padrao = _padrao()
        ComposicaoAmbiente(id=11, padrao=padrao, compositor=_item_ambiente())

        response = CatalogMapper().padrao_to_response(padrao, LoadCatalogParams(load_ambientes=True))

        assert len(response.ambientes) == 1
        assert response.materiais is None


class TestLoadCatalogParams:

    def test_from_query_args_parses_true_values(self):
        params = LoadCatalogParams.from_query_args(
            {"load_ambientes": "true", "load_materiais": "1", "only_active": "sim"}
        )
        assert params == LoadCatalogParams(load_ambientes=True, load_materiais=True, only_active=True)

    def test_from_query_args_defaults_to_false(self):
        params = LoadCatalogParams.from_query_args({"load_ambientes": "false"})
        assert params == LoadCatalogParams()
