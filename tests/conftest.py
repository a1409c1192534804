"""
Pytest configuration and shared fixtures for the catalog composition tests.

This module provides:
- A temporary SQLite database initialized through init_sqlalchemy
- A small seeded catalog (padrões, ambientes/itens, materiais/marcas)
- A ComposicaoService wired to the real repositories
- A Flask test client built by create_app
"""

from types import SimpleNamespace

import pytest
from sqlalchemy import select, func

from src.config import Config
from src.database import init_sqlalchemy, dispose_sqlalchemy_engine, get_db_session
from src.database.padrao_repository import PadraoRepository
from src.database.compositor_repository import ItemAmbienteRepository, MarcaMaterialRepository
from src.database.composicao_repository import ComposicaoAmbienteRepository, ComposicaoMaterialRepository
from src.domain import (
    Padrao, Ambiente, Item, Material, Marca, ItemAmbiente, MarcaMaterial,
    ComposicaoAmbiente, ComposicaoMaterial,
)
from src.services import ComposicaoService
from src.utils.catalog_mapper import CatalogMapper

# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def database_uri(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'catalog_test.db'}"


@pytest.fixture
def engine(database_uri):
    """Initialize the global engine/session factory against a fresh SQLite file."""
    db_engine = init_sqlalchemy(database_uri)
    yield db_engine
    dispose_sqlalchemy_engine()


@pytest.fixture
def catalog(engine) -> SimpleNamespace:
    """
    Seed a small catalog and return the generated ids.

    Ambientes: sala (sofá, mesa), cozinha (mesa, pia), banheiro (vazio).
    Materiais: piso (portobello, eliane), tinta (suvinil), vidro (vazio).
    Padrões: essencial, premium, legado (inativo).
    """
    with get_db_session() as db:
        sala, cozinha, banheiro = Ambiente(name="Sala"), Ambiente(name="Cozinha"), Ambiente(name="Banheiro")
        sofa, mesa, pia = Item(name="Sofá"), Item(name="Mesa"), Item(name="Pia")
        piso, tinta, vidro = Material(name="Piso"), Material(name="Tinta"), Material(name="Vidro")
        portobello, eliane, suvinil = Marca(name="Portobello"), Marca(name="Eliane"), Marca(name="Suvinil")

        sala_sofa = ItemAmbiente(ambiente=sala, item=sofa)
        sala_mesa = ItemAmbiente(ambiente=sala, item=mesa)
        cozinha_mesa = ItemAmbiente(ambiente=cozinha, item=mesa)
        cozinha_pia = ItemAmbiente(ambiente=cozinha, item=pia)

        piso_portobello = MarcaMaterial(material=piso, marca=portobello)
        piso_eliane = MarcaMaterial(material=piso, marca=eliane)
        tinta_suvinil = MarcaMaterial(material=tinta, marca=suvinil)

        essencial = Padrao(name="Padrão Essencial", description="Linha de entrada")
        premium = Padrao(name="Padrão Premium")
        legado = Padrao(name="Padrão Legado", is_active=False)

        db.add_all([
            sala, cozinha, banheiro, sofa, mesa, pia,
            piso, tinta, vidro, portobello, eliane, suvinil,
            sala_sofa, sala_mesa, cozinha_mesa, cozinha_pia,
            piso_portobello, piso_eliane, tinta_suvinil,
            essencial, premium, legado,
        ])
        db.flush()

        ids = SimpleNamespace(
            sala=sala.id, cozinha=cozinha.id, banheiro=banheiro.id,
            sofa=sofa.id, mesa=mesa.id, pia=pia.id,
            piso=piso.id, tinta=tinta.id, vidro=vidro.id,
            portobello=portobello.id, eliane=eliane.id, suvinil=suvinil.id,
            sala_sofa=sala_sofa.id, sala_mesa=sala_mesa.id,
            cozinha_mesa=cozinha_mesa.id, cozinha_pia=cozinha_pia.id,
            piso_portobello=piso_portobello.id, piso_eliane=piso_eliane.id,
            tinta_suvinil=tinta_suvinil.id,
            essencial=essencial.id, premium=premium.id, legado=legado.id,
        )
    return ids


@pytest.fixture
def service(engine) -> ComposicaoService:
    return ComposicaoService(
        PadraoRepository(engine),
        ComposicaoAmbienteRepository(engine),
        ComposicaoMaterialRepository(engine),
        ItemAmbienteRepository(engine),
        MarcaMaterialRepository(engine),
        CatalogMapper(),
    )


# ============================================================================
# FLASK FIXTURES
# ============================================================================


@pytest.fixture
def app(catalog, database_uri):
    from src.app import create_app

    test_config = Config(
        SECRET_KEY="test-secret-key",
        APP_DEBUG=True,
        LOG_LEVEL="DEBUG",
        SQLALCHEMY_DATABASE_URI=database_uri,
    )
    flask_app = create_app(test_config)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


# ============================================================================
# HELPERS
# ============================================================================


def _count_rows(model) -> int:
    with get_db_session() as db:
        return db.scalar(select(func.count()).select_from(model))


@pytest.fixture
def row_count(engine):
    """Count composition rows by kind ('AMBIENTE' / 'MATERIAL') in a fresh unit of work."""
    models = {"AMBIENTE": ComposicaoAmbiente, "MATERIAL": ComposicaoMaterial}
    return lambda kind: _count_rows(models[kind])
