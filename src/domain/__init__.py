# src/domain/__init__.py
# Makes 'domain' a package. Exports the catalog ORM models and response dataclasses.

# --- ORM Models ---
from .catalog import Padrao, Ambiente, Item, Material, Marca, ItemAmbiente, MarcaMaterial
from .composicao import ComposicaoAmbiente, ComposicaoMaterial

# --- Enums / Dataclasses ---
from .compositor_type import CompositorType
from .catalog_responses import LoadCatalogParams, CompositorResponse, ComposicaoResponse, PadraoResponse

__all__ = [
    # ORM Models
    "Padrao", "Ambiente", "Item", "Material", "Marca",
    "ItemAmbiente", "MarcaMaterial",
    "ComposicaoAmbiente", "ComposicaoMaterial",

    # Enums / Dataclasses
    "CompositorType",
    "LoadCatalogParams", "CompositorResponse", "ComposicaoResponse", "PadraoResponse",
]
