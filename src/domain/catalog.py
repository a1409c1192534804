# src/domain/catalog.py
# Define os modelos ORM do catálogo: Padrão, famílias (Ambiente, Material),
# membros (Item, Marca) e os compositores ItemAmbiente / MarcaMaterial.

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any, TYPE_CHECKING
from sqlalchemy import Integer, Boolean, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import DateTime

from src.database.base import Base
from .compositor_type import CompositorType

if TYPE_CHECKING:
    from .composicao import ComposicaoAmbiente, ComposicaoMaterial

class Padrao(Base):
    """
    Representa um padrão do catálogo, ao qual itens de ambiente e marcas de
    material são associados por meio de composições.
    """
    __tablename__ = 'padrao'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    composicoes_ambiente: Mapped[List["ComposicaoAmbiente"]] = relationship(
        back_populates="padrao", cascade="all, delete-orphan", order_by="ComposicaoAmbiente.id"
    )
    composicoes_material: Mapped[List["ComposicaoMaterial"]] = relationship(
        back_populates="padrao", cascade="all, delete-orphan", order_by="ComposicaoMaterial.id"
    )

    def __repr__(self):
        return f"<Padrao(id={self.id}, name='{self.name}', active={self.is_active})>"


class _NamedEntity:
    """Colunas comuns às entidades simples do catálogo (id + nome único)."""
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id}, name='{self.name}')>"


class Ambiente(_NamedEntity, Base):
    __tablename__ = 'ambiente'


class Item(_NamedEntity, Base):
    __tablename__ = 'item'


class Material(_NamedEntity, Base):
    __tablename__ = 'material'


class Marca(_NamedEntity, Base):
    __tablename__ = 'marca'


class ItemAmbiente(Base):
    """
    Um item posicionado em um ambiente. Compositor da família Ambiente.
    """
    __tablename__ = 'item_ambiente'
    __table_args__ = (
        UniqueConstraint('ambiente_id', 'item_id', name='uq_item_ambiente_ambiente_item'),
    )

    compositor_type = CompositorType.AMBIENTE

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    ambiente_id: Mapped[int] = mapped_column(ForeignKey('ambiente.id', ondelete='CASCADE'), nullable=False, index=True)
    item_id: Mapped[int] = mapped_column(ForeignKey('item.id', ondelete='CASCADE'), nullable=False, index=True)

    ambiente: Mapped["Ambiente"] = relationship(lazy="joined")
    item: Mapped["Item"] = relationship(lazy="joined")

    @property
    def family(self) -> "Ambiente":
        return self.ambiente

    @property
    def member(self) -> "Item":
        return self.item

    def __repr__(self):
        return f"<ItemAmbiente(id={self.id}, ambiente_id={self.ambiente_id}, item_id={self.item_id})>"


class MarcaMaterial(Base):
    """
    Uma marca disponível para um material. Compositor da família Material.
    """
    __tablename__ = 'marca_material'
    __table_args__ = (
        UniqueConstraint('material_id', 'marca_id', name='uq_marca_material_material_marca'),
    )

    compositor_type = CompositorType.MATERIAL

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    material_id: Mapped[int] = mapped_column(ForeignKey('material.id', ondelete='CASCADE'), nullable=False, index=True)
    marca_id: Mapped[int] = mapped_column(ForeignKey('marca.id', ondelete='CASCADE'), nullable=False, index=True)

    material: Mapped["Material"] = relationship(lazy="joined")
    marca: Mapped["Marca"] = relationship(lazy="joined")

    @property
    def family(self) -> "Material":
        return self.material

    @property
    def member(self) -> "Marca":
        return self.marca

    def __repr__(self):
        return f"<MarcaMaterial(id={self.id}, material_id={self.material_id}, marca_id={self.marca_id})>"
