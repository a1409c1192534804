# src/domain/composicao.py
# Define os modelos ORM das composições (registros de junção Padrão <-> compositor).

from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.base import Base
from .catalog import Padrao, ItemAmbiente, MarcaMaterial
from .compositor_type import CompositorType

class ComposicaoAmbiente(Base):
    """
    Associa um Padrão a um ItemAmbiente. Possui identificador próprio,
    independente do Padrão e do compositor.
    """
    __tablename__ = 'composicao_ambiente'

    compositor_type = CompositorType.AMBIENTE

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    padrao_id: Mapped[int] = mapped_column(ForeignKey('padrao.id', ondelete='CASCADE'), nullable=False, index=True)
    compositor_id: Mapped[int] = mapped_column(ForeignKey('item_ambiente.id', ondelete='CASCADE'), nullable=False, index=True)

    padrao: Mapped["Padrao"] = relationship(back_populates="composicoes_ambiente", lazy="joined")
    compositor: Mapped["ItemAmbiente"] = relationship(lazy="joined")

    def __repr__(self):
        return f"<ComposicaoAmbiente(id={self.id}, padrao_id={self.padrao_id}, compositor_id={self.compositor_id})>"


class ComposicaoMaterial(Base):
    """
    Associa um Padrão a uma MarcaMaterial.
    """
    __tablename__ = 'composicao_material'

    compositor_type = CompositorType.MATERIAL

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    padrao_id: Mapped[int] = mapped_column(ForeignKey('padrao.id', ondelete='CASCADE'), nullable=False, index=True)
    compositor_id: Mapped[int] = mapped_column(ForeignKey('marca_material.id', ondelete='CASCADE'), nullable=False, index=True)

    padrao: Mapped["Padrao"] = relationship(back_populates="composicoes_material", lazy="joined")
    compositor: Mapped["MarcaMaterial"] = relationship(lazy="joined")

    def __repr__(self):
        return f"<ComposicaoMaterial(id={self.id}, padrao_id={self.padrao_id}, compositor_id={self.compositor_id})>"
