# alembic/versions/3f1c9a7d2b40_create_catalog_composition_tables.py
"""Create catalog and composition tables

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-19 09:12:04.518233

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_NAMED_TABLES = ('ambiente', 'item', 'material', 'marca')


def upgrade() -> None:
    op.create_table(
        'padrao',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_padrao')),
    )
    op.create_index(op.f('ix_padrao_name'), 'padrao', ['name'], unique=True)

    for table in _NAMED_TABLES:
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.Text(), nullable=False),
            sa.PrimaryKeyConstraint('id', name=op.f(f'pk_{table}')),
            sa.UniqueConstraint('name', name=op.f(f'uq_{table}_name')),
        )

    # Compositores: (família, membro)
    op.create_table(
        'item_ambiente',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ambiente_id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['ambiente_id'], ['ambiente.id'], name=op.f('fk_item_ambiente_ambiente_id_ambiente'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['item_id'], ['item.id'], name=op.f('fk_item_ambiente_item_id_item'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_item_ambiente')),
        sa.UniqueConstraint('ambiente_id', 'item_id', name='uq_item_ambiente_ambiente_item'),
    )
    op.create_index(op.f('ix_item_ambiente_ambiente_id'), 'item_ambiente', ['ambiente_id'])
    op.create_index(op.f('ix_item_ambiente_item_id'), 'item_ambiente', ['item_id'])

    op.create_table(
        'marca_material',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('material_id', sa.Integer(), nullable=False),
        sa.Column('marca_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['material_id'], ['material.id'], name=op.f('fk_marca_material_material_id_material'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['marca_id'], ['marca.id'], name=op.f('fk_marca_material_marca_id_marca'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_marca_material')),
        sa.UniqueConstraint('material_id', 'marca_id', name='uq_marca_material_material_marca'),
    )
    op.create_index(op.f('ix_marca_material_material_id'), 'marca_material', ['material_id'])
    op.create_index(op.f('ix_marca_material_marca_id'), 'marca_material', ['marca_id'])

    # Composições: (padrão, compositor)
    for table, compositor_table in (('composicao_ambiente', 'item_ambiente'),
                                    ('composicao_material', 'marca_material')):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('padrao_id', sa.Integer(), nullable=False),
            sa.Column('compositor_id', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['padrao_id'], ['padrao.id'], name=op.f(f'fk_{table}_padrao_id_padrao'), ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['compositor_id'], [f'{compositor_table}.id'], name=op.f(f'fk_{table}_compositor_id_{compositor_table}'), ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id', name=op.f(f'pk_{table}')),
        )
        op.create_index(op.f(f'ix_{table}_padrao_id'), table, ['padrao_id'])
        op.create_index(op.f(f'ix_{table}_compositor_id'), table, ['compositor_id'])


def downgrade() -> None:
    for table in ('composicao_material', 'composicao_ambiente'):
        op.drop_index(op.f(f'ix_{table}_compositor_id'), table_name=table)
        op.drop_index(op.f(f'ix_{table}_padrao_id'), table_name=table)
        op.drop_table(table)

    op.drop_index(op.f('ix_marca_material_marca_id'), table_name='marca_material')
    op.drop_index(op.f('ix_marca_material_material_id'), table_name='marca_material')
    op.drop_table('marca_material')
    op.drop_index(op.f('ix_item_ambiente_item_id'), table_name='item_ambiente')
    op.drop_index(op.f('ix_item_ambiente_ambiente_id'), table_name='item_ambiente')
    op.drop_table('item_ambiente')

    for table in reversed(_NAMED_TABLES):
        op.drop_table(table)

    op.drop_index(op.f('ix_padrao_name'), table_name='padrao')
    op.drop_table('padrao')
