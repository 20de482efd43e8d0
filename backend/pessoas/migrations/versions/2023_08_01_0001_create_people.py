"""create people table

Revision ID: 0001_people
Revises: 
Create Date: 2023-08-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers
revision: str = '0001_people'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'people',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('apelido', sa.String(), nullable=False),
        sa.Column('nome', sa.String(), nullable=False),
        sa.Column('nascimento', sa.Date(), nullable=False),
        sa.Column('stack', sa.JSON().with_variant(postgresql.ARRAY(sa.String()), 'postgresql'), nullable=True),
        sa.Column('for_search', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('apelido', name='uq_people_apelido')
    )


def downgrade() -> None:
    op.drop_table('people')
