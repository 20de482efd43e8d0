"""trigram index on people.for_search

Revision ID: 0002_for_search_trgm
Revises: 0001_people
Create Date: 2023-08-02

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers
revision: str = '0002_for_search_trgm'
down_revision: Union[str, None] = '0001_people'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # like '%term%' can only use a gin trigram index, which is postgres-only
    if op.get_bind().dialect.name != 'postgresql':
        return
    op.execute('CREATE EXTENSION IF NOT EXISTS pg_trgm')
    op.execute('CREATE INDEX IF NOT EXISTS ix_people_for_search_trgm ON people USING gin (for_search gin_trgm_ops)')


def downgrade() -> None:
    if op.get_bind().dialect.name != 'postgresql':
        return
    op.execute('DROP INDEX IF EXISTS ix_people_for_search_trgm')
