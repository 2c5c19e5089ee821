"""create_records_table

Revision ID: 3c1f7a92d0e4
Revises:
Create Date: 2026-10-19 09:00:00.000000

A single table holds every entity kind (projects, users, tasks,
materials, costs, files, custom_statuses) as JSON payloads addressed by
(kind, record_id).
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1f7a92d0e4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('records',
        sa.Column('kind', sa.String(length=50), nullable=False),
        sa.Column('record_id', sa.String(length=100), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('kind', 'record_id')
    )
    op.create_index('ix_records_kind_position', 'records', ['kind', 'position'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_records_kind_position', table_name='records')
    op.drop_table('records')
