"""create phrases table

Revision ID: 20261019_1200_create_phrases
Revises:
Create Date: 2026-10-19 12:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20261019_1200_create_phrases'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'phrases',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('lang', sa.String(16), nullable=False, server_default=''),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('translation', sa.Text(), nullable=True),
        sa.Column('context', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('source_file', sa.Text(), nullable=True),
        sa.Column('content_hash', sa.String(32), nullable=True),
        sa.Column('line_no', sa.Integer(), nullable=True),
        sa.Column('col_offset', sa.Integer(), nullable=True),
    )
    op.create_index('ix_phrases_content_hash', 'phrases', ['content_hash'])
    op.create_index('ix_phrases_source_file', 'phrases', ['source_file'])

def downgrade() -> None:
    op.drop_index('ix_phrases_source_file', table_name='phrases')
    op.drop_index('ix_phrases_content_hash', table_name='phrases')
    op.drop_table('phrases')
