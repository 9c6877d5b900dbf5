"""Initial database schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19 09:12:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create documents table holding quizzes and attempts
    op.create_table(
        'documents',
        sa.Column('collection', sa.String(64), nullable=False),
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('seq', sa.Integer(), nullable=False),
        sa.Column('body', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('collection', 'id', name='pk_documents'),
        sa.UniqueConstraint('collection', 'seq', name='uq_documents_collection_seq')
    )
    op.create_index('ix_documents_seq', 'documents', ['seq'])


def downgrade():
    op.drop_index('ix_documents_seq', table_name='documents')
    op.drop_table('documents')
