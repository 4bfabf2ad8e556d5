"""create users and analyses tables

Revision ID: create_users_and_analyses
Revises:
Create Date: 2026-10-19

Creates the users table and the analyses table with its optional owner.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine.reflection import Inspector

# revision identifiers, used by Alembic.
revision: str = 'create_users_and_analyses'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Get connection and inspector
    conn = op.get_bind()
    inspector = Inspector.from_engine(conn)
    existing_tables = inspector.get_table_names()

    if 'users' not in existing_tables:
        op.create_table(
            'users',
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column('email', sa.String(255), unique=True, nullable=False, index=True),
            sa.Column('name', sa.String(255), nullable=True),
            sa.Column('hashed_password', sa.String(255), nullable=False),
            sa.Column(
                'created_at',
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.func.now()
            ),
            sa.Column(
                'updated_at',
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.func.now()
            ),
        )

    if 'analyses' not in existing_tables:
        op.create_table(
            'analyses',
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column('text', sa.Text(), nullable=False),
            sa.Column('summary', sa.Text(), nullable=True),
            sa.Column('meaning', sa.Text(), nullable=True),
            sa.Column('poetic_devices', postgresql.JSONB(), nullable=False, server_default='[]'),
            sa.Column('themes', postgresql.JSONB(), nullable=False, server_default='[]'),
            sa.Column('emotional_tone', sa.Text(), nullable=True),
            sa.Column('historical_context', sa.Text(), nullable=True),
            sa.Column('word_analysis', postgresql.JSONB(), nullable=True),
            sa.Column('interpretation', sa.Text(), nullable=True),
            sa.Column('english_translation', sa.Text(), nullable=True),
            sa.Column('is_favorite', sa.Boolean(), nullable=False, server_default='false'),
            sa.Column('tags', postgresql.JSONB(), nullable=False, server_default='[]'),
            sa.Column(
                'user_id',
                sa.String(36),
                sa.ForeignKey('users.id', ondelete='SET NULL'),
                nullable=True,
            ),
            sa.Column(
                'created_at',
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.func.now()
            ),
            sa.Column(
                'updated_at',
                sa.DateTime(timezone=True),
                nullable=False,
                server_default=sa.func.now()
            ),
        )
        op.create_index('ix_analyses_user_id', 'analyses', ['user_id'])
        op.create_index('ix_analyses_created_at', 'analyses', ['created_at'])
        op.create_index('ix_analyses_is_favorite', 'analyses', ['is_favorite'])


def downgrade() -> None:
    # Get connection and inspector
    conn = op.get_bind()
    inspector = Inspector.from_engine(conn)
    existing_tables = inspector.get_table_names()

    if 'analyses' in existing_tables:
        op.drop_index('ix_analyses_is_favorite', table_name='analyses')
        op.drop_index('ix_analyses_created_at', table_name='analyses')
        op.drop_index('ix_analyses_user_id', table_name='analyses')
        op.drop_table('analyses')

    if 'users' in existing_tables:
        op.drop_table('users')
