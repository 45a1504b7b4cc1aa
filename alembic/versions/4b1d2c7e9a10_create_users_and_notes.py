"""Create users and notes tables

Revision ID: 4b1d2c7e9a10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from notely.core.models.types import GUID, GUIDListType


# revision identifiers, used by Alembic.
revision: str = '4b1d2c7e9a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - users with a note index, notes owned by one user."""
    if op.get_context().dialect.supports_sequences:
        op.execute(sa.schema.CreateSequence(sa.Sequence('notes_seq_seq')))

    op.create_table(
        'users',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('note_ids', GUIDListType(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('username', name='uq_users_username'),
        sa.CheckConstraint('length(username) <= 50', name='ck_users_username_len'),
        sa.CheckConstraint('name IS NULL OR length(name) <= 100', name='ck_users_name_len'),
    )

    op.create_table(
        'notes',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('important', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('user_id', GUID(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('seq', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('idx_notes_user_id', 'notes', ['user_id'])
    op.create_index('idx_notes_seq', 'notes', ['seq'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_notes_seq', table_name='notes')
    op.drop_index('idx_notes_user_id', table_name='notes')
    op.drop_table('notes')
    op.drop_table('users')

    if op.get_context().dialect.supports_sequences:
        op.execute(sa.schema.DropSequence(sa.Sequence('notes_seq_seq')))
