"""initial schema: users, tokens, jobs, meetups, notifications

Revision ID: 3a1f0c7d2b9e
Revises:
Create Date: 2026-09-28 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql


# revision identifiers, used by Alembic.
revision: str = '3a1f0c7d2b9e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp() -> sa.types.TypeEngine:
    return sa.DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), 'mysql')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', _timestamp(), nullable=False),
        sa.Column('updated_at', _timestamp(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        *_timestamps(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('role', sa.Enum('user', 'admin', name='user_role'), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.String(length=36), primary_key=True),
        *_timestamps(),
        sa.Column('token', sa.String(length=512), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.Column('revoked', sa.Boolean(), nullable=False),
        sa.Column('revoked_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_refresh_tokens_id', 'refresh_tokens', ['id'])
    op.create_index('ix_refresh_tokens_token', 'refresh_tokens', ['token'], unique=True)
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(length=36), primary_key=True),
        *_timestamps(),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('posted_by', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('company', sa.String(length=255), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])
    op.create_index('ix_jobs_is_active', 'jobs', ['is_active'])
    op.create_index('ix_jobs_posted_by', 'jobs', ['posted_by'])

    op.create_table(
        'meetups',
        sa.Column('id', sa.String(length=36), primary_key=True),
        *_timestamps(),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('meetup_date', sa.DateTime(), nullable=True),
        sa.Column('max_participants', sa.Integer(), nullable=True),
    )
    op.create_index('ix_meetups_id', 'meetups', ['id'])
    op.create_index('ix_meetups_is_active', 'meetups', ['is_active'])
    op.create_index('ix_meetups_created_by', 'meetups', ['created_by'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(length=36), primary_key=True),
        *_timestamps(),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('type', sa.String(length=64), nullable=False),
        sa.Column('content', sa.String(length=1024), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_notifications_id', 'notifications', ['id'])
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('notifications')
    op.drop_table('meetups')
    op.drop_table('jobs')
    op.drop_table('refresh_tokens')
    op.drop_table('users')
