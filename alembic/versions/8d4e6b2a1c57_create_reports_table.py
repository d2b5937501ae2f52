"""create reports table

Revision ID: 8d4e6b2a1c57
Revises: 3a1f0c7d2b9e
Create Date: 2026-09-28 10:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mysql


# revision identifiers, used by Alembic.
revision: str = '8d4e6b2a1c57'
down_revision: Union[str, Sequence[str], None] = '3a1f0c7d2b9e'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp() -> sa.types.TypeEngine:
    return sa.DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), 'mysql')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'reports',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('created_at', _timestamp(), nullable=False),
        sa.Column('updated_at', _timestamp(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('report_id', sa.String(length=36), nullable=False),
        sa.Column('reporter_id', sa.String(length=36), nullable=False),
        sa.Column('target_type', sa.Enum('job', 'meetup', name='report_target_type'), nullable=False),
        sa.Column('target_id', sa.String(length=36), nullable=False),
        sa.Column('reason', sa.Text(), nullable=False),
        sa.Column(
            'status',
            sa.Enum('pending', 'resolved', 'removed', name='report_status'),
            nullable=False,
            server_default='pending',
        ),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('moderated_by', sa.String(length=36), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
    )
    op.create_index('ix_reports_id', 'reports', ['id'])
    op.create_index('ix_reports_report_id', 'reports', ['report_id'], unique=True)
    op.create_index('ix_reports_reporter_id', 'reports', ['reporter_id'])
    op.create_index('ix_reports_target_type', 'reports', ['target_type'])
    op.create_index('ix_reports_target_id', 'reports', ['target_id'])
    op.create_index('ix_reports_status', 'reports', ['status'])
    op.create_index('ix_reports_moderated_by', 'reports', ['moderated_by'])
    op.create_index('ix_reports_is_active', 'reports', ['is_active'])
    op.create_index('ix_reports_status_target_type', 'reports', ['status', 'target_type'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('reports')
