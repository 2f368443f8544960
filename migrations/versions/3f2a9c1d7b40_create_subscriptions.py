"""create subscriptions

Revision ID: 3f2a9c1d7b40
Revises:
Create Date: 2025-08-18 12:04:31.118402

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('service_name', sa.String(length=100), nullable=False),
        sa.Column('cost', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('cost >= 0', name='ck_subscriptions_cost'),
        sa.CheckConstraint('end_date IS NULL OR end_date >= start_date', name='ck_subscriptions_period'),
        sa.CheckConstraint('extract(day from start_date) = 1', name='ck_subscriptions_start_month'),
        sa.CheckConstraint('end_date IS NULL OR extract(day from end_date) = 1', name='ck_subscriptions_end_month'),
    )
    op.create_index('ix_subscriptions_user_id', 'subscriptions', ['user_id'])
    op.create_index('ix_subscriptions_service_name', 'subscriptions', ['service_name'])
    op.create_index('ix_subscriptions_start_date', 'subscriptions', ['start_date'])
    op.create_index('ix_subscriptions_end_date', 'subscriptions', ['end_date'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_subscriptions_end_date', table_name='subscriptions')
    op.drop_index('ix_subscriptions_start_date', table_name='subscriptions')
    op.drop_index('ix_subscriptions_service_name', table_name='subscriptions')
    op.drop_index('ix_subscriptions_user_id', table_name='subscriptions')
    op.drop_table('subscriptions')
