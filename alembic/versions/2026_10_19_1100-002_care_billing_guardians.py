"""Horse care events, monthly billing summaries and guardian links

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 11:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

String = sqlmodel.sql.sqltypes.AutoString


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
    ]


def upgrade() -> None:
    """Add care events, billing summaries, guardian links and the columns they rely on."""
    op.create_table('horse_events', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('horse_id', sa.Integer(), nullable=False),
        sa.Column('event_type', String(length=30), nullable=False),
        sa.Column('event_date', sa.DateTime(), nullable=False),
        sa.Column('provider_name', String(length=255), nullable=True),
        sa.Column('description', String(length=2000), nullable=True),
        sa.Column('cost', sa.Float(), nullable=True),
        sa.Column('notes', String(length=2000), nullable=True),
        sa.Column('status', String(length=20), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('next_due_date', sa.DateTime(), nullable=True),
        sa.Column('is_recurring', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('recurrence_weeks', sa.Integer(), nullable=True),
        sa.Column('reminder_weeks_before', sa.Integer(), nullable=True),
        sa.Column('reminder_email', String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['horse_id'], ['horses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_horse_events_horse_id'), 'horse_events', ['horse_id'])
    op.create_index(op.f('ix_horse_events_event_date'), 'horse_events', ['event_date'])

    op.create_table('monthly_billing_summaries', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trainer_email', String(length=255), nullable=False),
        sa.Column('rider_email', String(length=255), nullable=False),
        sa.Column('month', String(length=7), nullable=False),
        sa.Column('sessions_revenue', sa.Float(), nullable=False),
        sa.Column('competitions_revenue', sa.Float(), nullable=False),
        sa.Column('total_revenue', sa.Float(), nullable=False),
        sa.Column('currency', String(length=3), nullable=False),
        sa.Column('session_count', sa.Integer(), nullable=False),
        sa.Column('payment_requested', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payment_status', String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('trainer_email', 'rider_email', 'month', name='uq_billing_summary_trainer_rider_month'))
    op.create_index(op.f('ix_monthly_billing_summaries_trainer_email'), 'monthly_billing_summaries',
                    ['trainer_email'])
    op.create_index(op.f('ix_monthly_billing_summaries_rider_email'), 'monthly_billing_summaries', ['rider_email'])
    op.create_index(op.f('ix_monthly_billing_summaries_month'), 'monthly_billing_summaries', ['month'])

    op.create_table('guardian_links', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('guardian_email', String(length=255), nullable=False),
        sa.Column('minor_email', String(length=255), nullable=False),
        sa.Column('status', String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('guardian_email', 'minor_email', name='uq_guardian_link_guardian_minor'))
    op.create_index(op.f('ix_guardian_links_guardian_email'), 'guardian_links', ['guardian_email'])
    op.create_index(op.f('ix_guardian_links_minor_email'), 'guardian_links', ['minor_email'])

    with op.batch_alter_table('training_sessions') as batch_op:
        batch_op.add_column(sa.Column('rider_verified', sa.Boolean(), nullable=False, server_default=sa.false()))
        batch_op.add_column(sa.Column('rider_verified_at', sa.DateTime(), nullable=True))

    with op.batch_alter_table('users') as batch_op:
        batch_op.add_column(sa.Column('birthday', sa.Date(), nullable=True))
        batch_op.add_column(sa.Column('parent_email', String(length=255), nullable=True))


def downgrade() -> None:
    """Drop what upgrade added."""
    with op.batch_alter_table('users') as batch_op:
        batch_op.drop_column('parent_email')
        batch_op.drop_column('birthday')

    with op.batch_alter_table('training_sessions') as batch_op:
        batch_op.drop_column('rider_verified_at')
        batch_op.drop_column('rider_verified')

    for table in ('guardian_links', 'monthly_billing_summaries', 'horse_events'):
        op.drop_table(table)
