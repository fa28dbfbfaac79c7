"""Initial RidersOS schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

String = sqlmodel.sql.sqltypes.AutoString


def _timestamps(updated: bool = True) -> list:
    columns = [sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)'))]
    if updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')))
    return columns


def upgrade() -> None:
    """Create all tables."""
    op.create_table('users', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', String(length=255), nullable=False),
        sa.Column('hashed_password', String(), nullable=True),
        sa.Column('google_id', String(length=255), nullable=True),
        sa.Column('first_name', String(length=120), nullable=True),
        sa.Column('last_name', String(length=120), nullable=True),
        sa.Column('full_name', String(length=255), nullable=True),
        sa.Column('profile_image', String(), nullable=True),
        sa.Column('roles', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_google_id'), 'users', ['google_id'])

    op.create_table('stables', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', String(length=255), nullable=False),
        sa.Column('manager_email', String(length=255), nullable=False),
        sa.Column('trainer_emails', sa.JSON(), nullable=False),
        sa.Column('approval_status', String(length=20), nullable=False),
        sa.Column('address', String(length=500), nullable=True),
        sa.Column('city', String(length=120), nullable=True),
        sa.Column('state', String(length=120), nullable=True),
        sa.Column('country', String(length=120), nullable=True),
        sa.Column('phone', String(length=50), nullable=True),
        sa.Column('email', String(length=255), nullable=True),
        sa.Column('description', String(length=5000), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_stables_manager_email'), 'stables', ['manager_email'])
    op.create_index(op.f('ix_stables_approval_status'), 'stables', ['approval_status'])

    op.create_table('stable_events', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('stable_id', sa.Integer(), nullable=False),
        sa.Column('title', String(length=255), nullable=False),
        sa.Column('event_type', String(length=30), nullable=False),
        sa.Column('description', String(length=5000), nullable=True),
        sa.Column('event_date', sa.DateTime(), nullable=False),
        sa.Column('location', String(length=500), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['stable_id'], ['stables.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_stable_events_stable_id'), 'stable_events', ['stable_id'])
    op.create_index(op.f('ix_stable_events_event_date'), 'stable_events', ['event_date'])

    op.create_table('horses', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_email', String(length=255), nullable=False),
        sa.Column('name', String(length=255), nullable=False),
        sa.Column('breed', String(length=120), nullable=True),
        sa.Column('birth_year', sa.Integer(), nullable=True),
        sa.Column('color', String(length=60), nullable=True),
        sa.Column('notes', String(length=2000), nullable=True),
        sa.Column('stable_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['stable_id'], ['stables.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_horses_owner_email'), 'horses', ['owner_email'])

    op.create_table('training_sessions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trainer_email', String(length=255), nullable=False),
        sa.Column('rider_email', String(length=255), nullable=False),
        sa.Column('rider_name', String(length=255), nullable=True),
        sa.Column('horse_name', String(length=255), nullable=True),
        sa.Column('session_date', sa.DateTime(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('session_type', String(length=50), nullable=False),
        sa.Column('notes', String(length=2000), nullable=True),
        sa.Column('status', String(length=20), nullable=False),
        sa.Column('is_recurring', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('recurring_group_id', String(length=64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_training_sessions_trainer_email'), 'training_sessions', ['trainer_email'])
    op.create_index(op.f('ix_training_sessions_rider_email'), 'training_sessions', ['rider_email'])
    op.create_index(op.f('ix_training_sessions_session_date'), 'training_sessions', ['session_date'])
    op.create_index(op.f('ix_training_sessions_recurring_group_id'), 'training_sessions', ['recurring_group_id'])

    op.create_table('competitions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trainer_email', String(length=255), nullable=False),
        sa.Column('name', String(length=255), nullable=False),
        sa.Column('competition_date', sa.DateTime(), nullable=False),
        sa.Column('location', String(length=500), nullable=False),
        sa.Column('stable_id', sa.Integer(), nullable=True),
        sa.Column('notes', String(length=2000), nullable=True),
        sa.Column('status', String(length=20), nullable=False),
        sa.Column('riders', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['stable_id'], ['stables.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_competitions_trainer_email'), 'competitions', ['trainer_email'])
    op.create_index(op.f('ix_competitions_competition_date'), 'competitions', ['competition_date'])

    op.create_table('billing_rates', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trainer_email', String(length=255), nullable=False),
        sa.Column('session_type', String(length=50), nullable=False),
        sa.Column('currency', String(length=3), nullable=False),
        sa.Column('rate', sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('trainer_email', 'session_type', name='uq_billing_trainer_type'))
    op.create_index(op.f('ix_billing_rates_trainer_email'), 'billing_rates', ['trainer_email'])

    op.create_table('user_connections', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('from_user_email', String(length=255), nullable=False),
        sa.Column('to_user_email', String(length=255), nullable=False),
        sa.Column('connection_type', String(length=50), nullable=False),
        sa.Column('status', String(length=20), nullable=False),
        sa.Column('message', String(length=1000), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('from_user_email', 'to_user_email', 'connection_type',
                            name='uq_connection_from_to_type'))
    op.create_index(op.f('ix_user_connections_from_user_email'), 'user_connections', ['from_user_email'])
    op.create_index(op.f('ix_user_connections_to_user_email'), 'user_connections', ['to_user_email'])

    op.create_table('notifications', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_email', String(length=255), nullable=False),
        sa.Column('type', String(length=50), nullable=False),
        sa.Column('title', String(length=255), nullable=False),
        sa.Column('message', String(length=2000), nullable=False),
        sa.Column('related_entity_type', String(length=50), nullable=True),
        sa.Column('related_entity_id', String(length=64), nullable=True),
        sa.Column('link', String(length=500), nullable=True),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('email_sent_at', sa.DateTime(), nullable=True),
        sa.Column('delivery_attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_error', String(length=1000), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_notifications_user_email'), 'notifications', ['user_email'])
    op.create_index(op.f('ix_notifications_read'), 'notifications', ['read'])

    op.create_table('notification_preferences', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_email', String(length=255), nullable=False),
        sa.Column('notification_type', String(length=50), nullable=False),
        sa.Column('email_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('in_app_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_email', 'notification_type', name='uq_notification_pref_user_type'))
    op.create_index(op.f('ix_notification_preferences_user_email'), 'notification_preferences', ['user_email'])

    op.create_table('contact_messages', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', String(length=30), nullable=False),
        sa.Column('subject', String(length=255), nullable=False),
        sa.Column('message', String(length=5000), nullable=False),
        sa.Column('sender_name', String(length=255), nullable=True),
        sa.Column('sender_email', String(length=255), nullable=True),
        sa.Column('status', String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_contact_messages_status'), 'contact_messages', ['status'])


def downgrade() -> None:
    """Drop all tables."""
    for table in ('contact_messages', 'notification_preferences', 'notifications', 'user_connections',
                  'billing_rates', 'competitions', 'training_sessions', 'horses', 'stable_events', 'stables',
                  'users'):
        op.drop_table(table)
