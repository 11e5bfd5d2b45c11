"""create_booking_tables

Class sessions, learner profiles and bookings.

Revision ID: 3b1f7c2a9d10
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""
from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '3b1f7c2a9d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'class_sessions',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('scheduled_at', sa.DateTime(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('max_participants', sa.Integer(), nullable=False),
        sa.Column('current_participants', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('points_required', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('duration > 0', name='ck_class_sessions_duration_positive'),
        sa.CheckConstraint('max_participants > 0', name='ck_class_sessions_max_positive'),
        sa.CheckConstraint(
            'current_participants >= 0', name='ck_class_sessions_current_non_negative'
        ),
        sa.CheckConstraint(
            'current_participants <= max_participants', name='ck_class_sessions_within_capacity'
        ),
        sa.CheckConstraint('points_required >= 0', name='ck_class_sessions_points_non_negative'),
    )
    op.create_index(op.f('ix_class_sessions_scheduled_at'), 'class_sessions', ['scheduled_at'])
    op.create_index(op.f('ix_class_sessions_is_active'), 'class_sessions', ['is_active'])

    op.create_table(
        'profiles',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('display_name', sa.String(100), nullable=False, server_default=''),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('points >= 0', name='ck_profiles_points_non_negative'),
    )
    op.create_index(op.f('ix_profiles_user_id'), 'profiles', ['user_id'], unique=True)

    op.create_table(
        'bookings',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('session_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('cancelled_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['session_id'], ['class_sessions.id']),
    )
    op.create_index(op.f('ix_bookings_user_id'), 'bookings', ['user_id'])
    op.create_index(op.f('ix_bookings_session_id'), 'bookings', ['session_id'])
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'])

    # Partial: cancelled bookings don't block rebooking
    op.execute(
        """
        CREATE UNIQUE INDEX uq_bookings_one_active_per_user_session
        ON bookings(user_id, session_id)
        WHERE status = 'ACTIVE';
        """
    )


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS uq_bookings_one_active_per_user_session;")
    op.drop_index(op.f('ix_bookings_status'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_session_id'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_user_id'), table_name='bookings')
    op.drop_table('bookings')
    op.drop_index(op.f('ix_profiles_user_id'), table_name='profiles')
    op.drop_table('profiles')
    op.drop_index(op.f('ix_class_sessions_is_active'), table_name='class_sessions')
    op.drop_index(op.f('ix_class_sessions_scheduled_at'), table_name='class_sessions')
    op.drop_table('class_sessions')
