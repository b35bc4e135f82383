"""create_attendance_tables

Revision ID: 3f9a1c2d7e41
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9a1c2d7e41'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # users and events are projections of collaborator services; only the
    # columns the attendance core reads are created here
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('nim', sa.String(length=30), nullable=True),
        sa.Column('role', sa.String(length=30), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'attendance_tokens',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('code', sa.String(length=32), nullable=False),
        sa.Column('label', sa.String(length=100), nullable=True),
        sa.Column('qr_code', sa.Text(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_attendance_tokens_code', 'attendance_tokens', ['code'], unique=True)
    op.create_index('idx_attendance_tokens_event', 'attendance_tokens', ['event_id'])

    op.create_table(
        'attendances',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token_id', sa.Integer(), sa.ForeignKey('attendance_tokens.id', ondelete='SET NULL'), nullable=True),
        sa.Column('token_label', sa.String(length=100), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('check_in_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'event_id', 'token_id', name='uq_attendance_user_event_token'),
    )
    op.create_index('idx_attendances_event', 'attendances', ['event_id'])
    op.create_index('idx_attendances_user', 'attendances', ['user_id'])


def downgrade():
    op.drop_index('idx_attendances_user', table_name='attendances')
    op.drop_index('idx_attendances_event', table_name='attendances')
    op.drop_table('attendances')

    op.drop_index('idx_attendance_tokens_event', table_name='attendance_tokens')
    op.drop_index('ix_attendance_tokens_code', table_name='attendance_tokens')
    op.drop_table('attendance_tokens')

    op.drop_table('events')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
