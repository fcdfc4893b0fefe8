"""Create user profiles and syncable household records

Revision ID: 3f7a1c0d9b24
Revises:
Create Date: 2026-10-19

user_profiles holds each user's Google Calendar credential. The three record
tables share the calendar sync columns; calendar_event_id links a record to
the event created for it.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f7a1c0d9b24'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RECORD_TABLES = ('plant_care_tasks', 'projects', 'simple_tasks')


def _record_columns() -> list[sa.Column]:
    return [
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('calendar_event_id', sa.String(length=1024), nullable=True),
        sa.Column('id', sa.CHAR(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table('user_profiles',
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('calendar_connected', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('calendar_access_token', sa.Text(), nullable=True),
        sa.Column('calendar_refresh_token', sa.Text(), nullable=True),
        sa.Column('calendar_token_expiry', sa.DateTime(timezone=True), nullable=True),
        sa.Column('id', sa.CHAR(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('user_profiles', schema=None) as batch_op:
        batch_op.create_index('ix_user_profiles_user_id', ['user_id'], unique=True)

    op.create_table('plant_care_tasks',
        *_record_columns(),
        sa.Column('plant_name', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table('projects',
        *_record_columns(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table('simple_tasks',
        *_record_columns(),
        sa.PrimaryKeyConstraint('id')
    )

    for table in RECORD_TABLES:
        with op.batch_alter_table(table, schema=None) as batch_op:
            batch_op.create_index(f'ix_{table}_user_id', ['user_id'], unique=False)
            batch_op.create_index(f'ix_{table}_user_due', ['user_id', 'due_date'], unique=False)


def downgrade() -> None:
    for table in reversed(RECORD_TABLES):
        with op.batch_alter_table(table, schema=None) as batch_op:
            batch_op.drop_index(f'ix_{table}_user_due')
            batch_op.drop_index(f'ix_{table}_user_id')
        op.drop_table(table)

    with op.batch_alter_table('user_profiles', schema=None) as batch_op:
        batch_op.drop_index('ix_user_profiles_user_id')
    op.drop_table('user_profiles')
