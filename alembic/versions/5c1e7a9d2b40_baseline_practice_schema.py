"""baseline_practice_schema

Revision ID: 5c1e7a9d2b40
Revises: 
Create Date: 2026-10-18 09:12:44.118203

Creates users, templates, personas, sessions, messages, feedback and preferences.
Only creates tables that do not exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('first_name', sa.String(), nullable=True),
            sa.Column('last_name', sa.String(), nullable=True),
            sa.Column('profile_image_url', sa.String(), nullable=True),
            sa.Column('password_hash', sa.String(), nullable=True),
            sa.Column('auth_provider', sa.String(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if not table_exists('practice_templates'):
        op.create_table('practice_templates',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('category', sa.String(), nullable=False),
            sa.Column('rubric_items', sa.JSON(), nullable=False),
            sa.Column('default_questions', sa.JSON(), nullable=False),
            sa.Column('difficulty', sa.String(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_practice_templates_id'), 'practice_templates', ['id'], unique=False)

    if not table_exists('interviewer_personas'):
        op.create_table('interviewer_personas',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('style', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('system_prompt', sa.Text(), nullable=False),
            sa.Column('avatar_url', sa.String(), nullable=True),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_interviewer_personas_id'), 'interviewer_personas', ['id'], unique=False)

    if not table_exists('practice_sessions'):
        op.create_table('practice_sessions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('template_id', sa.Integer(), nullable=True),
            sa.Column('persona_id', sa.Integer(), nullable=True),
            sa.Column('role', sa.String(), nullable=True),
            sa.Column('company', sa.String(), nullable=True),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['template_id'], ['practice_templates.id'], ),
            sa.ForeignKeyConstraint(['persona_id'], ['interviewer_personas.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_practice_sessions_id'), 'practice_sessions', ['id'], unique=False)
        op.create_index(op.f('ix_practice_sessions_user_id'), 'practice_sessions', ['user_id'], unique=False)
        op.create_index('idx_practice_sessions_user_created', 'practice_sessions', ['user_id', 'created_at'], unique=False)

    if not table_exists('session_messages'):
        op.create_table('session_messages',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('session_id', sa.Integer(), nullable=False),
            sa.Column('role', sa.String(length=20), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['session_id'], ['practice_sessions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_session_messages_id'), 'session_messages', ['id'], unique=False)
        op.create_index(op.f('ix_session_messages_session_id'), 'session_messages', ['session_id'], unique=False)
        op.create_index('idx_session_messages_session_created', 'session_messages', ['session_id', 'created_at'], unique=False)

    if not table_exists('session_feedback'):
        op.create_table('session_feedback',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('session_id', sa.Integer(), nullable=False),
            sa.Column('overall_score', sa.Integer(), nullable=True),
            sa.Column('rubric_scores', sa.JSON(), nullable=True),
            sa.Column('strengths', sa.JSON(), nullable=True),
            sa.Column('improvements', sa.JSON(), nullable=True),
            sa.Column('summary', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['session_id'], ['practice_sessions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_session_feedback_id'), 'session_feedback', ['id'], unique=False)
        op.create_index(op.f('ix_session_feedback_session_id'), 'session_feedback', ['session_id'], unique=True)

    if not table_exists('user_preferences'):
        op.create_table('user_preferences',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.String(), nullable=False),
            sa.Column('intent', sa.String(), nullable=True),
            sa.Column('onboarding_complete', sa.Boolean(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_user_preferences_id'), 'user_preferences', ['id'], unique=False)
        op.create_index(op.f('ix_user_preferences_user_id'), 'user_preferences', ['user_id'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_user_preferences_user_id'), table_name='user_preferences')
    op.drop_index(op.f('ix_user_preferences_id'), table_name='user_preferences')
    op.drop_table('user_preferences')

    op.drop_index(op.f('ix_session_feedback_session_id'), table_name='session_feedback')
    op.drop_index(op.f('ix_session_feedback_id'), table_name='session_feedback')
    op.drop_table('session_feedback')

    op.drop_index('idx_session_messages_session_created', table_name='session_messages')
    op.drop_index(op.f('ix_session_messages_session_id'), table_name='session_messages')
    op.drop_index(op.f('ix_session_messages_id'), table_name='session_messages')
    op.drop_table('session_messages')

    op.drop_index('idx_practice_sessions_user_created', table_name='practice_sessions')
    op.drop_index(op.f('ix_practice_sessions_user_id'), table_name='practice_sessions')
    op.drop_index(op.f('ix_practice_sessions_id'), table_name='practice_sessions')
    op.drop_table('practice_sessions')

    op.drop_index(op.f('ix_interviewer_personas_id'), table_name='interviewer_personas')
    op.drop_table('interviewer_personas')

    op.drop_index(op.f('ix_practice_templates_id'), table_name='practice_templates')
    op.drop_table('practice_templates')

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
