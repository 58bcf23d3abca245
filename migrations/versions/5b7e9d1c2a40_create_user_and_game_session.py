"""create user and game_session tables

Revision ID: 5b7e9d1c2a40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5b7e9d1c2a40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'user' not in existing_tables:
        op.create_table(
            'user',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('username', sa.String(length=64), nullable=False),
            sa.Column('password_hash', sa.String(length=256), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_user_username', 'user', ['username'], unique=True)

    if 'game_session' not in existing_tables:
        op.create_table(
            'game_session',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('session_id', sa.String(length=36), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=True),
            sa.Column('game', sa.String(length=32), nullable=False),
            sa.Column('config', sa.JSON(), nullable=False),
            sa.Column('content', sa.JSON(), nullable=False),
            sa.Column('progress', sa.JSON(), nullable=False),
            sa.Column('completed', sa.Boolean(), nullable=False),
            sa.Column('start_time', sa.Float(), nullable=False),
            sa.Column('end_time', sa.Float(), nullable=True),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('version', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['user_id'], ['user.id']),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_game_session_session_id', 'game_session', ['session_id'], unique=True)
        op.create_index('ix_game_session_user_id', 'game_session', ['user_id'])
        op.create_index('ix_game_session_game', 'game_session', ['game'])
        op.create_index('ix_game_session_completed', 'game_session', ['completed'])
        op.create_index('ix_game_session_user_game', 'game_session', ['user_id', 'game'])


def downgrade():
    op.drop_index('ix_game_session_user_game', table_name='game_session')
    op.drop_index('ix_game_session_completed', table_name='game_session')
    op.drop_index('ix_game_session_game', table_name='game_session')
    op.drop_index('ix_game_session_user_id', table_name='game_session')
    op.drop_index('ix_game_session_session_id', table_name='game_session')
    op.drop_table('game_session')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
