"""create user and score tables

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2025-05-26 22:36:18.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('total_games', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('best_score', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)
    op.create_index('ix_user_best_score', 'user', ['best_score'], unique=False)

    op.create_table(
        'score',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('duration_seconds', sa.Integer(), nullable=False),
        sa.Column('difficulty', sa.String(length=16), nullable=False, server_default='normal'),
        sa.Column('stats', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_score_user_id', 'score', ['user_id'], unique=False)
    op.create_index('ix_score_difficulty', 'score', ['difficulty'], unique=False)
    op.create_index('ix_score_created_at', 'score', ['created_at'], unique=False)
    op.create_index('ix_score_user_score', 'score', ['user_id', 'score'], unique=False)
    op.create_index('ix_score_score_created', 'score', ['score', 'created_at'], unique=False)


def downgrade():
    op.drop_table('score')
    op.drop_index('ix_user_best_score', table_name='user')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
