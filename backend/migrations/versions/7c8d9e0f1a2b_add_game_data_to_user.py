"""add currency, lives and unlocked_levels to user

Revision ID: 7c8d9e0f1a2b
Revises: 1a2b3c4d5e6f
Create Date: 2025-12-23 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '7c8d9e0f1a2b'
down_revision = '1a2b3c4d5e6f'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    cols = {c['name'] for c in insp.get_columns('user')}
    with op.batch_alter_table('user') as batch_op:
        if 'currency' not in cols:
            batch_op.add_column(sa.Column('currency', sa.Integer(), nullable=False, server_default='0'))
        if 'lives' not in cols:
            # New accounts start with no lives
            batch_op.add_column(sa.Column('lives', sa.Integer(), nullable=False, server_default='0'))
        if 'unlocked_levels' not in cols:
            batch_op.add_column(sa.Column('unlocked_levels', sa.Text(), nullable=True))


def downgrade():
    with op.batch_alter_table('user') as batch_op:
        batch_op.drop_column('unlocked_levels')
        batch_op.drop_column('lives')
        batch_op.drop_column('currency')
