"""create match_record table

Revision ID: 5c2d9e71a0b4
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d9e71a0b4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'match_record',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('room_id', sa.String(length=128), nullable=False),
        sa.Column('target_color', sa.String(length=6), nullable=False),
        sa.Column('player1_won', sa.Boolean(), nullable=False),
        sa.Column('player1_time', sa.Integer(), nullable=False),
        sa.Column('player2_won', sa.Boolean(), nullable=False),
        sa.Column('player2_time', sa.Integer(), nullable=False),
        sa.Column('winner', sa.Integer(), nullable=True),
        sa.Column('message', sa.String(length=128), nullable=False),
        sa.Column('finished_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('match_record') as batch_op:
        batch_op.create_index('ix_match_record_room_id', ['room_id'], unique=False)
        batch_op.create_index('ix_match_record_finished_at', ['finished_at'], unique=False)


def downgrade():
    with op.batch_alter_table('match_record') as batch_op:
        batch_op.drop_index('ix_match_record_finished_at')
        batch_op.drop_index('ix_match_record_room_id')
    op.drop_table('match_record')
