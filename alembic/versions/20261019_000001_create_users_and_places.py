"""Create users, places and user_places tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

users and places are linked both ways: places.creator_id points at the
owner, user_places holds the owner's set of place ids.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users, places and user_places tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'places',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('creator_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['creator_id'],
            ['users.id'],
            name='fk_places_creator_id',
            ondelete='NO ACTION'
        ),
    )
    op.create_index('ix_places_creator_id', 'places', ['creator_id'])

    op.create_table(
        'user_places',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('place_id', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('user_id', 'place_id'),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['users.id'],
            name='fk_user_places_user_id',
            ondelete='NO ACTION'
        ),
        sa.ForeignKeyConstraint(
            ['place_id'],
            ['places.id'],
            name='fk_user_places_place_id',
            ondelete='NO ACTION'
        ),
        sa.UniqueConstraint('place_id', name='uq_user_places_place_id'),
    )


def downgrade() -> None:
    """Drop the user_places, places and users tables."""
    op.drop_table('user_places')
    op.drop_index('ix_places_creator_id', table_name='places')
    op.drop_table('places')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
