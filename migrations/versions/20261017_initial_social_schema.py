"""Create users, repositories, stars and follows

Revision ID: 4c2e1f0a9b31
Revises:
Create Date: 2026-10-17 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c2e1f0a9b31'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('image', sa.String(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('location', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)

    op.create_table(
        'repositories',
        sa.Column('id', sa.String(36), nullable=False, primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('language', sa.String(50), nullable=True),
        sa.Column('stars_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('forks_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('watchers_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_private', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('readme', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.UniqueConstraint('owner_id', 'name', name='uq_repositories_owner_name'),
        sa.CheckConstraint('stars_count >= 0', name='ck_repositories_stars_count_non_negative'),
    )
    op.create_index('idx_repositories_public_updated', 'repositories', ['is_private', 'updated_at'], unique=False)
    op.create_index('idx_repositories_owner_id', 'repositories', ['owner_id'], unique=False)

    op.create_table(
        'stars',
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('repository_id', sa.String(36), sa.ForeignKey('repositories.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('user_id', 'repository_id', name='pk_stars'),
    )
    op.create_index('idx_stars_repository_id', 'stars', ['repository_id'], unique=False)

    op.create_table(
        'follows',
        sa.Column('follower_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('following_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('follower_id', 'following_id', name='pk_follows'),
        sa.CheckConstraint('follower_id <> following_id', name='ck_follows_not_self'),
    )
    op.create_index('idx_follows_following_id', 'follows', ['following_id'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_follows_following_id', table_name='follows')
    op.drop_table('follows')
    op.drop_index('idx_stars_repository_id', table_name='stars')
    op.drop_table('stars')
    op.drop_index('idx_repositories_owner_id', table_name='repositories')
    op.drop_index('idx_repositories_public_updated', table_name='repositories')
    op.drop_table('repositories')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
