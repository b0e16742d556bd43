"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create clients table
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(50), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('address', sa.String(200)),
        sa.Column('phone', sa.String(20)),
        sa.Column('logo', sa.String(500)),
        sa.Column('slogan', sa.String(100)),
        sa.Column('social_media', sa.JSON(), default={}),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create templates table
    op.create_table(
        'templates',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('config', sa.JSON(), default={}),
        sa.Column('preview', sa.String(500)),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='CASCADE')),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column(
            'role',
            sa.Enum('SUPER_ADMIN', 'CLIENT_ADMIN', 'CLIENT_VIEWER', name='userrole'),
            nullable=False,
            server_default='CLIENT_VIEWER',
        ),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('refresh_token', sa.String(500)),
        sa.Column('last_login', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create menus table, one per client
    op.create_table(
        'menus',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'client_id',
            sa.Integer(),
            sa.ForeignKey('clients.id', ondelete='CASCADE'),
            unique=True,
            nullable=False,
        ),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('templates.id', ondelete='SET NULL')),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('qr_code', sa.String(500)),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('menu_id', sa.Integer(), sa.ForeignKey('menus.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('image', sa.String(500)),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create menu_items table
    op.create_table(
        'menu_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'category_id',
            sa.Integer(),
            sa.ForeignKey('categories.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('menu_id', sa.Integer(), sa.ForeignKey('menus.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text()),
        sa.Column('price_bgn', sa.Numeric(10, 2), nullable=False),
        sa.Column('price_eur', sa.Numeric(10, 2), nullable=False),
        sa.Column('weight', sa.Numeric(10, 2)),
        sa.Column('weight_unit', sa.String(5)),
        sa.Column('image', sa.String(500)),
        sa.Column('tags', sa.JSON(), default=[]),
        sa.Column('allergens', sa.JSON(), default=[]),
        sa.Column('addons', sa.JSON(), default=[]),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )

    # Create indexes
    op.create_index('ix_clients_slug', 'clients', ['slug'], unique=True)
    op.create_index('ix_categories_menu_order', 'categories', ['menu_id', 'order'])
    op.create_index('ix_menu_items_category_order', 'menu_items', ['category_id', 'order'])
    op.create_index('ix_menu_items_menu_id', 'menu_items', ['menu_id'])


def downgrade() -> None:
    op.drop_table('menu_items')
    op.drop_table('categories')
    op.drop_table('menus')
    op.drop_table('users')
    op.drop_table('templates')
    op.drop_table('clients')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
