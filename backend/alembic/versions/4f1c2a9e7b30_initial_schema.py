"""Initial schema: users, companies, catalog, carts, credits, releases

Revision ID: 4f1c2a9e7b30
Revises:
Create Date: 2026-10-18 10:12:41.204117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '4f1c2a9e7b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(254), nullable=False),
        sa.Column('first_name', sa.String(48), nullable=True),
        sa.Column('last_name', sa.String(48), nullable=True),
        sa.Column('partner_id', sa.Integer(), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_staff', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_editor', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'])
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'user_subscription',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(48), nullable=True),
        sa.Column('remaining_pr', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('remaining_pluspr', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('newsdb_credits', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('start_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('remaining_pr >= 0'),
        sa.CheckConstraint('remaining_pluspr >= 0'),
        sa.CheckConstraint('newsdb_credits >= 0'),
    )
    op.create_index(op.f('ix_user_subscription_id'), 'user_subscription', ['id'])
    op.create_index(op.f('ix_user_subscription_user_id'), 'user_subscription', ['user_id'], unique=True)

    op.create_table(
        'company',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('uuid', sa.String(36), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('company_name', sa.String(100), nullable=False),
        sa.Column('first_name', sa.String(48), nullable=True),
        sa.Column('last_name', sa.String(48), nullable=True),
        sa.Column('title', sa.String(48), nullable=True),
        sa.Column('website', sa.String(128), nullable=True),
        sa.Column('email', sa.String(128), nullable=True),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('logo_url', sa.Text(), nullable=True),
        sa.Column('addr1', sa.String(100), nullable=True),
        sa.Column('addr2', sa.String(100), nullable=True),
        sa.Column('city', sa.String(60), nullable=True),
        sa.Column('state', sa.String(2), nullable=True),
        sa.Column('postal_code', sa.String(10), nullable=True),
        sa.Column('country_code', sa.String(5), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_company_id'), 'company', ['id'])
    op.create_index(op.f('ix_company_uuid'), 'company', ['uuid'], unique=True)
    op.create_index(op.f('ix_company_user_id'), 'company', ['user_id'])

    op.create_table(
        'contact',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('uuid', sa.String(36), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('first_name', sa.String(48), nullable=True),
        sa.Column('last_name', sa.String(48), nullable=True),
        sa.Column('title', sa.String(48), nullable=True),
        sa.Column('email', sa.String(128), nullable=True),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_contact_id'), 'contact', ['id'])
    op.create_index(op.f('ix_contact_uuid'), 'contact', ['uuid'], unique=True)
    op.create_index(op.f('ix_contact_company_id'), 'contact', ['company_id'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('partner_id', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('short_name', sa.String(22), nullable=True),
        sa.Column('display_name', sa.String(36), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('label', sa.String(20), nullable=True),
        sa.Column('icon', sa.String(32), nullable=True),
        sa.Column('stripe_test', sa.String(64), nullable=True),
        sa.Column('stripe_live', sa.String(64), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('partner_share', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('product_type', sa.String(12), nullable=True),
        sa.Column('product_credits', sa.Integer(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_upgrade', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_solo_upgrade', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('price >= 0'),
    )
    op.create_index(op.f('ix_products_id'), 'products', ['id'])
    op.create_index(op.f('ix_products_partner_id'), 'products', ['partner_id'])
    op.create_index(op.f('ix_products_product_type'), 'products', ['product_type'])

    op.create_table(
        'cart_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_uuid', sa.String(36), nullable=False, unique=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('partner_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.Column('subtotal', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tax_amount', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('stripe_checkout_session_id', sa.String(128), nullable=True),
        sa.Column('stripe_payment_intent_id', sa.String(128), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('payment_attempted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_cart_sessions_id'), 'cart_sessions', ['id'])
    op.create_index(op.f('ix_cart_sessions_user_id'), 'cart_sessions', ['user_id'])
    op.create_index(op.f('ix_cart_sessions_status'), 'cart_sessions', ['status'])
    op.create_index(op.f('ix_cart_sessions_stripe_payment_intent_id'), 'cart_sessions', ['stripe_payment_intent_id'])

    op.create_table(
        'cart_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('cart_sessions.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('product_name', sa.String(128), nullable=False),
        sa.Column('product_type', sa.String(20), nullable=False),
        sa.Column('product_credits', sa.Integer(), nullable=True),
        sa.Column('unit_price', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('total_price', sa.Integer(), nullable=False),
        sa.Column('stripe_price_id', sa.String(128), nullable=True),
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_cart_items_id'), 'cart_items', ['id'])
    op.create_index(op.f('ix_cart_items_session_id'), 'cart_items', ['session_id'])
    op.create_index(op.f('ix_cart_items_product_id'), 'cart_items', ['product_id'])

    op.create_table(
        'cart_transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('cart_sessions.id'), nullable=False),
        sa.Column('transaction_type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False, server_default='usd'),
        sa.Column('stripe_event_id', sa.String(128), nullable=True),
        sa.Column('stripe_payment_intent_id', sa.String(128), nullable=True),
        sa.Column('error_code', sa.String(50), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('customer_email', sa.String(256), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_cart_transactions_id'), 'cart_transactions', ['id'])
    op.create_index(op.f('ix_cart_transactions_session_id'), 'cart_transactions', ['session_id'])

    op.create_table(
        'releases',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('uuid', sa.String(36), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id'), nullable=False),
        sa.Column('title', sa.String(180), nullable=True),
        sa.Column('slug', sa.String(200), nullable=True),
        sa.Column('abstract', sa.Text(), nullable=True),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('pullquote', sa.Text(), nullable=True),
        sa.Column('location', sa.String(120), nullable=True),
        sa.Column('timezone', sa.String(32), nullable=True),
        sa.Column('distribution', sa.String(20), nullable=True),
        sa.Column('status', sa.String(10), nullable=False, server_default='start'),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('release_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_releases_id'), 'releases', ['id'])
    op.create_index(op.f('ix_releases_uuid'), 'releases', ['uuid'], unique=True)
    op.create_index(op.f('ix_releases_user_id'), 'releases', ['user_id'])
    op.create_index(op.f('ix_releases_company_id'), 'releases', ['company_id'])
    op.create_index(op.f('ix_releases_status'), 'releases', ['status'])

    op.create_table(
        'queue',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('uuid', sa.String(36), nullable=False, unique=True),
        sa.Column('release_id', sa.Integer(), sa.ForeignKey('releases.id'), nullable=False, unique=True),
        sa.Column('editor_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('editor_name', sa.String(32), nullable=True),
        sa.Column('submitted', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checkedout', sa.DateTime(timezone=True), nullable=True),
        sa.Column('approved', sa.DateTime(timezone=True), nullable=True),
        sa.Column('returned', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(op.f('ix_queue_id'), 'queue', ['id'])

    op.create_table(
        'release_notes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('pr_id', sa.Integer(), sa.ForeignKey('releases.id'), nullable=False),
        sa.Column('from_id', sa.Integer(), nullable=False),
        sa.Column('from_name', sa.String(32), nullable=True),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_release_notes_id'), 'release_notes', ['id'])
    op.create_index(op.f('ix_release_notes_pr_id'), 'release_notes', ['pr_id'])

    op.create_table(
        'brand_credits',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('company.id'), nullable=True),
        sa.Column('pr_id', sa.Integer(), sa.ForeignKey('releases.id'), nullable=True),
        sa.Column('credits', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('product_type', sa.String(36), nullable=True),
        sa.Column('notes', sa.String(48), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_brand_credits_id'), 'brand_credits', ['id'])
    op.create_index(op.f('ix_brand_credits_user_id'), 'brand_credits', ['user_id'])
    op.create_index(op.f('ix_brand_credits_company_id'), 'brand_credits', ['company_id'])
    op.create_index(op.f('ix_brand_credits_pr_id'), 'brand_credits', ['pr_id'])

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('action', sa.String(50), nullable=True),
        sa.Column('resource', sa.String(50), nullable=True),
        sa.Column('status', sa.String(20), nullable=True),
        sa.Column('ip', sa.String(64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
    )
    op.create_index(op.f('ix_logs_id'), 'logs', ['id'])
    op.create_index(op.f('ix_logs_ts'), 'logs', ['ts'])
    op.create_index(op.f('ix_logs_action'), 'logs', ['action'])
    op.create_index(op.f('ix_logs_resource'), 'logs', ['resource'])
    op.create_index(op.f('ix_logs_status'), 'logs', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    # Reverse dependency order
    for table in (
        'logs', 'brand_credits', 'release_notes', 'queue', 'releases',
        'cart_transactions', 'cart_items', 'cart_sessions', 'products',
        'contact', 'company', 'user_subscription', 'users',
    ):
        op.drop_table(table)
