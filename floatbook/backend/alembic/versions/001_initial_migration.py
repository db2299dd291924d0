# backend/alembic/versions/001_initial_migration.py
"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2026-01-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    ]


def upgrade() -> None:
    # Create plans table
    op.create_table(
        'plans',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(100), unique=True, nullable=False),
        sa.Column('price', sa.Float, server_default=sa.text("0"), nullable=False),
        sa.Column('room_limit', sa.Integer, server_default=sa.text("0"), nullable=False),
        sa.Column('booking_limit', sa.Integer, server_default=sa.text("0"), nullable=False),
        sa.Column('user_limit', sa.Integer, server_default=sa.text("0"), nullable=False),
        sa.Column('stripe_price_id', sa.String(255), index=True),
        *_timestamps(),
    )

    # Create companies table
    op.create_table(
        'companies',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('logo_url', sa.String(500)),
        sa.Column('address', sa.Text),
        sa.Column('currency', sa.String(10), server_default=sa.text("'USD'"), nullable=False),
        sa.Column('tax_enabled', sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column('tax_rate', sa.Float, server_default=sa.text("0"), nullable=False),
        sa.Column('plan_name', sa.String(100), server_default=sa.text("'Free'"), nullable=False),
        *_timestamps(),
    )

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False, index=True),
        sa.Column('hashed_password', sa.String(255)),
        sa.Column('full_name', sa.String(255)),
        sa.Column('system_role', sa.String(50), server_default=sa.text("'user'"), nullable=False),
        sa.Column('is_active', sa.Boolean, server_default=sa.true(), nullable=False),
        sa.Column('last_login', sa.DateTime),
        *_timestamps(),
    )

    # Create company_users table
    op.create_table(
        'company_users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('user_email', sa.String(255)),
        sa.Column('role', sa.String(50), server_default=sa.text("'member'"), nullable=False),
        *_timestamps(),
    )

    # Create rooms table
    op.create_table(
        'rooms',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('price', sa.Float, nullable=False),
        sa.Column('capacity', sa.Integer, server_default=sa.text("1"), nullable=False),
        sa.Column('amenities', postgresql.JSON, server_default=sa.text("'[]'::json")),
        sa.Column('meal_options', sa.String(100), server_default=sa.text("'None'")),
        *_timestamps(),
    )

    # Create bookings table
    op.create_table(
        'bookings',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('room_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('rooms.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('check_in_date', sa.Date, nullable=False, index=True),
        sa.Column('check_out_date', sa.Date, nullable=False),
        sa.Column('guest_count', sa.Integer, server_default=sa.text("1"), nullable=False),
        sa.Column('booking_type', sa.String(50), server_default=sa.text("'individual'"), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('customer_email', sa.String(255)),
        sa.Column('customer_phone', sa.String(50)),
        sa.Column('referred_by', sa.String(255)),
        sa.Column('notes', sa.Text),
        sa.Column('total_amount', sa.Float, nullable=False),
        sa.Column('discount_type', sa.String(20), server_default=sa.text("'fixed'"), nullable=False),
        sa.Column('discount_value', sa.Float, server_default=sa.text("0"), nullable=False),
        sa.Column('advance_paid', sa.Float, server_default=sa.text("0"), nullable=False),
        sa.Column('is_paid', sa.Boolean, server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('check_in_date <= check_out_date', name='ck_bookings_date_order'),
    )

    # Create subscriptions table
    op.create_table(
        'subscriptions',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('plan_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('plans.id'), nullable=False),
        sa.Column('status', sa.String(50), server_default=sa.text("'active'"), nullable=False, index=True),
        sa.Column('current_period_end', sa.DateTime),
        sa.Column('stripe_subscription_id', sa.String(255), unique=True),
        *_timestamps(),
    )

    # Create activation_keys table
    op.create_table(
        'activation_keys',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('key', sa.String(100), unique=True, nullable=False, index=True),
        sa.Column('plan_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_used', sa.Boolean, server_default=sa.false(), nullable=False),
        sa.Column('used_by_company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='SET NULL')),
        sa.Column('used_at', sa.DateTime),
        *_timestamps(),
    )

    # Create payment_intents table
    op.create_table(
        'payment_intents',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('company_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('plan_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('plans.id'), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.Float, nullable=False),
        sa.Column('currency', sa.String(10), server_default=sa.text("'BDT'"), nullable=False),
        sa.Column('status', sa.String(50), server_default=sa.text("'pending'"), nullable=False),
        sa.Column('bkash_payment_id', sa.String(255), index=True),
        sa.Column('bkash_trx_id', sa.String(255)),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table('payment_intents')
    op.drop_table('activation_keys')
    op.drop_table('subscriptions')
    op.drop_table('bookings')
    op.drop_table('rooms')
    op.drop_table('company_users')
    op.drop_table('users')
    op.drop_table('companies')
    op.drop_table('plans')
