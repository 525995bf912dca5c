"""Initial garage/client schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _payment_method_columns(owner_column: str, owner_table: str):
    return [
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(owner_column, sa.Integer(), sa.ForeignKey(f"{owner_table}.id"), nullable=False),
        sa.Column("payment_type", sa.String(50), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("card_number", sa.String(20), nullable=False),
        sa.Column("card_holder_name", sa.String(100), nullable=False),
        sa.Column("expiry_month", sa.Integer(), nullable=False),
        sa.Column("expiry_year", sa.Integer(), nullable=False),
        sa.Column("cvv", sa.String(10), nullable=False),
        sa.Column("created_date", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("last_modified", sa.DateTime(), server_default=sa.func.now()),
    ]


def _registration_columns(owner_column: str, owner_table: str):
    return [
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(owner_column, sa.Integer(), sa.ForeignKey(f"{owner_table}.id"), nullable=False),
        sa.Column("register_date", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("expiry_date", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
    ]


def _order_columns(owner_column: str, owner_table: str):
    return [
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("order_number", sa.String(50), unique=True, nullable=False),
        sa.Column(owner_column, sa.Integer(), sa.ForeignKey(f"{owner_table}.id"), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("curr_id", sa.Integer(), sa.ForeignKey("currencies.id"), nullable=False),
        sa.Column("payment_method_id", sa.Integer(), nullable=False, index=True),
        sa.Column("premium_offer_id", sa.Integer(), sa.ForeignKey("premium_offers.id"), nullable=False),
        sa.Column("status", sa.String(50), nullable=False, server_default="Pending"),
        sa.Column("created_date", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("processed_date", sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "countries",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("country_name", sa.String(50), unique=True, nullable=False),
        sa.Column("phone_ext", sa.String(50), nullable=True),
    )
    op.create_table(
        "currencies",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("curr_desc", sa.String(50), unique=True, nullable=False),
    )
    op.create_table(
        "payment_types",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("payment_type_desc", sa.String(50), nullable=False),
    )
    op.create_table(
        "user_types",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_type_desc", sa.String(50), nullable=True),
    )
    op.create_table(
        "premium_offers",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_type_id", sa.Integer(), sa.ForeignKey("user_types.id"), nullable=False),
        sa.Column("premium_desc", sa.String(255), unique=True, nullable=False),
        sa.Column("premium_cost", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("curr_id", sa.Integer(), sa.ForeignKey("currencies.id"), nullable=False),
    )
    op.create_table(
        "client_profiles",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=True, index=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("phone_ext", sa.String(50), nullable=True),
        sa.Column("country_id", sa.Integer(), sa.ForeignKey("countries.id"), nullable=True),
        sa.Column("is_premium", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("idx_client_name_country", "client_profiles", ["first_name", "last_name", "country_id"])
    op.create_table(
        "garage_profiles",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("garage_name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True, index=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("country_id", sa.Integer(), sa.ForeignKey("countries.id"), nullable=True),
        sa.Column("is_premium", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table("client_payment_methods", *_payment_method_columns("client_id", "client_profiles"))
    op.create_index("idx_client_methods_owner", "client_payment_methods", ["client_id", "is_primary"])
    op.create_table("garage_payment_methods", *_payment_method_columns("garage_id", "garage_profiles"))
    op.create_index("idx_garage_methods_owner", "garage_payment_methods", ["garage_id", "is_primary"])

    op.create_table("client_premium_registrations", *_registration_columns("client_id", "client_profiles"))
    op.create_index("idx_client_reg_owner_active", "client_premium_registrations", ["client_id", "is_active"])
    op.create_table("garage_premium_registrations", *_registration_columns("garage_id", "garage_profiles"))
    op.create_index("idx_garage_reg_owner_active", "garage_premium_registrations", ["garage_id", "is_active"])

    op.create_table("client_payment_orders", *_order_columns("client_id", "client_profiles"))
    op.create_index("idx_client_orders_owner_created", "client_payment_orders", ["client_id", "created_date"])
    op.create_index("idx_client_orders_status", "client_payment_orders", ["status"])
    op.create_table("garage_payment_orders", *_order_columns("garage_id", "garage_profiles"))
    op.create_index("idx_garage_orders_owner_created", "garage_payment_orders", ["garage_id", "created_date"])
    op.create_index("idx_garage_orders_status", "garage_payment_orders", ["status"])

    op.create_table(
        "client_notifications",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("client_profiles.id"), nullable=False),
        sa.Column("notes", sa.String(1000), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_date", sa.DateTime(), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("client_notifications")
    op.drop_table("garage_payment_orders")
    op.drop_table("client_payment_orders")
    op.drop_table("garage_premium_registrations")
    op.drop_table("client_premium_registrations")
    op.drop_table("garage_payment_methods")
    op.drop_table("client_payment_methods")
    op.drop_table("garage_profiles")
    op.drop_table("client_profiles")
    op.drop_table("premium_offers")
    op.drop_table("user_types")
    op.drop_table("payment_types")
    op.drop_table("currencies")
    op.drop_table("countries")
