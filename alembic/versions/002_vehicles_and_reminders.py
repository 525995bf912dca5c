"""Vehicles, appointments, service history and client reminders

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _catalog(table: str, column: str, length: int, unique: bool = True) -> None:
    op.create_table(
        table,
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(column, sa.String(length), unique=unique, nullable=False),
    )


def upgrade() -> None:
    op.create_table(
        "client_reminders",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("client_profiles.id"), nullable=False, unique=True),
        sa.Column("reminder_date", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.String(500), nullable=True),
    )

    _catalog("fuel_types", "fuel_type_desc", 50)
    _catalog("manufacturers", "manufacturer_desc", 100)
    _catalog("vehicle_types", "vehicle_type_desc", 50, unique=False)
    _catalog("measure_units", "measure_unit_desc", 50)

    op.create_table(
        "service_types",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("description", sa.String(100), unique=True, nullable=False),
        sa.Column("is_selected", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "service_type_setups",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("service_type_id", sa.Integer(), sa.ForeignKey("service_types.id"), nullable=False),
        sa.Column("service_value", sa.Integer(), nullable=False),
        sa.Column("measure_unit_id", sa.Integer(), sa.ForeignKey("measure_units.id"), nullable=False),
    )
    op.create_index(
        "idx_setup_type_value", "service_type_setups", ["service_type_id", "service_value"], unique=True
    )

    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("client_profiles.id"), nullable=False),
        sa.Column("vehicle_name", sa.String(50), nullable=False),
        sa.Column("model", sa.String(50), nullable=True),
        sa.Column("license_plate", sa.String(50), unique=True, nullable=False),
        sa.Column("chassis_number", sa.String(50), unique=True, nullable=True),
        sa.Column("identification", sa.String(50), nullable=True),
        sa.Column("odometer", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("vehicle_type_id", sa.Integer(), sa.ForeignKey("vehicle_types.id"), nullable=False),
        sa.Column("fuel_type_id", sa.Integer(), sa.ForeignKey("fuel_types.id"), nullable=False),
        sa.Column("manufacturer_id", sa.Integer(), sa.ForeignKey("manufacturers.id"), nullable=False),
        sa.Column("measure_unit_id", sa.Integer(), sa.ForeignKey("measure_units.id"), nullable=False),
    )
    op.create_index(
        "idx_vehicle_type_name_fuel_client",
        "vehicles",
        ["vehicle_type_id", "vehicle_name", "fuel_type_id", "client_id"],
    )

    op.create_table(
        "vehicle_appointments",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("vehicle_id", sa.Integer(), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("garage_id", sa.Integer(), sa.ForeignKey("garage_profiles.id"), nullable=True),
        sa.Column("appointment_date", sa.DateTime(), nullable=False),
        sa.Column("note", sa.String(200), nullable=True),
    )
    op.create_index("idx_appointments_date", "vehicle_appointments", ["appointment_date"])

    op.create_table(
        "vehicle_services",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("vehicle_id", sa.Integer(), sa.ForeignKey("vehicles.id"), nullable=False),
        sa.Column("garage_id", sa.Integer(), sa.ForeignKey("garage_profiles.id"), nullable=False),
        sa.Column("service_date", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("odometer", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("service_location", sa.String(100), nullable=True),
        sa.Column("notes", sa.String(200), nullable=True),
    )
    op.create_table(
        "vehicle_service_lines",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("vehicle_service_id", sa.Integer(), sa.ForeignKey("vehicle_services.id"), nullable=False),
        sa.Column("service_type_id", sa.Integer(), sa.ForeignKey("service_types.id"), nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("curr_id", sa.Integer(), sa.ForeignKey("currencies.id"), nullable=False),
        sa.Column("notes", sa.String(200), nullable=True),
    )
    op.create_index(
        "idx_service_line_visit_type",
        "vehicle_service_lines",
        ["vehicle_service_id", "service_type_id"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_table("vehicle_service_lines")
    op.drop_table("vehicle_services")
    op.drop_table("vehicle_appointments")
    op.drop_table("vehicles")
    op.drop_table("service_type_setups")
    op.drop_table("service_types")
    op.drop_table("measure_units")
    op.drop_table("vehicle_types")
    op.drop_table("manufacturers")
    op.drop_table("fuel_types")
    op.drop_table("client_reminders")
