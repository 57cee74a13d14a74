"""Initial schema: working_hours, schedule_blocks, appointments.

Revision ID: 001_schedule
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_schedule"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "working_hours",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_working_hours_day_of_week"), "working_hours", ["day_of_week"], unique=False)

    op.create_table(
        "schedule_blocks",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("block_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=True),
        sa.Column("end_time", sa.String(length=5), nullable=True),
        sa.Column("reason", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_schedule_blocks_block_date"), "schedule_blocks", ["block_date"], unique=False)

    op.create_table(
        "appointments",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("appointment_date", sa.Date(), nullable=False),
        sa.Column("appointment_time", sa.String(length=5), nullable=False),
        sa.Column("service_type", sa.String(length=100), nullable=False),
        sa.Column("pet_name", sa.String(length=255), nullable=False),
        sa.Column("tutor_rut", sa.String(length=12), nullable=False),
        sa.Column("tutor_name", sa.String(length=255), nullable=False),
        sa.Column("tutor_phone", sa.String(length=20), nullable=False),
        sa.Column("tutor_email", sa.String(length=255), nullable=True),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("vet_notes", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="scheduled"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_appointments_appointment_date"), "appointments", ["appointment_date"], unique=False)
    op.create_index(op.f("ix_appointments_tutor_rut"), "appointments", ["tutor_rut"], unique=False)
    op.create_index(
        "uq_appointments_live_slot",
        "appointments",
        ["appointment_date", "appointment_time"],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'"),
    )


def downgrade() -> None:
    op.drop_index("uq_appointments_live_slot", table_name="appointments")
    op.drop_index(op.f("ix_appointments_tutor_rut"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_appointment_date"), table_name="appointments")
    op.drop_table("appointments")
    op.drop_index(op.f("ix_schedule_blocks_block_date"), table_name="schedule_blocks")
    op.drop_table("schedule_blocks")
    op.drop_index(op.f("ix_working_hours_day_of_week"), table_name="working_hours")
    op.drop_table("working_hours")
