"""initial_parking_schema

Revision ID: a1c4e7f20b31
Revises:
Create Date: 2026-10-19 09:00:00.000000

주차 관리 초기 스키마:
- users, authorities, user_authorities, refresh_tokens
- parking_plans, plan_eligible_users, plan_subscriptions
- parking_activities, parking_sale_activities
- exception_logs, app_configs
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "a1c4e7f20b31"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "authorities",
        sa.Column("name", sa.String(50), primary_key=True),
    )
    op.bulk_insert(
        sa.table("authorities", sa.column("name", sa.String)),
        [{"name": "ROLE_USER"}, {"name": "ROLE_ADMIN"}],
    )

    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("login", sa.String(100), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=True),
        sa.Column("last_name", sa.String(50), nullable=True),
        sa.Column("mobile_number", sa.String(20), nullable=False, unique=True),
        sa.Column("license_plate", sa.String(20), nullable=True),
        sa.Column("stripe_token", sa.String(255), nullable=True),
        sa.Column("region", sa.String(100), nullable=True),
        sa.Column("activated", sa.Boolean(), server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "user_authorities",
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("authority_name", sa.String(50), sa.ForeignKey("authorities.name"), primary_key=True),
    )

    op.create_table(
        "refresh_tokens",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("token", sa.String(512), nullable=False, unique=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("issued_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "parking_plans",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("plan_name", sa.String(100), nullable=False),
        sa.Column("lot_id", sa.Integer(), nullable=False),
        sa.Column("unit_charge_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("payment_plan_id", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_parking_plans_lot_id", "parking_plans", ["lot_id"])

    op.create_table(
        "plan_eligible_users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_email", sa.String(100), nullable=False),
        sa.Column("plan_id", UUID(as_uuid=True), sa.ForeignKey("parking_plans.id", ondelete="CASCADE"), nullable=True),
        sa.Column("subscribed", sa.Boolean(), server_default=sa.text("false")),
    )
    op.create_index("ix_plan_eligible_users_user_email", "plan_eligible_users", ["user_email"])

    op.create_table(
        "plan_subscriptions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("plan_id", UUID(as_uuid=True), sa.ForeignKey("parking_plans.id", ondelete="CASCADE"), nullable=False),
        sa.Column("stripe_id", sa.String(255), nullable=True),
        sa.Column("plan_start_date", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("plan_expiry_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("plan_charge_amount", sa.Float(), nullable=False, server_default="0"),
        sa.Column("payment_profile_id", sa.String(255), nullable=True),
    )

    op.create_table(
        "parking_activities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("lot_id", sa.Integer(), nullable=False),
        sa.Column("parking_status", sa.String(30), nullable=False, server_default="Parked"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("exit_datetime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("exception_flag", sa.String(255), nullable=True),
        sa.Column("gate_response", sa.Text(), nullable=True),
    )
    op.create_index("ix_parking_activities_user_id", "parking_activities", ["user_id"])
    op.create_index("ix_parking_activities_lot_id", "parking_activities", ["lot_id"])
    op.create_index("ix_parking_activities_created_at", "parking_activities", ["created_at"])

    op.create_table(
        "parking_sale_activities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("lot_id", sa.Integer(), nullable=True),
        sa.Column("plan_id", UUID(as_uuid=True), nullable=True),
        sa.Column("plan_name", sa.String(100), nullable=True),
        sa.Column("user_email", sa.String(100), nullable=True),
        sa.Column("user_phone_number", sa.String(20), nullable=True),
        sa.Column("user_license_plate", sa.String(20), nullable=True),
        sa.Column("plan_subscription_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("plan_expiry_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("charge_amount", sa.Float(), nullable=True),
        sa.Column("service_amount", sa.Float(), nullable=True),
        sa.Column("net_amount", sa.Float(), nullable=True),
        sa.Column("pp_id", sa.String(255), nullable=True),
        sa.Column("entry_datetime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("exit_datetime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("parking_status", sa.String(30), nullable=True),
        sa.Column("exception_flag", sa.String(255), nullable=True),
        sa.Column("invoice_id", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_parking_sale_activities_user_id", "parking_sale_activities", ["user_id"])
    op.create_index("ix_parking_sale_activities_created_at", "parking_sale_activities", ["created_at"])

    op.create_table(
        "exception_logs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("log_message", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "app_configs",
        sa.Column("key", sa.String(100), primary_key=True),
        sa.Column("value", sa.String(255), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("app_configs")
    op.drop_table("exception_logs")
    op.drop_index("ix_parking_sale_activities_created_at", table_name="parking_sale_activities")
    op.drop_index("ix_parking_sale_activities_user_id", table_name="parking_sale_activities")
    op.drop_table("parking_sale_activities")
    op.drop_index("ix_parking_activities_created_at", table_name="parking_activities")
    op.drop_index("ix_parking_activities_lot_id", table_name="parking_activities")
    op.drop_index("ix_parking_activities_user_id", table_name="parking_activities")
    op.drop_table("parking_activities")
    op.drop_table("plan_subscriptions")
    op.drop_index("ix_plan_eligible_users_user_email", table_name="plan_eligible_users")
    op.drop_table("plan_eligible_users")
    op.drop_index("ix_parking_plans_lot_id", table_name="parking_plans")
    op.drop_table("parking_plans")
    op.drop_table("refresh_tokens")
    op.drop_table("user_authorities")
    op.drop_table("users")
    op.drop_table("authorities")
