from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect
from sqlalchemy.dialects import postgresql


revision = "0001_create_schema"
down_revision = None
branch_labels = None
depends_on = None


def _json_type(bind):
    if bind.dialect.name == "sqlite":
        return sa.JSON()
    return postgresql.JSONB(astext_type=sa.Text())


def upgrade() -> None:
    bind = op.get_bind()
    existing = set(inspect(bind).get_table_names())

    if "tenants" not in existing:
        op.create_table(
            "tenants",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("slug", sa.String(length=80), nullable=False),
            sa.Column("name", sa.String(length=120), nullable=False),
            sa.Column("theme_color", sa.String(length=20), nullable=False, server_default="#1e293b"),
            sa.Column("category", sa.String(length=60), nullable=False, server_default=""),
            sa.Column("address", sa.String(length=200), nullable=False, server_default=""),
            sa.Column("phone", sa.String(length=30), nullable=False, server_default=""),
            sa.Column("opening_hour", sa.Integer(), nullable=False, server_default="9"),
            sa.Column("closing_hour", sa.Integer(), nullable=False, server_default="18"),
            sa.Column("closed_days", _json_type(bind), nullable=False),
            sa.Column(
                "timezone",
                sa.String(length=64),
                nullable=False,
                server_default="America/Argentina/Buenos_Aires",
            ),
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint("opening_hour >= 0 AND opening_hour <= 23", name="ck_tenants_opening_hour"),
            sa.CheckConstraint("closing_hour >= 0 AND closing_hour <= 23", name="ck_tenants_closing_hour"),
            sa.CheckConstraint("closing_hour > opening_hour", name="ck_tenants_hours_order"),
        )
        op.create_index("ix_tenants_slug", "tenants", ["slug"], unique=True)

    if "services" not in existing:
        op.create_table(
            "services",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id"), nullable=False),
            sa.Column("name", sa.String(length=120), nullable=False),
            sa.Column("duration_min", sa.Integer(), nullable=False),
            sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
            sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.CheckConstraint("duration_min > 0", name="ck_services_duration_positive"),
        )
        op.create_index("ix_services_tenant_id", "services", ["tenant_id"], unique=False)

    if "professionals" not in existing:
        op.create_table(
            "professionals",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id"), nullable=False),
            sa.Column("name", sa.String(length=120), nullable=False),
            sa.Column("job_title", sa.String(length=120), nullable=True),
            sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        )
        op.create_index("ix_professionals_tenant_id", "professionals", ["tenant_id"], unique=False)

    if "customers" not in existing:
        op.create_table(
            "customers",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id"), nullable=False),
            sa.Column("name", sa.String(length=120), nullable=False),
            sa.Column("email", sa.String(length=254), nullable=False),
            sa.Column("phone", sa.String(length=30), nullable=False, server_default=""),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint("tenant_id", "email", name="uq_customers_tenant_email"),
        )
        op.create_index("ix_customers_tenant_id", "customers", ["tenant_id"], unique=False)

    if "appointments" not in existing:
        op.create_table(
            "appointments",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id"), nullable=False),
            sa.Column("professional_id", sa.Integer(), sa.ForeignKey("professionals.id"), nullable=False),
            sa.Column("service_id", sa.Integer(), sa.ForeignKey("services.id"), nullable=False),
            sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
            sa.Column("start_time", sa.DateTime(), nullable=False),
            sa.Column("end_time", sa.DateTime(), nullable=False),
            sa.Column("status", sa.String(length=20), nullable=False, server_default="CONFIRMED"),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.CheckConstraint("end_time > start_time", name="ck_appointments_interval"),
        )
        op.create_index("ix_appointments_tenant_id", "appointments", ["tenant_id"], unique=False)
        op.create_index(
            "ix_appointments_professional_start",
            "appointments",
            ["professional_id", "start_time"],
            unique=False,
        )

    if "blocked_dates" not in existing:
        op.create_table(
            "blocked_dates",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("professional_id", sa.Integer(), sa.ForeignKey("professionals.id"), nullable=False),
            sa.Column("date", sa.Date(), nullable=False),
            sa.Column("reason", sa.String(length=255), nullable=False, server_default=""),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
            sa.UniqueConstraint("professional_id", "date", name="uq_blocked_dates_professional_date"),
        )
        op.create_index("ix_blocked_dates_professional_id", "blocked_dates", ["professional_id"], unique=False)

    if "admin_users" not in existing:
        op.create_table(
            "admin_users",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("tenant_id", sa.Integer(), sa.ForeignKey("tenants.id"), nullable=False),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("password_hash", sa.String(), nullable=False),
            sa.Column("role", sa.String(), nullable=False, server_default="owner"),
            sa.Column("active", sa.Boolean(), server_default=sa.true()),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.UniqueConstraint("tenant_id", "email", name="uq_admin_users_tenant_email"),
        )
        op.create_index("ix_admin_users_id", "admin_users", ["id"], unique=False)
        op.create_index("ix_admin_users_tenant_id", "admin_users", ["tenant_id"], unique=False)


def downgrade() -> None:
    for table in (
        "admin_users",
        "blocked_dates",
        "appointments",
        "customers",
        "professionals",
        "services",
        "tenants",
    ):
        op.drop_table(table)
