"""tracker initial schema: month records, products, users, game names, tasks

Revision ID: 5e2c7a91b4d0
Revises:
Create Date: 2026-10-19 00:00:00
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "5e2c7a91b4d0"
down_revision = None
branch_labels = None
depends_on = None

PRODUCT_CATEGORY = ("Game Account", "In-Game Items")
PRODUCT_STATUS = ("available", "sold")
USER_ROLE = ("admin", "supervisor", "user", "new_user")
TASK_STATUS = ("started", "in_progress", "completed")


def upgrade() -> None:
    op.create_table(
        "month_records",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        # Stamped when the period is locked
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_month_records_is_locked", "month_records", ["is_locked"], unique=False)
    op.create_index("ix_month_records_is_active", "month_records", ["is_active"], unique=False)

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("game_account", sa.Text(), nullable=False),
        sa.Column("game_name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.Enum(*PRODUCT_CATEGORY, name="product_category"), nullable=False),
        sa.Column("date_received", sa.DateTime(timezone=True), nullable=False),
        sa.Column("cost_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("selling_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("profit", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.Enum(*PRODUCT_STATUS, name="product_status"), nullable=False),
        sa.Column("evidence", sa.Text(), nullable=True),
        sa.Column("month_record_id", sa.Integer(), sa.ForeignKey("month_records.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_products_month_record_id", "products", ["month_record_id"], unique=False)
    op.create_index("ix_products_category", "products", ["category"], unique=False)
    op.create_index("ix_products_status", "products", ["status"], unique=False)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("role", sa.Enum(*USER_ROLE, name="user_role"), nullable=False),
        sa.Column("api_key_hash", sa.String(length=64), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_active", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_active_time", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_api_key_hash", "users", ["api_key_hash"], unique=False)

    op.create_table(
        "game_names",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_game_names_id", "game_names", ["id"], unique=False)

    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.Enum(*TASK_STATUS, name="task_status"), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("assigned_to", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tasks_id", "tasks", ["id"], unique=False)
    op.create_index("ix_tasks_assigned_to", "tasks", ["assigned_to"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_tasks_assigned_to", table_name="tasks")
    op.drop_index("ix_tasks_id", table_name="tasks")
    op.drop_table("tasks")

    op.drop_index("ix_game_names_id", table_name="game_names")
    op.drop_table("game_names")

    op.drop_index("ix_users_api_key_hash", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")

    op.drop_index("ix_products_status", table_name="products")
    op.drop_index("ix_products_category", table_name="products")
    op.drop_index("ix_products_month_record_id", table_name="products")
    op.drop_table("products")

    op.drop_index("ix_month_records_is_active", table_name="month_records")
    op.drop_index("ix_month_records_is_locked", table_name="month_records")
    op.drop_table("month_records")

    for enum_name in ("task_status", "user_role", "product_status", "product_category"):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
