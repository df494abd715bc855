"""initial_schema

Revision ID: 3f1c9a7b2d10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7b2d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("role", sa.String(50), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "cabins",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("base_price", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("amenities", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("image_ids", sa.JSON(), nullable=False, server_default="[]"),
        sa.Column("main_image_id", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("capacity > 0", name="ck_cabins_capacity_positive"),
        sa.CheckConstraint("base_price >= 0", name="ck_cabins_base_price_non_negative"),
    )
    op.create_index("ix_cabins_name", "cabins", ["name"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("cabin_id", sa.UUID(), sa.ForeignKey("cabins.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_by_id", sa.UUID(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("total_price", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("guest_first_name", sa.String(100), nullable=False),
        sa.Column("guest_last_name", sa.String(100), nullable=False),
        sa.Column("guest_document", sa.String(20), nullable=False),
        sa.Column("guest_address", sa.String(255), nullable=False, server_default=""),
        sa.Column("guest_phone", sa.String(50), nullable=False, server_default=""),
        sa.Column("guest_email", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("start_date < end_date", name="ck_reservations_dates_ordered"),
        sa.CheckConstraint("total_price >= 0", name="ck_reservations_total_non_negative"),
    )
    op.create_index("ix_reservations_cabin_id", "reservations", ["cabin_id"])
    op.create_index("ix_reservations_created_by_id", "reservations", ["created_by_id"])
    op.create_index("ix_reservations_status", "reservations", ["status"])
    op.create_index("ix_reservations_guest_document", "reservations", ["guest_document"])
    op.create_index("ix_reservations_cabin_dates", "reservations", ["cabin_id", "start_date", "end_date"])

    # No two active reservations of the same cabin may share a night.
    # '[)' makes the checkout day free, matching the availability rules.
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")
    op.execute("""
        ALTER TABLE reservations
        ADD CONSTRAINT ex_reservations_no_overlap
        EXCLUDE USING gist (
            cabin_id WITH =,
            daterange(start_date, end_date, '[)') WITH &&
        )
        WHERE (status <> 'cancelled')
    """)


def downgrade() -> None:
    op.execute("ALTER TABLE reservations DROP CONSTRAINT IF EXISTS ex_reservations_no_overlap")
    op.drop_index("ix_reservations_cabin_dates", table_name="reservations")
    op.drop_index("ix_reservations_guest_document", table_name="reservations")
    op.drop_index("ix_reservations_status", table_name="reservations")
    op.drop_index("ix_reservations_created_by_id", table_name="reservations")
    op.drop_index("ix_reservations_cabin_id", table_name="reservations")
    op.drop_table("reservations")
    op.drop_index("ix_cabins_name", table_name="cabins")
    op.drop_table("cabins")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
