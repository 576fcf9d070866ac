"""create users, events and guests tables

Revision ID: 3a7d1c9e5b20
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3a7d1c9e5b20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("image", sa.String(length=1000), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "events",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(length=500), nullable=False),
        sa.Column("venue", sa.String(length=255), nullable=True),
        sa.Column("description", sa.String(length=5000), nullable=True),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("dress_code", sa.String(length=255), nullable=True),
        sa.Column("instructions", sa.String(length=2000), nullable=True),
        sa.Column("host_name", sa.String(length=255), nullable=True),
        sa.Column("host_email", sa.String(length=255), nullable=False),
        sa.Column("admin_token", sa.String(length=128), nullable=False),
        sa.Column("access_token", sa.String(length=128), nullable=True),
        sa.Column("guest_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_events_user_id"), "events", ["user_id"], unique=False)
    op.create_index(op.f("ix_events_date"), "events", ["date"], unique=False)
    op.create_index(op.f("ix_events_admin_token"), "events", ["admin_token"], unique=False)
    op.create_index(op.f("ix_events_access_token"), "events", ["access_token"], unique=False)

    op.create_table(
        "guests",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("event_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("response", sa.String(length=32), nullable=False),
        sa.Column("number_of_guests", sa.Integer(), nullable=False),
        sa.Column("additional_guest_names", sa.JSON(), nullable=False),
        sa.Column("dietary_restrictions", sa.String(length=1000), nullable=True),
        sa.Column("message", sa.String(length=2000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("event_id", "email", name="uq_guests_event_email"),
    )
    op.create_index(op.f("ix_guests_event_id"), "guests", ["event_id"], unique=False)
    op.create_index(op.f("ix_guests_email"), "guests", ["email"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_guests_email"), table_name="guests")
    op.drop_index(op.f("ix_guests_event_id"), table_name="guests")
    op.drop_table("guests")
    op.drop_index(op.f("ix_events_access_token"), table_name="events")
    op.drop_index(op.f("ix_events_admin_token"), table_name="events")
    op.drop_index(op.f("ix_events_date"), table_name="events")
    op.drop_index(op.f("ix_events_user_id"), table_name="events")
    op.drop_table("events")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_table("users")
