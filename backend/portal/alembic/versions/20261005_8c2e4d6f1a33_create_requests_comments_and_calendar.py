"""create requests, comments, calendar and notifications tables

Revision ID: 8c2e4d6f1a33
Revises: 3f9a1c2b7d10
Create Date: 2026-10-05 09:30:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8c2e4d6f1a33"
down_revision = "3f9a1c2b7d10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "employee_requests",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("request_type", sa.String(length=30), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("scope_id", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_employee_requests_request_type"), "employee_requests", ["request_type"]
    )
    op.create_index(op.f("ix_employee_requests_user_id"), "employee_requests", ["user_id"])
    op.create_index(op.f("ix_employee_requests_scope_id"), "employee_requests", ["scope_id"])
    op.create_index(op.f("ix_employee_requests_status"), "employee_requests", ["status"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("thread_type", sa.String(length=30), nullable=False),
        sa.Column("thread_id", sa.String(length=255), nullable=False),
        sa.Column("author_id", sa.String(length=255), nullable=False),
        sa.Column("author_role", sa.String(length=20), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("seen_by_admin", sa.Boolean(), nullable=False),
        sa.Column("seen_by_requester", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_comments_thread", "comments", ["thread_type", "thread_id"])
    op.create_index(op.f("ix_comments_parent_id"), "comments", ["parent_id"])

    op.create_table(
        "availability_intervals",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("scope_id", sa.String(length=255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("available", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_availability_intervals_scope_id"), "availability_intervals", ["scope_id"]
    )
    op.create_index(
        op.f("ix_availability_intervals_start_date"), "availability_intervals", ["start_date"]
    )

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("notification_type", sa.String(length=30), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.String(length=1000), nullable=False),
        sa.Column("request_id", sa.String(length=36), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_notifications_user_id"), "notifications", ["user_id"])
    op.create_index(
        op.f("ix_notifications_notification_type"), "notifications", ["notification_type"]
    )
    op.create_index(op.f("ix_notifications_is_read"), "notifications", ["is_read"])


def downgrade() -> None:
    op.drop_index(op.f("ix_notifications_is_read"), table_name="notifications")
    op.drop_index(op.f("ix_notifications_notification_type"), table_name="notifications")
    op.drop_index(op.f("ix_notifications_user_id"), table_name="notifications")
    op.drop_table("notifications")
    op.drop_index(
        op.f("ix_availability_intervals_start_date"), table_name="availability_intervals"
    )
    op.drop_index(op.f("ix_availability_intervals_scope_id"), table_name="availability_intervals")
    op.drop_table("availability_intervals")
    op.drop_index(op.f("ix_comments_parent_id"), table_name="comments")
    op.drop_index("ix_comments_thread", table_name="comments")
    op.drop_table("comments")
    op.drop_index(op.f("ix_employee_requests_status"), table_name="employee_requests")
    op.drop_index(op.f("ix_employee_requests_scope_id"), table_name="employee_requests")
    op.drop_index(op.f("ix_employee_requests_user_id"), table_name="employee_requests")
    op.drop_index(op.f("ix_employee_requests_request_type"), table_name="employee_requests")
    op.drop_table("employee_requests")
