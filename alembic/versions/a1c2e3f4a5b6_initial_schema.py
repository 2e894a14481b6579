"""initial schema

Revision ID: a1c2e3f4a5b6
Revises:
Create Date: 2026-10-19 09:00:00.000000

This migration:
1. Creates the graduation_status and gender enum types
2. Creates the students, school_settings, graduation_years and
   contact_messages tables
3. Adds partial unique indexes so admission and certificate numbers are
   unique among students that are not soft-deleted
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a1c2e3f4a5b6"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _base_columns() -> list[sa.Column]:
    """Primary key and timestamps (from BaseModel)."""
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables, enums and indexes."""
    graduation_status_enum = postgresql.ENUM(
        "pending",
        "graduated",
        "revoked",
        name="graduation_status",
        create_type=False,
    )
    graduation_status_enum.create(op.get_bind(), checkfirst=True)

    gender_enum = postgresql.ENUM("male", "female", name="gender", create_type=False)
    gender_enum.create(op.get_bind(), checkfirst=True)

    # Students
    op.create_table(
        "students",
        *_base_columns(),
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("admission_number", sa.String(length=50), nullable=False),
        sa.Column("certificate_number", sa.String(length=50), nullable=True),
        sa.Column("graduation_year", sa.Integer(), nullable=True),
        sa.Column(
            "graduation_status",
            graduation_status_enum,
            nullable=False,
            server_default="pending",
        ),
        sa.Column("gender", gender_enum, nullable=True),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index(
        "uq_students_admission_number_active",
        "students",
        ["admission_number"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )
    op.create_index(
        "uq_students_certificate_number_active",
        "students",
        ["certificate_number"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL AND certificate_number IS NOT NULL"),
    )
    op.create_index("ix_students_graduation_status", "students", ["graduation_status"])
    op.create_index("ix_students_graduation_year", "students", ["graduation_year"])

    # School settings
    op.create_table(
        "school_settings",
        *_base_columns(),
        sa.Column("setting_key", sa.String(length=100), nullable=False),
        sa.Column("setting_value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("setting_key", name="uq_school_settings_setting_key"),
    )

    # Graduation years
    op.create_table(
        "graduation_years",
        *_base_columns(),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("year", name="uq_graduation_years_year"),
        sa.CheckConstraint(
            "year BETWEEN 1900 AND 2100", name="ck_graduation_years_year_range"
        ),
    )

    # Contact messages
    op.create_table(
        "contact_messages",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=300), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("admin_response", sa.Text(), nullable=True),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_contact_messages_is_read", "contact_messages", ["is_read"])


def downgrade() -> None:
    """Drop all tables and enum types."""
    op.drop_index("ix_contact_messages_is_read", table_name="contact_messages")
    op.drop_table("contact_messages")

    op.drop_table("graduation_years")
    op.drop_table("school_settings")

    op.drop_index("ix_students_graduation_year", table_name="students")
    op.drop_index("ix_students_graduation_status", table_name="students")
    op.drop_index("uq_students_certificate_number_active", table_name="students")
    op.drop_index("uq_students_admission_number_active", table_name="students")
    op.drop_table("students")

    postgresql.ENUM(name="gender").drop(op.get_bind(), checkfirst=True)
    postgresql.ENUM(name="graduation_status").drop(op.get_bind(), checkfirst=True)
