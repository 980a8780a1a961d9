"""Create showcase tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates projects, clients, contacts and newsletter_subscribers.
How:   UUID primary keys, TIMESTAMP WITH TIME ZONE creation times and one
       created_at DESC index per table for the newest-first listings.
       newsletter_subscribers.email carries the UNIQUE constraint that
       enforces one subscription per address.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.Uuid(), nullable=False)


def _created_at_column() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
        comment="When the record was created (UTC)",
    )


def upgrade() -> None:
    op.create_table(
        "projects",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column(
            "image",
            sa.String(512),
            nullable=False,
            comment="Public reference of the processed JPEG, e.g. /uploads/project-...jpg",
        ),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_projects_created_at", "projects", [sa.text("created_at DESC")])

    op.create_table(
        "clients",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("designation", sa.String(255), nullable=False),
        sa.Column("image", sa.String(512), nullable=False),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_clients_created_at", "clients", [sa.text("created_at DESC")])

    op.create_table(
        "contacts",
        _id_column(),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("mobile", sa.String(64), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_contacts_created_at", "contacts", [sa.text("created_at DESC")])

    op.create_table(
        "newsletter_subscribers",
        _id_column(),
        sa.Column(
            "email",
            sa.String(320),
            nullable=False,
            comment="Lower-cased subscriber address",
        ),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_newsletter_subscribers_email"),
    )
    op.create_index(
        "idx_newsletter_subscribers_created_at",
        "newsletter_subscribers",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_newsletter_subscribers_created_at", table_name="newsletter_subscribers")
    op.drop_table("newsletter_subscribers")
    op.drop_index("idx_contacts_created_at", table_name="contacts")
    op.drop_table("contacts")
    op.drop_index("idx_clients_created_at", table_name="clients")
    op.drop_table("clients")
    op.drop_index("idx_projects_created_at", table_name="projects")
    op.drop_table("projects")
