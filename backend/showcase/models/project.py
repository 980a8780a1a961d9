"""
Showcase Backend — Project and shared column helpers
=====================================================

What:  ORM model for the `projects` table plus the column definitions every
       record shares (UUID primary key, UTC creation timestamp).
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.

Table Design:
    - UUID primary key generated in Python, so SQLite (tests) and PostgreSQL
      behave the same
    - image: public reference such as "/uploads/project-<token>.jpg"
    - created_at: UTC with timezone; indexed because every list query is
      ORDER BY created_at DESC
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from showcase.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def id_column() -> Mapped[uuid.UUID]:
    """Primary key column shared by all record tables."""
    return mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Server-assigned record identifier",
    )


def created_at_column() -> Mapped[datetime]:
    """Insert-time UTC timestamp shared by all record tables."""
    return mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this record was created (UTC)",
    )


class Project(Base):
    """
    A portfolio project shown on the landing page.

    Lifecycle:
        1. Created by POST /api/projects after its image has been stored
        2. Never updated
        3. Deleted by DELETE /api/projects/{id}; the image file goes with it
    """

    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        comment="Public reference to the processed 450x350 JPEG",
    )
    created_at: Mapped[datetime] = created_at_column()

    __table_args__ = (
        Index("idx_projects_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}')>"
