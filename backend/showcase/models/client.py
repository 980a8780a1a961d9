"""
Showcase Backend — Client (testimonial) model
==============================================

What:  ORM model for the `clients` table: a satisfied client's testimonial
       with name, role and portrait.
Lifecycle: created on POST /api/clients, never updated, deleted together
           with its portrait image.
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from showcase.database import Base
from showcase.models.project import created_at_column, id_column


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[uuid.UUID] = id_column()
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    designation: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        comment="Public reference to the processed 450x350 JPEG",
    )
    created_at: Mapped[datetime] = created_at_column()

    __table_args__ = (
        Index("idx_clients_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}')>"
