"""
Showcase Backend — Contact form submission model
=================================================

What:  ORM model for the `contacts` table. One row per landing-page contact
       form submission; created and deleted only.
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from showcase.database import Base
from showcase.models.project import created_at_column, id_column


class Contact(Base):
    __tablename__ = "contacts"

    id: Mapped[uuid.UUID] = id_column()
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    mobile: Mapped[str] = mapped_column(String(64), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = created_at_column()

    __table_args__ = (
        Index("idx_contacts_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, email='{self.email}')>"
