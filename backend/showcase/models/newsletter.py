"""
Showcase Backend — Newsletter subscriber model
===============================================

What:  ORM model for the `newsletter_subscribers` table.

Uniqueness:
    The UNIQUE constraint on `email` is the single source of truth for
    "no two subscribers share an email". A duplicate insert fails with
    IntegrityError, which NewsletterService turns into the friendly
    "Email already subscribed" response. Emails are lower-cased before
    insert, so the constraint is effectively case-insensitive.
"""

import uuid
from datetime import datetime

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from showcase.database import Base
from showcase.models.project import created_at_column, id_column


class NewsletterSubscriber(Base):
    __tablename__ = "newsletter_subscribers"

    id: Mapped[uuid.UUID] = id_column()
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    created_at: Mapped[datetime] = created_at_column()

    __table_args__ = (
        UniqueConstraint("email", name="uq_newsletter_subscribers_email"),
        Index("idx_newsletter_subscribers_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<NewsletterSubscriber(id={self.id}, email='{self.email}')>"
