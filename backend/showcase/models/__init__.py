"""
ORM models for the four independent collections.

Importing this package registers every table with Base.metadata, which is
what Alembic autogenerate and Database.create_tables() rely on.
"""

from showcase.models.client import Client
from showcase.models.contact import Contact
from showcase.models.newsletter import NewsletterSubscriber
from showcase.models.project import Project

__all__ = ["Client", "Contact", "NewsletterSubscriber", "Project"]
