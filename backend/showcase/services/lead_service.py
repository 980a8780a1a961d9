"""
Showcase Backend — Lead Services (contact form and newsletter)
===============================================================

What:  Workflows for the two landing-page forms.
Who:   Called by the /api/contact(s) and /api/newsletter(s) route handlers.

Newsletter uniqueness:
    The UNIQUE constraint on newsletter_subscribers.email is the only source
    of truth. subscribe() inserts straight away and translates the resulting
    IntegrityError into DuplicateRecordError ("Email already subscribed").
    There is no SELECT-then-INSERT pre-check, so two concurrent signups with
    the same address cannot both succeed.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.exceptions import DuplicateRecordError
from showcase.models import Contact, NewsletterSubscriber
from showcase.schemas.lead import ContactCreate, NewsletterCreate
from showcase.services.store import CollectionStore

logger = logging.getLogger(__name__)

ALREADY_SUBSCRIBED_MESSAGE = "Email already subscribed"

contact_store: CollectionStore[Contact] = CollectionStore(Contact, "Contact", "contacts")
newsletter_store: CollectionStore[NewsletterSubscriber] = CollectionStore(
    NewsletterSubscriber, "Subscriber", "subscribers"
)


class ContactService:
    """Contact form submissions: create, list, delete."""

    async def submit(self, db: AsyncSession, data: ContactCreate) -> Contact:
        contact = Contact(
            full_name=data.full_name,
            email=data.email,
            mobile=data.mobile,
            city=data.city,
        )
        await contact_store.insert(db, contact)
        await contact_store.commit(db, "adding")
        return contact

    async def list_contacts(self, db: AsyncSession) -> List[Contact]:
        return await contact_store.list_newest_first(db)

    async def delete_contact(self, db: AsyncSession, contact_id: str) -> Contact:
        contact = await contact_store.delete(db, contact_id)
        await contact_store.commit(db, "deleting")
        return contact


class NewsletterService:
    """Newsletter subscribers: subscribe, list, delete."""

    async def subscribe(self, db: AsyncSession, data: NewsletterCreate) -> NewsletterSubscriber:
        """
        Raises:
            DuplicateRecordError: the (lower-cased) email is already subscribed
        """
        try:
            subscriber = await newsletter_store.insert(db, NewsletterSubscriber(email=data.email))
            await newsletter_store.commit(db, "adding")
            return subscriber
        except IntegrityError as e:
            await db.rollback()
            logger.info("Duplicate newsletter signup rejected")
            raise DuplicateRecordError(
                message=ALREADY_SUBSCRIBED_MESSAGE,
                field="email",
            ) from e

    async def list_subscribers(self, db: AsyncSession) -> List[NewsletterSubscriber]:
        return await newsletter_store.list_newest_first(db)

    async def delete_subscriber(self, db: AsyncSession, subscriber_id: str) -> NewsletterSubscriber:
        subscriber = await newsletter_store.delete(db, subscriber_id)
        await newsletter_store.commit(db, "deleting")
        return subscriber


contact_service = ContactService()
newsletter_service = NewsletterService()
