"""
Showcase Backend — Persistent Store access
===========================================

What:  The operations every collection supports:
       insert-one, list newest-first, delete-by-id, plus the commit that
       makes a write durable before the response is sent.
How:   CollectionStore is bound to one ORM model and works on the request's
       AsyncSession. Services commit through commit(); the session
       dependency rolls back whatever a failed request left open.
Who:   PortfolioService and the lead services, one store per entity.

Error translation:
    - Unknown or malformed id on delete  → NotFoundError (404)
    - IntegrityError on insert           → re-raised untouched; the caller
                                           knows which constraint it hit
    - Any other SQLAlchemyError          → DatabaseError (500) with an
                                           operation-specific message

Query plan (list):
    SELECT * FROM <table> ORDER BY created_at DESC, id DESC
    → served by the idx_<table>_created_at index; id only orders ties
"""

import logging
import uuid
from typing import Generic, List, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.database import Base
from showcase.exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CollectionStore(Generic[ModelT]):
    """
    Store operations for one collection.

    Args:
        model:     ORM class (must define `id` and `created_at`)
        resource:  Display name used in messages ("Project", "Subscriber")
        plural:    Lower-case plural used in list errors ("projects")
    """

    def __init__(self, model: Type[ModelT], resource: str, plural: str):
        self.model = model
        self.resource = resource
        self.plural = plural

    async def insert(self, db: AsyncSession, record: ModelT) -> ModelT:
        """
        Add `record` and flush so id/created_at are assigned and constraint
        violations surface inside the handler.
        """
        db.add(record)
        try:
            await db.flush()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error adding %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Error adding {self.resource.lower()}",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("%s created: %s", self.resource, record.id)
        return record

    async def commit(self, db: AsyncSession, action: str) -> None:
        """
        Commit the request's transaction before the handler returns, so a
        failed commit is reported as 500 instead of after a success response.

        Args:
            action: verb for the error message ("adding", "deleting")
        """
        try:
            await db.commit()
        except IntegrityError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error committing %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Error {action} {self.resource.lower()}",
                context={"error_type": type(e).__name__},
            ) from e

    async def list_newest_first(self, db: AsyncSession) -> List[ModelT]:
        # id breaks created_at ties so equal timestamps list in a stable order
        try:
            result = await db.execute(
                select(self.model).order_by(self.model.created_at.desc(), self.model.id.desc())
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing %s: %s", self.plural, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Error fetching {self.plural}",
                context={"error_type": type(e).__name__},
            ) from e

    async def delete(self, db: AsyncSession, record_id: str) -> ModelT:
        """
        Delete one record by id and return it (callers may need its fields,
        e.g. the image reference).

        Raises:
            NotFoundError: no record with that id (a malformed id cannot
                           match any record, so it is reported the same way)
        """
        try:
            key = uuid.UUID(str(record_id))
        except ValueError:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))

        try:
            record = await db.get(self.model, key)
            if record is None:
                raise NotFoundError(resource=self.resource, resource_id=str(record_id))

            await db.delete(record)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error deleting %s %s: %s", self.resource, record_id, str(e), exc_info=True
            )
            raise DatabaseError(
                message=f"Error deleting {self.resource.lower()}",
                context={"resource_id": str(record_id), "error_type": type(e).__name__},
            ) from e

        logger.info("%s deleted: %s", self.resource, record_id)
        return record
