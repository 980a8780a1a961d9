"""
Showcase Backend — Portfolio Service (projects and client testimonials)
========================================================================

What:  Workflows for the two image-backed entities.
How:   Composes UploadService (validate → transform → store image),
       CollectionStore (database) and ImageStorage (file deletion).
Who:   Called by the /api/projects and /api/clients route handlers.

Create flow (POST):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate   │───▶│  Cover-fit   │───▶│  Insert  │
    │ (form)   │    │ type & size │    │  + store JPG │    │  record  │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘
    A failure after the image was stored removes the image again, so a
    rejected request leaves neither a record nor a file.

Delete flow (DELETE):
    1. Delete the record and commit (before the response is sent)
    2. Best-effort delete of the image file (missing file is fine)
    Between 1 and 2 a crash can leave a dangling file; never a record whose
    image was deleted underneath it by this service.

The service is stateless apart from the collaborators injected at startup.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from showcase.exceptions import ValidationError
from showcase.models import Client, Project
from showcase.schemas.portfolio import ClientCreate, ProjectCreate
from showcase.services.file_service import ImageStorage
from showcase.services.store import CollectionStore
from showcase.services.upload_service import MISSING_IMAGE_MESSAGE, UploadService

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Project, Client)

project_store: CollectionStore[Project] = CollectionStore(Project, "Project", "projects")
client_store: CollectionStore[Client] = CollectionStore(Client, "Client", "clients")


@dataclass
class ImageUpload:
    """The file part of a multipart request, already read into memory."""

    filename: str
    content_type: Optional[str]
    content: bytes
    size: Optional[int] = None


class PortfolioService:
    """
    Business logic for projects and clients.

    Args:
        uploads:  upload pipeline (validation, transform, storage write)
        storage:  image storage used to delete files of deleted records
    """

    def __init__(self, uploads: UploadService, storage: ImageStorage):
        self.uploads = uploads
        self.storage = storage

    # ── Projects ──────────────────────────────────────────────────────────

    async def list_projects(self, db: AsyncSession) -> List[Project]:
        return await project_store.list_newest_first(db)

    async def create_project(
        self, db: AsyncSession, data: ProjectCreate, image: Optional[ImageUpload]
    ) -> Project:
        return await self._create_with_image(
            db,
            kind="project",
            store=project_store,
            image=image,
            build=lambda reference: Project(
                name=data.name,
                description=data.description,
                image=reference,
            ),
        )

    async def delete_project(self, db: AsyncSession, project_id: str) -> Project:
        return await self._delete_with_image(db, project_store, project_id)

    # ── Clients ───────────────────────────────────────────────────────────

    async def list_clients(self, db: AsyncSession) -> List[Client]:
        return await client_store.list_newest_first(db)

    async def create_client(
        self, db: AsyncSession, data: ClientCreate, image: Optional[ImageUpload]
    ) -> Client:
        return await self._create_with_image(
            db,
            kind="client",
            store=client_store,
            image=image,
            build=lambda reference: Client(
                name=data.name,
                description=data.description,
                designation=data.designation,
                image=reference,
            ),
        )

    async def delete_client(self, db: AsyncSession, client_id: str) -> Client:
        return await self._delete_with_image(db, client_store, client_id)

    # ── Shared workflow ───────────────────────────────────────────────────

    async def _create_with_image(
        self,
        db: AsyncSession,
        kind: str,
        store: CollectionStore[RecordT],
        image: Optional[ImageUpload],
        build: Callable[[str], RecordT],
    ) -> RecordT:
        if image is None or not image.filename:
            raise ValidationError(message=MISSING_IMAGE_MESSAGE, field="image")

        reference = await self.uploads.process_upload(
            kind=kind,
            filename=image.filename,
            content_type=image.content_type,
            content=image.content,
            content_length=image.size,
        )

        try:
            record = await store.insert(db, build(reference))
            await store.commit(db, "adding")
            return record
        except Exception:
            # No orphaned image behind a failed insert or commit
            await self.storage.delete(reference)
            raise

    async def _delete_with_image(
        self, db: AsyncSession, store: CollectionStore[RecordT], record_id: str
    ) -> RecordT:
        record = await store.delete(db, record_id)
        # Record first, file second
        await store.commit(db, "deleting")

        removed = await self.storage.delete(record.image)
        if not removed:
            logger.info("No image file removed for %s %s (%s)", store.resource, record_id, record.image)
        return record
