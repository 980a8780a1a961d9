"""
Showcase Backend — Project Route Handlers
==========================================

What:  GET/POST /api/projects and DELETE /api/projects/{id}.
Who:   The landing page lists projects; the admin panel adds and removes them.

Routes are thin: they pull fields out of the multipart body, validate them
into ProjectCreate and hand off to PortfolioService. Errors are raised as
ShowcaseError subclasses and formatted by the global handlers in main.py.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.database import get_db_session
from showcase.routes.deps import get_portfolio_service, read_image_upload, validate_payload
from showcase.schemas.common import ErrorResponse, MessageResponse
from showcase.schemas.portfolio import ProjectCreate, ProjectCreatedResponse, ProjectResponse
from showcase.services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Projects"])


@router.get(
    "/projects",
    response_model=List[ProjectResponse],
    responses={500: {"description": "Store unavailable", "model": ErrorResponse}},
    summary="List projects, newest first",
)
async def list_projects(
    db: AsyncSession = Depends(get_db_session),
    service: PortfolioService = Depends(get_portfolio_service),
) -> List[ProjectResponse]:
    projects = await service.list_projects(db)
    return [ProjectResponse.model_validate(project) for project in projects]


@router.post(
    "/projects",
    status_code=201,
    response_model=ProjectCreatedResponse,
    responses={
        400: {"description": "Missing fields, missing image, bad type or size", "model": ErrorResponse},
        500: {"description": "Store or file system error", "model": ErrorResponse},
    },
    summary="Add a project",
    description=(
        "Multipart form with `name`, `description` and an `image` file "
        "(jpeg, jpg, png or gif, max 5MB). The image is cropped to 450x350 "
        "and stored as JPEG."
    ),
)
async def create_project(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None, description="Project image (jpeg/jpg/png/gif, max 5MB)"),
    db: AsyncSession = Depends(get_db_session),
    service: PortfolioService = Depends(get_portfolio_service),
) -> ProjectCreatedResponse:
    upload = await read_image_upload(image)
    data = validate_payload(ProjectCreate, {"name": name, "description": description})

    project = await service.create_project(db, data, upload)
    return ProjectCreatedResponse(
        message="Project added successfully",
        project=ProjectResponse.model_validate(project),
    )


@router.delete(
    "/projects/{project_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Project not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Delete a project and its image",
)
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db_session),
    service: PortfolioService = Depends(get_portfolio_service),
) -> MessageResponse:
    await service.delete_project(db, project_id)
    return MessageResponse(message="Project deleted successfully")
