"""
Showcase Backend — Client (testimonial) Route Handlers
=======================================================

What:  GET/POST /api/clients and DELETE /api/clients/{id}.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.database import get_db_session
from showcase.routes.deps import get_portfolio_service, read_image_upload, validate_payload
from showcase.schemas.common import ErrorResponse, MessageResponse
from showcase.schemas.portfolio import ClientCreate, ClientCreatedResponse, ClientResponse
from showcase.services.portfolio_service import PortfolioService

router = APIRouter(prefix="/api", tags=["Clients"])


@router.get(
    "/clients",
    response_model=List[ClientResponse],
    responses={500: {"description": "Store unavailable", "model": ErrorResponse}},
    summary="List client testimonials, newest first",
)
async def list_clients(
    db: AsyncSession = Depends(get_db_session),
    service: PortfolioService = Depends(get_portfolio_service),
) -> List[ClientResponse]:
    clients = await service.list_clients(db)
    return [ClientResponse.model_validate(client) for client in clients]


@router.post(
    "/clients",
    status_code=201,
    response_model=ClientCreatedResponse,
    responses={
        400: {"description": "Missing fields, missing image, bad type or size", "model": ErrorResponse},
        500: {"description": "Store or file system error", "model": ErrorResponse},
    },
    summary="Add a client testimonial",
)
async def create_client(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    designation: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None, description="Client portrait (jpeg/jpg/png/gif, max 5MB)"),
    db: AsyncSession = Depends(get_db_session),
    service: PortfolioService = Depends(get_portfolio_service),
) -> ClientCreatedResponse:
    upload = await read_image_upload(image)
    data = validate_payload(
        ClientCreate,
        {"name": name, "description": description, "designation": designation},
    )

    client = await service.create_client(db, data, upload)
    return ClientCreatedResponse(
        message="Client added successfully",
        client=ClientResponse.model_validate(client),
    )


@router.delete(
    "/clients/{client_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Client not found", "model": ErrorResponse}},
    summary="Delete a client testimonial and its image",
)
async def delete_client(
    client_id: str,
    db: AsyncSession = Depends(get_db_session),
    service: PortfolioService = Depends(get_portfolio_service),
) -> MessageResponse:
    await service.delete_client(db, client_id)
    return MessageResponse(message="Client deleted successfully")
