"""
Showcase Backend — Contact Form Route Handlers
===============================================

What:  POST /api/contact (landing page form), GET /api/contacts and
       DELETE /api/contacts/{id} (admin panel).

POST accepts JSON or form-encoded bodies with fullName, email, mobile, city.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.database import get_db_session
from showcase.routes.deps import read_payload, validate_payload
from showcase.schemas.common import ErrorResponse, MessageResponse
from showcase.schemas.lead import ContactCreate, ContactResponse
from showcase.services.lead_service import contact_service

router = APIRouter(prefix="/api", tags=["Contacts"])


@router.post(
    "/contact",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing or blank fields", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Submit the contact form",
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": ContactCreate.model_json_schema(by_alias=True)},
                "application/x-www-form-urlencoded": {
                    "schema": ContactCreate.model_json_schema(by_alias=True)
                },
            },
            "required": True,
        }
    },
)
async def submit_contact(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    data = validate_payload(ContactCreate, await read_payload(request))
    await contact_service.submit(db, data)
    return MessageResponse(message="Contact form submitted successfully")


@router.get(
    "/contacts",
    response_model=List[ContactResponse],
    responses={500: {"description": "Store unavailable", "model": ErrorResponse}},
    summary="List contact submissions, newest first",
)
async def list_contacts(db: AsyncSession = Depends(get_db_session)) -> List[ContactResponse]:
    contacts = await contact_service.list_contacts(db)
    return [ContactResponse.model_validate(contact) for contact in contacts]


@router.delete(
    "/contacts/{contact_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Contact not found", "model": ErrorResponse}},
    summary="Delete a contact submission",
)
async def delete_contact(
    contact_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await contact_service.delete_contact(db, contact_id)
    return MessageResponse(message="Contact deleted successfully")
