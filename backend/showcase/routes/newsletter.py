"""
Showcase Backend — Newsletter Route Handlers
=============================================

What:  POST /api/newsletter (landing page signup), GET /api/newsletters and
       DELETE /api/newsletters/{id} (admin panel).

A second signup with the same email returns 400 "Email already subscribed";
once that subscriber is deleted the address can subscribe again.
"""

from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from showcase.database import get_db_session
from showcase.routes.deps import read_payload, validate_payload
from showcase.schemas.common import ErrorResponse, MessageResponse
from showcase.schemas.lead import NewsletterCreate, NewsletterResponse
from showcase.services.lead_service import newsletter_service

router = APIRouter(prefix="/api", tags=["Newsletter"])


@router.post(
    "/newsletter",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing email or already subscribed", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Subscribe to the newsletter",
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": NewsletterCreate.model_json_schema(by_alias=True)},
                "application/x-www-form-urlencoded": {
                    "schema": NewsletterCreate.model_json_schema(by_alias=True)
                },
            },
            "required": True,
        }
    },
)
async def subscribe(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    data = validate_payload(NewsletterCreate, await read_payload(request))
    await newsletter_service.subscribe(db, data)
    return MessageResponse(message="Subscribed successfully")


@router.get(
    "/newsletters",
    response_model=List[NewsletterResponse],
    responses={500: {"description": "Store unavailable", "model": ErrorResponse}},
    summary="List newsletter subscribers, newest first",
)
async def list_subscribers(db: AsyncSession = Depends(get_db_session)) -> List[NewsletterResponse]:
    subscribers = await newsletter_service.list_subscribers(db)
    return [NewsletterResponse.model_validate(subscriber) for subscriber in subscribers]


@router.delete(
    "/newsletters/{subscriber_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Subscriber not found", "model": ErrorResponse}},
    summary="Remove a newsletter subscriber",
)
async def delete_subscriber(
    subscriber_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await newsletter_service.delete_subscriber(db, subscriber_id)
    return MessageResponse(message="Subscriber deleted successfully")
