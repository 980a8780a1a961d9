"""
Showcase Backend — Route Dependencies
======================================

What:  FastAPI dependencies that hand process-scoped collaborators (built in
       create_app and kept on app.state) to route handlers, plus the helpers
       that turn request bodies into validated schemas.
"""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar

import pydantic
from fastapi import Request, UploadFile

from showcase.exceptions import ValidationError
from showcase.services.portfolio_service import ImageUpload, PortfolioService

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)


def get_portfolio_service(request: Request) -> PortfolioService:
    return request.app.state.portfolio_service


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Read a JSON or form-encoded body into a dict.

    The landing page posts JSON; plain HTML forms post
    application/x-www-form-urlencoded or multipart. All three are accepted.
    """
    content_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()

    if content_type in ("application/x-www-form-urlencoded", "multipart/form-data"):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    body = await request.body()
    if not body:
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        raise ValidationError(message="Request body must be valid JSON or form data")
    if not isinstance(data, dict):
        raise ValidationError(message="Request body must be a JSON object")
    return data


def validate_payload(schema: Type[SchemaT], data: Dict[str, Any]) -> SchemaT:
    """
    Validate `data` against `schema`, converting Pydantic's error into our
    400 ValidationError that lists the offending fields by wire name.
    """
    try:
        return schema.model_validate(data)
    except pydantic.ValidationError as e:
        fields = []
        for error in e.errors():
            name = ".".join(str(part) for part in error["loc"]) or "body"
            field = schema.model_fields.get(name)
            fields.append(field.alias if field is not None and field.alias else name)
        raise ValidationError(
            message=f"Missing or invalid fields: {', '.join(fields)}",
            context={"fields": fields},
        )


async def read_image_upload(image: Optional[UploadFile]) -> Optional[ImageUpload]:
    """Read an optional multipart file part into memory and close it."""
    if image is None:
        return None
    try:
        content = await image.read()
    finally:
        await image.close()
    logger.info(
        "Received upload: filename=%s, content_type=%s, size=%d bytes",
        image.filename or "unknown",
        image.content_type,
        len(content),
    )
    return ImageUpload(
        filename=image.filename or "",
        content_type=image.content_type,
        content=content,
        size=image.size,
    )
