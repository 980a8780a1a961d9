"""
Showcase Backend — Project and Client schemas
==============================================

What:  API contracts for the two image-backed entities. The text fields
       arrive as multipart form values next to the `image` file; the route
       collects them into ProjectCreate / ClientCreate for validation.
"""

from pydantic import BaseModel, Field

from showcase.schemas.common import RecordCreate, RecordResponse


class ProjectCreate(RecordCreate):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)


class ClientCreate(RecordCreate):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    designation: str = Field(min_length=1, max_length=255)


class ProjectResponse(RecordResponse):
    name: str
    description: str
    image: str = Field(description="Public path of the 450x350 JPEG, e.g. /uploads/project-...jpg")


class ClientResponse(RecordResponse):
    name: str
    description: str
    designation: str
    image: str = Field(description="Public path of the 450x350 JPEG, e.g. /uploads/client-...jpg")


class ProjectCreatedResponse(BaseModel):
    """Body of POST /api/projects (201)."""

    message: str = Field(default="Project added successfully")
    project: ProjectResponse


class ClientCreatedResponse(BaseModel):
    """Body of POST /api/clients (201)."""

    message: str = Field(default="Client added successfully")
    client: ClientResponse
