"""
Showcase Backend — Contact and Newsletter schemas
==================================================

What:  API contracts for the landing-page forms. Both accept JSON or
       form-encoded bodies; keys are camelCase (fullName) on the wire.
"""

from pydantic import Field, field_validator

from showcase.schemas.common import RecordCreate, RecordResponse


class ContactCreate(RecordCreate):
    full_name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=320)
    mobile: str = Field(min_length=1, max_length=64)
    city: str = Field(min_length=1, max_length=255)


class NewsletterCreate(RecordCreate):
    email: str = Field(min_length=1, max_length=320)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-cases the address so the unique constraint ignores case."""
        return v.lower()


class ContactResponse(RecordResponse):
    full_name: str
    email: str
    mobile: str
    city: str


class NewsletterResponse(RecordResponse):
    email: str
