"""
Pydantic schemas for user inserts and records.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    """Schema for creating a new user."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name"
    )

    email: EmailStr = Field(
        ...,
        description="User's email address"
    )

    password: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Opaque credential string, typically a password hash"
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        if not v or not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()


class UserRecord(BaseModel):
    """A persisted users row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    password: str


def normalize_email(email: str) -> str:
    """Normalize a lookup email the same way stored emails are normalized."""
    return email.strip().lower()
