"""Partner Pydantic schemas for API request/response models.

Attribute names follow the database columns; aliases carry the JSON
field names the web client uses.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PartnerSortField(str, Enum):
    """Supported sort keys for the partner listing."""

    RATING = "rating"
    EXPERIENCE = "experience"


class PartnerCreate(BaseModel):
    """Schema for creating a partner profile.

    Every field is optional at parse time so the service can report the
    first missing one by name. Unknown keys, including ``rating`` and
    ``partnerCount``, are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = Field(default=None, description="Display name")
    profile_image: str | None = Field(default=None, alias="profileimage", description="Profile image URL")
    subject: str | None = Field(default=None, description="Subject studied")
    study_mode: str | None = Field(default=None, alias="studyMode", description="Online / offline")
    availability_time: str | None = Field(default=None, alias="availabilityTime", description="When available")
    location: str | None = Field(default=None, description="Location")
    experience_level: str | None = Field(default=None, alias="experienceLevel", description="Experience level")


# Checked in this order; the first missing one is reported
REQUIRED_PARTNER_FIELDS: tuple[str, ...] = (
    "name",
    "profile_image",
    "subject",
    "study_mode",
    "availability_time",
    "location",
    "experience_level",
)


class PartnerResponse(BaseModel):
    """Schema for partner profile API responses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(description="Partner unique identifier")
    name: str | None = Field(default=None)
    profile_image: str | None = Field(default=None, alias="profileimage")
    subject: str | None = Field(default=None)
    study_mode: str | None = Field(default=None, alias="studyMode")
    availability_time: str | None = Field(default=None, alias="availabilityTime")
    location: str | None = Field(default=None)
    experience_level: str | None = Field(default=None, alias="experienceLevel")
    rating: float = Field(default=0, description="Average rating")
    partner_count: int = Field(default=0, alias="partnerCount", description="Times this partner was requested")
    email: str | None = Field(default=None, description="Owner email")
    created_at: datetime | None = Field(default=None, alias="createdAt")


class PartnerDetailResponse(BaseModel):
    """Envelope for a single partner."""

    success: bool = True
    partner: PartnerResponse


class PartnerCreatedResponse(BaseModel):
    """Envelope returned after creating a partner profile."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Partner profile created successfully"
    partner_id: str = Field(alias="partnerId")


class RequestPartnerBody(BaseModel):
    """Body of the request-a-partner call."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_email: str | None = Field(default=None, alias="userEmail", description="Requester email")
