"""Partner request Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PartnerRequestUpdate(BaseModel):
    """Schema for editing a saved partner request.

    All fields are optional for partial updates. Only these snapshot
    fields can be changed; ids, requester and timestamp are not editable.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    partner_name: str | None = Field(default=None, alias="partnerName")
    partner_image: str | None = Field(default=None, alias="partnerImage")
    subject: str | None = Field(default=None)
    study_mode: str | None = Field(default=None, alias="studyMode")
    availability_time: str | None = Field(default=None, alias="availabilityTime")
    location: str | None = Field(default=None)
    experience_level: str | None = Field(default=None, alias="experienceLevel")
    rating: float | None = Field(default=None)
    partner_count: int | None = Field(default=None, alias="partnerCount")


class PartnerRequestResponse(BaseModel):
    """Schema for partner request API responses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(description="Request unique identifier")
    partner_id: str = Field(alias="partnerId", description="Requested partner id")
    partner_name: str | None = Field(default=None, alias="partnerName")
    partner_image: str | None = Field(default=None, alias="partnerImage")
    subject: str | None = Field(default=None)
    study_mode: str | None = Field(default=None, alias="studyMode")
    availability_time: str | None = Field(default=None, alias="availabilityTime")
    location: str | None = Field(default=None)
    experience_level: str | None = Field(default=None, alias="experienceLevel")
    rating: float | None = Field(default=None)
    partner_count: int | None = Field(default=None, alias="partnerCount")
    requested_by: str = Field(alias="requestedBy", description="Requester email")
    requested_at: datetime | None = Field(default=None, alias="requestedAt")


class PartnerRequestCreatedResponse(BaseModel):
    """Envelope returned after requesting a partner."""

    success: bool = True
    message: str = "Request saved"
    result: PartnerRequestResponse


class PartnerRequestListResponse(BaseModel):
    """Envelope for the caller's requests."""

    success: bool = True
    requests: list[PartnerRequestResponse] = Field(default_factory=list)


class PartnerRequestUpdatedResponse(BaseModel):
    """Envelope returned after an update.

    ``updated`` is null when no request with the id exists.
    """

    success: bool = True
    updated: PartnerRequestResponse | None = None


class DeleteResult(BaseModel):
    """Outcome of a delete."""

    model_config = ConfigDict(populate_by_name=True)

    deleted_count: int = Field(alias="deletedCount")


class PartnerRequestDeletedResponse(BaseModel):
    """Envelope returned after a delete, including no-op deletes."""

    success: bool = True
    result: DeleteResult
