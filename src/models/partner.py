"""Partner model type definitions for database operations."""

from typing import TypedDict


class Partner(TypedDict):
    """Partners table row representation.

    Maps directly to the database schema (snake_case columns).
    """

    id: str
    name: str
    profile_image: str
    subject: str
    study_mode: str
    availability_time: str
    location: str
    experience_level: str
    rating: float
    partner_count: int
    email: str | None
    created_at: str


class PartnerInsert(TypedDict):
    """Row written when a partner profile is created."""

    name: str
    profile_image: str
    subject: str
    study_mode: str
    availability_time: str
    location: str
    experience_level: str
    rating: float
    partner_count: int
    email: str
    created_at: str


class PartnerRequest(TypedDict):
    """Partner requests table row representation.

    Holds a snapshot of the partner taken when the request was made.
    """

    id: str
    partner_id: str
    partner_name: str | None
    partner_image: str | None
    subject: str | None
    study_mode: str | None
    availability_time: str | None
    location: str | None
    experience_level: str | None
    rating: float | None
    partner_count: int
    requested_by: str
    requested_at: str
