"""Partner directory API routes."""

from fastapi import APIRouter, Query

from src.api.deps import CurrentUser, PartnerRequests, Partners
from src.schemas.partner import (
    PartnerCreate,
    PartnerCreatedResponse,
    PartnerDetailResponse,
    PartnerResponse,
    RequestPartnerBody,
)
from src.schemas.partner_request import PartnerRequestCreatedResponse, PartnerRequestResponse

router = APIRouter(prefix="/partners", tags=["partners"])


@router.get(
    "",
    response_model=list[PartnerResponse],
    summary="List partners",
    description="Lists every partner, optionally searched by name/subject and sorted by rating or experience.",
)
async def list_partners(
    service: Partners,
    search: str | None = Query(default=None, description="Case-insensitive name or subject fragment"),
    sort: str | None = Query(default=None, description="'rating' or 'experience'"),
) -> list[PartnerResponse]:
    """List partners matching the optional search.

    Args:
        service: Partner service.
        search: Optional search text.
        sort: Optional sort key; unknown keys are ignored.

    Returns:
        list[PartnerResponse]: Matching partners.
    """
    partners = await service.list_partners(search=search, sort=sort)
    return [PartnerResponse(**partner) for partner in partners]


@router.get(
    "/my-profile",
    response_model=PartnerDetailResponse,
    summary="Get current user's partner profile",
)
async def get_my_profile(user: CurrentUser, service: Partners) -> PartnerDetailResponse:
    """Get the partner profile owned by the authenticated user.

    Raises:
        NotFoundError: 404 if the user has not created a profile.
    """
    partner = await service.get_partner_by_owner(user.email)
    return PartnerDetailResponse(partner=PartnerResponse(**partner))


@router.get(
    "/{partner_id}",
    response_model=PartnerDetailResponse,
    summary="Get a partner",
    responses={
        400: {"description": "Malformed partner id"},
        404: {"description": "Partner not found"},
    },
)
async def get_partner(partner_id: str, service: Partners) -> PartnerDetailResponse:
    """Get a single partner by id."""
    partner = await service.get_partner(partner_id)
    return PartnerDetailResponse(partner=PartnerResponse(**partner))


@router.post(
    "/{partner_id}/request",
    response_model=PartnerRequestCreatedResponse,
    summary="Request a partner",
    description="Increments the partner's request count and saves a snapshot of the partner for the requester.",
)
async def request_partner(
    partner_id: str,
    service: PartnerRequests,
    body: RequestPartnerBody | None = None,
) -> PartnerRequestCreatedResponse:
    """Save a request for a partner on behalf of ``userEmail``.

    Args:
        partner_id: Partner being requested.
        service: Partner request service.
        body: Body carrying the requester email.

    Returns:
        PartnerRequestCreatedResponse: The stored request.
    """
    requester = body.user_email if body else None
    saved = await service.request_partner(partner_id, requester)
    return PartnerRequestCreatedResponse(result=PartnerRequestResponse(**saved))


@router.post(
    "",
    response_model=PartnerCreatedResponse,
    summary="Create a partner profile",
    responses={400: {"description": "A required field is missing"}},
)
async def create_partner(
    user: CurrentUser,
    service: Partners,
    data: PartnerCreate | None = None,
) -> PartnerCreatedResponse:
    """Create a partner profile owned by the authenticated user.

    Args:
        data: Profile fields; a missing body counts as empty.
        user: The authenticated user context.
        service: Partner service.

    Returns:
        PartnerCreatedResponse: Id of the new profile.
    """
    partner_id = await service.create_partner(data or PartnerCreate(), owner_email=user.email)
    return PartnerCreatedResponse(partner_id=partner_id)
