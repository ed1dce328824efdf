"""Routes for the authenticated user's partner requests."""

from fastapi import APIRouter

from src.api.deps import CurrentUser, PartnerRequests
from src.schemas.partner_request import (
    DeleteResult,
    PartnerRequestDeletedResponse,
    PartnerRequestListResponse,
    PartnerRequestResponse,
    PartnerRequestUpdate,
    PartnerRequestUpdatedResponse,
)

router = APIRouter(prefix="/my-requests", tags=["requests"])


@router.get(
    "",
    response_model=PartnerRequestListResponse,
    summary="List my requests",
)
async def list_my_requests(user: CurrentUser, service: PartnerRequests) -> PartnerRequestListResponse:
    """List the requests the authenticated user has made."""
    requests = await service.list_requests_by_requester(user.email)
    return PartnerRequestListResponse(
        requests=[PartnerRequestResponse(**request) for request in requests]
    )


@router.put(
    "/{request_id}",
    response_model=PartnerRequestUpdatedResponse,
    summary="Update a request",
    description="Replaces the provided fields. An unknown id is not an error; `updated` is null.",
)
async def update_my_request(
    request_id: str,
    user: CurrentUser,
    service: PartnerRequests,
    data: PartnerRequestUpdate | None = None,
) -> PartnerRequestUpdatedResponse:
    """Update fields of a saved request.

    Args:
        request_id: Request to update.
        data: Fields to replace; a missing body changes nothing.
        user: The authenticated user context.
        service: Partner request service.

    Returns:
        PartnerRequestUpdatedResponse: The record after the update, if any.
    """
    updated = await service.update_request(
        request_id, data or PartnerRequestUpdate(), principal=user.email
    )
    return PartnerRequestUpdatedResponse(
        updated=PartnerRequestResponse(**updated) if updated else None
    )


@router.delete(
    "/{request_id}",
    response_model=PartnerRequestDeletedResponse,
    summary="Delete a request",
)
async def delete_my_request(
    request_id: str,
    user: CurrentUser,
    service: PartnerRequests,
) -> PartnerRequestDeletedResponse:
    """Delete a saved request. Deleting twice succeeds both times."""
    deleted = await service.delete_request(request_id, principal=user.email)
    return PartnerRequestDeletedResponse(result=DeleteResult(deleted_count=deleted))
