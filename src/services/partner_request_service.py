"""Partner request business logic service."""

import logging

from supabase import Client

from src.api.middleware.error_handler import ValidationError
from src.core.config import get_settings
from src.core.supabase import get_supabase_client
from src.models.partner import Partner, PartnerRequest
from src.schemas.partner_request import PartnerRequestUpdate
from src.services.partner_service import PartnerService, ensure_valid_id, utc_timestamp

logger = logging.getLogger(__name__)


def build_snapshot(partner: Partner, requester_email: str) -> dict:
    """Copy the partner fields a request keeps, as they are right now.

    The stored count is the one read before the increment plus one.
    """
    return {
        "partner_id": partner["id"],
        "partner_name": partner.get("name"),
        "partner_image": partner.get("profile_image"),
        "subject": partner.get("subject"),
        "study_mode": partner.get("study_mode"),
        "availability_time": partner.get("availability_time"),
        "location": partner.get("location"),
        "experience_level": partner.get("experience_level"),
        "rating": partner.get("rating"),
        "partner_count": (partner.get("partner_count") or 0) + 1,
        "requested_by": requester_email,
        "requested_at": utc_timestamp(),
    }


class PartnerRequestService:
    """Service for requests users make to study partners."""

    def __init__(
        self,
        client: Client | None = None,
        partner_service: PartnerService | None = None,
        enforce_ownership: bool | None = None,
    ) -> None:
        """Initialize partner request service.

        Args:
            client: Optional store client; defaults to the shared singleton.
            partner_service: Optional partner service for testing.
            enforce_ownership: Limit update/delete to the requester. Defaults
                to the ENFORCE_REQUEST_OWNERSHIP setting.
        """
        settings = get_settings()
        self.client = client or get_supabase_client()
        self.table = settings.partner_requests_table
        self.partner_service = partner_service or PartnerService(self.client)
        self.enforce_ownership = (
            settings.enforce_request_ownership if enforce_ownership is None else enforce_ownership
        )

    async def request_partner(self, partner_id: str, requester_email: str | None) -> PartnerRequest:
        """Record that a user wants to study with a partner.

        Bumps the partner's count, then stores a snapshot of the partner.
        The two writes are independent: if the insert fails the count stays
        incremented.

        Raises:
            ValidationError: If the requester is empty or the id is malformed.
            NotFoundError: If the partner does not exist.
        """
        if not requester_email:
            raise ValidationError("User email required")

        partner = await self.partner_service.get_partner(partner_id)

        await self.partner_service.increment_partner_count(partner["id"])

        snapshot = build_snapshot(partner, requester_email)
        response = self.client.table(self.table).insert(snapshot).execute()

        logger.info("Partner %s requested by %s", partner["id"], requester_email)
        return response.data[0]

    async def list_requests_by_requester(self, requester_email: str) -> list[PartnerRequest]:
        """Get every request the principal has made."""
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("requested_by", requester_email)
            .execute()
        )
        return response.data or []

    async def update_request(
        self,
        request_id: str,
        data: PartnerRequestUpdate,
        principal: str,
    ) -> PartnerRequest | None:
        """Replace the provided fields on a request.

        Updating an id that does not exist is a no-op.

        Args:
            request_id: Request to update.
            data: Fields to replace; unset fields are left alone.
            principal: Verified email of the caller.

        Returns:
            PartnerRequest | None: The record after the update, or None if
                there is no such request.
        """
        request_id = ensure_valid_id(request_id, "Invalid request ID")
        update_data = data.model_dump(exclude_unset=True)

        if update_data:
            query = self.client.table(self.table).update(update_data).eq("id", request_id)
            if self.enforce_ownership:
                query = query.eq("requested_by", principal)
            query.execute()
            logger.info("Updated request %s fields %s", request_id, sorted(update_data))

        query = self.client.table(self.table).select("*").eq("id", request_id)
        if self.enforce_ownership:
            query = query.eq("requested_by", principal)
        response = query.limit(1).execute()

        return response.data[0] if response.data else None

    async def delete_request(self, request_id: str, principal: str) -> int:
        """Delete a request.

        Deleting an id that does not exist succeeds and removes nothing.

        Returns:
            int: Number of deleted records.
        """
        request_id = ensure_valid_id(request_id, "Invalid request ID")

        query = self.client.table(self.table).delete().eq("id", request_id)
        if self.enforce_ownership:
            query = query.eq("requested_by", principal)
        response = query.execute()

        deleted = len(response.data or [])
        logger.info("Deleted %d request(s) with id %s", deleted, request_id)
        return deleted
