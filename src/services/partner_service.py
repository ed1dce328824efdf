"""Partner directory business logic service."""

import logging
import re
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from supabase import Client

from src.api.middleware.error_handler import NotFoundError, ValidationError
from src.core.config import get_settings
from src.core.supabase import get_supabase_client
from src.models.partner import Partner, PartnerInsert
from src.schemas.partner import REQUIRED_PARTNER_FIELDS, PartnerCreate, PartnerSortField

logger = logging.getLogger(__name__)

# Characters that delimit PostgREST filter expressions or act as wildcards
_SEARCH_RESERVED = re.compile(r'[,()%*\\"]')


def ensure_valid_id(value: str, message: str = "Invalid ID") -> str:
    """Check that a path id is a well-formed store identifier.

    Args:
        value: Raw id from the request path.
        message: Error message used when the id is malformed.

    Returns:
        str: The id in canonical form.

    Raises:
        ValidationError: If the id is not a UUID.
    """
    try:
        return str(UUID(value))
    except (ValueError, TypeError, AttributeError) as e:
        raise ValidationError(message) from e


def utc_timestamp() -> str:
    """Current UTC time in ISO-8601, as stored in timestamp columns."""
    return datetime.now(timezone.utc).isoformat()


class PartnerService:
    """Service for the partner profile directory."""

    def __init__(self, client: Client | None = None) -> None:
        """Initialize partner service.

        Args:
            client: Optional store client; defaults to the shared singleton.
        """
        self.client = client or get_supabase_client()
        self.table = get_settings().partners_table

    async def list_partners(
        self,
        search: str | None = None,
        sort: str | None = None,
    ) -> list[Partner]:
        """List partners, optionally filtered and sorted.

        Args:
            search: Case-insensitive substring matched against name or subject.
            sort: "rating" (highest first) or "experience" (ascending).
                Anything else keeps store order.

        Returns:
            list[Partner]: Every matching partner.
        """
        query = self.client.table(self.table).select("*")

        term = _SEARCH_RESERVED.sub("", search or "").strip()
        if term:
            query = query.or_(f"name.ilike.%{term}%,subject.ilike.%{term}%")

        if sort == PartnerSortField.RATING.value:
            query = query.order("rating", desc=True)
        elif sort == PartnerSortField.EXPERIENCE.value:
            query = query.order("experience_level")

        response = query.execute()
        return response.data or []

    async def get_partner(self, partner_id: str) -> Partner:
        """Get a partner by id.

        Raises:
            ValidationError: If the id is malformed.
            NotFoundError: If no partner has the id.
        """
        partner_id = ensure_valid_id(partner_id, "Invalid partner ID")

        response = (
            self.client.table(self.table)
            .select("*")
            .eq("id", partner_id)
            .limit(1)
            .execute()
        )

        if not response.data:
            raise NotFoundError("Partner not found")
        return response.data[0]

    async def create_partner(self, data: PartnerCreate, owner_email: str) -> str:
        """Create a partner profile owned by the given principal.

        Rating and request count always start at zero.

        Args:
            data: Submitted profile fields.
            owner_email: Verified email of the caller.

        Returns:
            str: Id of the new partner.

        Raises:
            ValidationError: Naming the first missing required field.
        """
        for field_name in REQUIRED_PARTNER_FIELDS:
            if not getattr(data, field_name):
                label = PartnerCreate.model_fields[field_name].alias or field_name
                raise ValidationError(f"{label} is required")

        row: PartnerInsert = {
            **data.model_dump(include=set(REQUIRED_PARTNER_FIELDS)),
            "rating": 0,
            "partner_count": 0,
            "email": owner_email,
            "created_at": utc_timestamp(),
        }

        response = self.client.table(self.table).insert(row).execute()
        partner_id = response.data[0]["id"]

        logger.info("Created partner profile %s for %s", partner_id, owner_email)
        return partner_id

    async def get_partner_by_owner(self, owner_email: str) -> Partner:
        """Get the partner profile created by a principal.

        Raises:
            NotFoundError: If the principal has no profile.
        """
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("email", owner_email)
            .limit(1)
            .execute()
        )

        if not response.data:
            raise NotFoundError("Partner profile not found")
        return response.data[0]

    async def increment_partner_count(self, partner_id: str) -> Any:
        """Atomically add one to a partner's request count.

        Runs as a single store-side statement so concurrent requests never
        lose an increment.
        """
        response = self.client.rpc(
            "increment_partner_count",
            {"target_id": partner_id},
        ).execute()
        return response.data
