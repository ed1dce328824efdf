"""FastAPI dependency injection functions."""

import logging
from typing import Annotated

from fastapi import Depends, Header

from src.api.middleware.auth import AuthError, AuthErrorCode, verify_principal
from src.api.middleware.error_handler import AuthenticationError
from src.schemas.auth import UserContext
from src.services.partner_request_service import PartnerRequestService
from src.services.partner_service import PartnerService

logger = logging.getLogger(__name__)


async def get_current_user(
    authorization: Annotated[str, Header(description="Bearer token")] = "",
) -> UserContext:
    """Extract and validate the current user from the Authorization header.

    Runs before any protected handler body; a failure here means the
    handler never executes.

    Args:
        authorization: The Authorization header value (Bearer token).

    Returns:
        UserContext: The authenticated user's context.

    Raises:
        AuthenticationError: 401 if token is missing, invalid, or expired.
    """
    if not authorization:
        raise AuthenticationError("Unauthorized access. Token not found")

    # The token is everything after the first space of "Bearer <token>"
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        raise AuthenticationError("Invalid authorization header format. Expected: Bearer <token>")
    if not token:
        raise AuthenticationError("Unauthorized access. Token not found")

    try:
        payload = verify_principal(token)
    except AuthError as e:
        logger.info("Rejected identity token: %s", e.code.value)
        if e.code == AuthErrorCode.TOKEN_EXPIRED:
            raise AuthenticationError("Token has expired") from e
        raise AuthenticationError(e.message) from e

    return payload.to_user_context()


def get_partner_service() -> PartnerService:
    """Provide a partner service bound to the shared store client."""
    return PartnerService()


def get_partner_request_service() -> PartnerRequestService:
    """Provide a partner request service bound to the shared store client."""
    return PartnerRequestService()


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[UserContext, Depends(get_current_user)]
Partners = Annotated[PartnerService, Depends(get_partner_service)]
PartnerRequests = Annotated[PartnerRequestService, Depends(get_partner_request_service)]
