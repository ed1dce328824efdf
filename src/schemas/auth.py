"""Authentication schemas for JWT tokens and user context."""

from pydantic import BaseModel, ConfigDict, Field


class UserContext(BaseModel):
    """Authenticated user context extracted from JWT token.

    The email is the principal every owner-scoped operation keys on.
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: str = Field(description="Identity provider user id (from JWT sub claim)")
    email: str = Field(description="Verified email address, the request principal")
    role: str | None = Field(default=None, description="User's role (e.g., 'user', 'admin')")


class TokenPayload(BaseModel):
    """JWT token payload structure for identity provider tokens."""

    model_config = ConfigDict(from_attributes=True)

    sub: str = Field(description="Subject - the user's id")
    email: str | None = Field(default=None, description="User's email address")
    role: str | None = Field(default=None, description="User's role")
    exp: int = Field(description="Expiration timestamp (Unix epoch)")
    iat: int = Field(description="Issued at timestamp (Unix epoch)")
    aud: str | list[str] | None = Field(default=None, description="Audience - intended recipient")
    iss: str | None = Field(default=None, description="Issuer - token issuer URL")

    def to_user_context(self) -> UserContext:
        """Convert token payload to UserContext.

        Callers must check that ``email`` is present first.
        """
        return UserContext(
            user_id=self.sub,
            email=self.email,
            role=self.role,
        )
