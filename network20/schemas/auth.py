"""Authentication schemas and current-user variants."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from network20.schemas.profile import Profile


class AuthUser(BaseModel):
    """Normalized authenticated identity.

    Built from a Supabase Auth user; the display name comes from the
    metadata supplied at sign-up.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Auth user ID")
    email: str | None = Field(default=None, description="User's email address if available")
    display_name: str | None = Field(default=None, description="Display name from sign-up metadata")

    @classmethod
    def from_supabase_user(cls, user: Any) -> "AuthUser":
        """Convert a Supabase Auth user object.

        Args:
            user: supabase_auth User instance.

        Returns:
            AuthUser: Normalized identity.
        """
        metadata = getattr(user, "user_metadata", None) or {}
        return cls(
            id=str(user.id),
            email=user.email,
            display_name=metadata.get("display_name") or metadata.get("full_name"),
        )


@dataclass
class Authenticated:
    """A signed-in identity; the local pointer is not consulted."""

    auth_user: AuthUser
    profile: Profile | None = None

    @property
    def profile_id(self) -> str | None:
        return self.profile.id if self.profile else None


@dataclass
class LocalPointer:
    """An anonymous device user identified by the local pointer."""

    profile_id: str


@dataclass
class Anonymous:
    """Nobody is signed in and no local profile is selected."""

    @property
    def profile_id(self) -> None:
        return None


CurrentUser = Authenticated | LocalPointer | Anonymous
