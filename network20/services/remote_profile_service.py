"""Profile persistence on the hosted Supabase backend."""

import logging
from typing import Any

from supabase import Client

from network20.core.errors import AuthenticationError, BackendError
from network20.core.supabase import PROFILES_TABLE
from network20.schemas.common import ReadResult
from network20.schemas.profile import Profile, ProfileCreate, ProfileUpdate
from network20.services.auth_service import AuthService
from network20.services.local_profile_service import utc_now

logger = logging.getLogger(__name__)


def _to_profiles(rows: list[dict[str, Any]] | None) -> list[Profile]:
    return [Profile.model_validate(row) for row in rows or []]


class RemoteProfileService:
    """Service for managing profiles in the Supabase profiles table.

    Reads only expose public profiles except for direct lookups by ID.
    Ownership of updates and deletes is enforced by the table's row-level
    security policies, not here.
    """

    def __init__(self, client: Client, auth: AuthService) -> None:
        """Initialize remote profile service.

        Args:
            client: Supabase client carrying the user's session.
            auth: Auth service used to resolve the signed-in user.
        """
        self.client = client
        self.auth = auth

    async def list_profiles(self) -> ReadResult[list[Profile]]:
        """Get public profiles, newest first."""
        try:
            response = (
                self.client.table(PROFILES_TABLE)
                .select("*")
                .eq("is_public", True)
                .order("created_at", desc=True)
                .execute()
            )
            return ReadResult.success(_to_profiles(response.data))
        except Exception as e:
            logger.warning("Failed to list profiles: %s", e)
            return ReadResult.failure(str(e), [])

    async def get_profile(self, profile_id: str) -> ReadResult[Profile | None]:
        """Get a profile by ID regardless of visibility.

        Args:
            profile_id: The profile's ID.

        Returns:
            ReadResult: The profile, or None if not found.
        """
        try:
            response = (
                self.client.table(PROFILES_TABLE)
                .select("*")
                .eq("id", profile_id)
                .maybe_single()
                .execute()
            )
        except Exception as e:
            logger.warning("Failed to get profile %s: %s", profile_id, e)
            return ReadResult.failure(str(e), None)

        # maybe_single() yields no response at all when the row is missing
        if response is None or not response.data:
            return ReadResult.success(None)
        return ReadResult.success(Profile.model_validate(response.data))

    async def create_profile(self, data: ProfileCreate) -> Profile:
        """Create a profile owned by the signed-in user.

        Args:
            data: The profile fields.

        Returns:
            Profile: The row as stored by the backend.

        Raises:
            AuthenticationError: If nobody is signed in.
            BackendError: If the insert fails.
        """
        auth_user = await self.auth.get_current_auth_user()
        if not auth_user:
            raise AuthenticationError("You must be signed in to create a profile")

        profile_data = data.model_dump(mode="json")
        profile_data["user_id"] = auth_user.id

        try:
            response = self.client.table(PROFILES_TABLE).insert(profile_data).execute()
        except Exception as e:
            logger.error("Failed to create profile for user %s: %s", auth_user.id, e)
            raise BackendError(f"Failed to create profile: {e}") from e

        if not response.data:
            raise BackendError("Failed to create profile")

        profile = Profile.model_validate(response.data[0])
        logger.info("Created profile %s for user %s", profile.id, auth_user.id)
        return profile

    async def update_profile(self, profile_id: str, data: ProfileUpdate) -> Profile | None:
        """Update a profile.

        Args:
            profile_id: The profile's ID.
            data: The fields to update.

        Returns:
            Profile | None: The updated profile or None if no row was updated.

        Raises:
            BackendError: If the update fails.
        """
        update_data = data.changes()

        if not update_data:
            # No changes, return current profile
            return (await self.get_profile(profile_id)).data

        update_data["updated_at"] = utc_now().isoformat()

        try:
            response = (
                self.client.table(PROFILES_TABLE)
                .update(update_data)
                .eq("id", profile_id)
                .execute()
            )
        except Exception as e:
            logger.error("Failed to update profile %s: %s", profile_id, e)
            raise BackendError(f"Failed to update profile: {e}") from e

        return Profile.model_validate(response.data[0]) if response.data else None

    async def delete_profile(self, profile_id: str) -> bool:
        """Delete a profile.

        Returns:
            bool: Whether a row was deleted.

        Raises:
            BackendError: If the delete fails.
        """
        try:
            response = (
                self.client.table(PROFILES_TABLE)
                .delete()
                .eq("id", profile_id)
                .execute()
            )
        except Exception as e:
            logger.error("Failed to delete profile %s: %s", profile_id, e)
            raise BackendError(f"Failed to delete profile: {e}") from e

        return bool(response.data)

    async def search_profiles(self, query: str) -> ReadResult[list[Profile]]:
        """Search public profiles, newest first.

        PostgREST cannot pattern-match inside the skills array, so public rows
        are fetched and matched with the same case-insensitive substring test
        the local adapter uses.
        """
        result = await self.list_profiles()
        if not result.ok:
            return result
        return ReadResult.success([p for p in result.data if p.matches(query)])

    async def get_available_profiles(self) -> ReadResult[list[Profile]]:
        """Get public profiles open to work, newest first."""
        try:
            response = (
                self.client.table(PROFILES_TABLE)
                .select("*")
                .eq("is_public", True)
                .eq("is_available", True)
                .order("created_at", desc=True)
                .execute()
            )
            return ReadResult.success(_to_profiles(response.data))
        except Exception as e:
            logger.warning("Failed to list available profiles: %s", e)
            return ReadResult.failure(str(e), [])

    async def get_current_user_profile(self) -> Profile | None:
        """Get the profile owned by the signed-in user.

        Returns:
            Profile | None: The profile, or None if nobody is signed in or
            they have no profile.
        """
        auth_user = await self.auth.get_current_auth_user()
        if not auth_user:
            return None

        try:
            response = (
                self.client.table(PROFILES_TABLE)
                .select("*")
                .eq("user_id", auth_user.id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning("Failed to load profile for user %s: %s", auth_user.id, e)
            return None

        return Profile.model_validate(response.data[0]) if response.data else None
