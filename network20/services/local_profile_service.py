"""Profile persistence on the device-local key-value store.

The whole profile collection is stored as one JSON array under a single key
and every write re-serializes the entire collection. There is no locking:
two writers interleaving their read and write can lose an update. The store
is meant for a single process driving one UI.
"""

import json
import logging
import time
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from supabase_auth import SyncSupportedStorage

from network20.schemas.common import ReadResult
from network20.schemas.profile import Profile, ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)

PROFILES_KEY = "network20_profiles"
CURRENT_USER_KEY = "network20_current_user"


def generate_local_id() -> str:
    """Generate a profile ID unique for the lifetime of an installation."""
    return f"local_{int(time.time() * 1000)}_{uuid4().hex[:7]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def touch(previous: datetime) -> datetime:
    """Return a timestamp strictly later than `previous`."""
    now = utc_now()
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class LocalProfileService:
    """Service for managing profiles stored on the device."""

    def __init__(self, storage: SyncSupportedStorage) -> None:
        """Initialize local profile service.

        Args:
            storage: Key-value storage holding the serialized profiles.
        """
        self.storage = storage

    def _load(self) -> ReadResult[list[Profile]]:
        try:
            raw = self.storage.get_item(PROFILES_KEY)
            if not raw:
                return ReadResult.success([])
            return ReadResult.success([Profile.model_validate(item) for item in json.loads(raw)])
        except Exception as e:
            logger.warning("Could not read local profiles: %s", e)
            return ReadResult.failure(f"Local storage unreadable: {e}", [])

    def _save(self, profiles: list[Profile]) -> None:
        payload = json.dumps([profile.model_dump(mode="json") for profile in profiles])
        self.storage.set_item(PROFILES_KEY, payload)

    async def list_profiles(self) -> ReadResult[list[Profile]]:
        """Get all local profiles, most recently created first."""
        return self._load()

    async def get_profile(self, profile_id: str) -> ReadResult[Profile | None]:
        """Get a profile by ID.

        Args:
            profile_id: The profile's ID.

        Returns:
            ReadResult: The profile, or None if not found.
        """
        result = self._load()
        if not result.ok:
            return ReadResult.failure(result.error or "", None)
        return ReadResult.success(next((p for p in result.data if p.id == profile_id), None))

    async def create_profile(self, data: ProfileCreate) -> Profile:
        """Create a profile and make it current if no profile is current yet.

        Args:
            data: The profile fields.

        Returns:
            Profile: The constructed record.
        """
        profiles = self._load().data
        now = utc_now()
        profile = Profile(
            **data.model_dump(),
            id=generate_local_id(),
            user_id=None,
            created_at=now,
            updated_at=now,
        )

        profiles.insert(0, profile)
        self._save(profiles)

        if await self.get_current_user_id() is None:
            await self.set_current_user_id(profile.id)

        logger.info("Created local profile %s", profile.id)
        return profile

    async def update_profile(self, profile_id: str, data: ProfileUpdate) -> Profile | None:
        """Apply a partial update.

        Args:
            profile_id: The profile's ID.
            data: The fields to update.

        Returns:
            Profile | None: The updated profile or None if not found.
        """
        profiles = self._load().data
        index = next((i for i, p in enumerate(profiles) if p.id == profile_id), None)
        if index is None:
            return None

        existing = profiles[index]
        merged = {**existing.model_dump(mode="json"), **data.changes()}
        merged["updated_at"] = touch(existing.updated_at)
        profiles[index] = Profile.model_validate(merged)

        self._save(profiles)
        return profiles[index]

    async def delete_profile(self, profile_id: str) -> bool:
        """Delete a profile, clearing the current-user pointer if it referenced it.

        Returns:
            bool: Whether a profile was removed.
        """
        profiles = self._load().data
        remaining = [p for p in profiles if p.id != profile_id]
        if len(remaining) == len(profiles):
            return False

        self._save(remaining)

        if await self.get_current_user_id() == profile_id:
            await self.set_current_user_id(None)

        logger.info("Deleted local profile %s", profile_id)
        return True

    async def search_profiles(self, query: str) -> ReadResult[list[Profile]]:
        """Case-insensitive substring search, in stored order."""
        result = self._load()
        if not result.ok:
            return result
        return ReadResult.success([p for p in result.data if p.matches(query)])

    async def get_available_profiles(self) -> ReadResult[list[Profile]]:
        """Get profiles marked as available for work."""
        result = self._load()
        if not result.ok:
            return result
        return ReadResult.success([p for p in result.data if p.is_available])

    async def get_current_user_id(self) -> str | None:
        """Get the device's current profile ID."""
        try:
            return self.storage.get_item(CURRENT_USER_KEY) or None
        except Exception as e:
            logger.warning("Could not read current user pointer: %s", e)
            return None

    async def set_current_user_id(self, profile_id: str | None) -> None:
        """Set or clear the device's current profile ID."""
        if profile_id:
            self.storage.set_item(CURRENT_USER_KEY, profile_id)
        else:
            self.storage.remove_item(CURRENT_USER_KEY)

    async def clear_all(self) -> None:
        """Remove all local profiles and the current-user pointer."""
        self.storage.remove_item(PROFILES_KEY)
        self.storage.remove_item(CURRENT_USER_KEY)
        logger.info("Cleared local profiles")
