"""Unified data store over the local and remote profile backends.

The store decides once, at construction, whether the Supabase backend is
configured. Every profile operation then goes to the same adapter for the
life of the store, so callers never need to know which one is active.
"""

import logging
from typing import Any, Callable, Protocol, TypeVar

from supabase import Client
from supabase_auth import SyncSupportedStorage

from network20.core.config import Settings, get_settings
from network20.core.errors import BackendNotConfiguredError
from network20.core.storage import create_storage
from network20.core.supabase import check_database_connection, create_supabase_client
from network20.schemas.auth import Authenticated, AuthUser, CurrentUser, LocalPointer
from network20.schemas.common import ReadResult
from network20.schemas.job import Job, JobCreate
from network20.schemas.profile import Profile, ProfileCreate, ProfileUpdate
from network20.services.auth_service import AuthService
from network20.services.current_user import resolve_current_user
from network20.services.job_service import JobService
from network20.services.local_profile_service import LocalProfileService
from network20.services.remote_profile_service import RemoteProfileService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProfileBackend(Protocol):
    """Operations shared by the local and remote profile adapters."""

    async def list_profiles(self) -> ReadResult[list[Profile]]: ...

    async def get_profile(self, profile_id: str) -> ReadResult[Profile | None]: ...

    async def create_profile(self, data: ProfileCreate) -> Profile: ...

    async def update_profile(self, profile_id: str, data: ProfileUpdate) -> Profile | None: ...

    async def delete_profile(self, profile_id: str) -> bool: ...

    async def search_profiles(self, query: str) -> ReadResult[list[Profile]]: ...

    async def get_available_profiles(self) -> ReadResult[list[Profile]]: ...


def _unwrap(result: ReadResult[T], operation: str) -> T:
    if not result.ok:
        logger.warning("%s failed, returning empty result: %s", operation, result.error)
    return result.data


class Store:
    """Single entry point for profile, job and auth data."""

    def __init__(
        self,
        settings: Settings,
        storage: SyncSupportedStorage | None = None,
        client: Client | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            settings: Application settings; decides local vs remote mode.
            storage: Key-value storage for local data and the auth session.
            client: Supabase client to use instead of building one.
        """
        self.settings = settings
        self.storage = storage if storage is not None else create_storage(settings)
        self.use_remote = settings.remote_configured

        self.client: Client | None = None
        if self.use_remote:
            self.client = client if client is not None else create_supabase_client(settings, self.storage)

        self.local = LocalProfileService(self.storage)
        self.auth = AuthService(self.client, settings)
        self.remote = RemoteProfileService(self.client, self.auth) if self.client is not None else None
        self.jobs = JobService(self.client)

        logger.info("Store using %s backend", "Supabase" if self.use_remote else "local")

    @property
    def profiles(self) -> ProfileBackend:
        """The active profile adapter."""
        return self.remote if self.remote is not None else self.local

    def is_using_remote(self) -> bool:
        """Check if the store talks to Supabase."""
        return self.use_remote

    # Profiles

    async def fetch_profiles(self) -> ReadResult[list[Profile]]:
        """Get all visible profiles, keeping the failure reason if any."""
        return await self.profiles.list_profiles()

    async def get_profiles(self) -> list[Profile]:
        """Get all visible profiles (public ones remotely, all locally)."""
        return _unwrap(await self.fetch_profiles(), "List profiles")

    async def fetch_profile(self, profile_id: str) -> ReadResult[Profile | None]:
        return await self.profiles.get_profile(profile_id)

    async def get_profile(self, profile_id: str) -> Profile | None:
        """Get a single profile by ID."""
        return _unwrap(await self.fetch_profile(profile_id), f"Get profile {profile_id}")

    async def create_profile(self, data: ProfileCreate) -> Profile:
        """Create a profile.

        Remotely this requires a signed-in user. In both modes the new
        profile becomes the device's current profile if none is set yet.
        """
        profile = await self.profiles.create_profile(data)
        if self.use_remote and await self.local.get_current_user_id() is None:
            await self.local.set_current_user_id(profile.id)
        return profile

    async def update_profile(self, profile_id: str, data: ProfileUpdate) -> Profile | None:
        """Apply a partial update; None if the profile does not exist."""
        return await self.profiles.update_profile(profile_id, data)

    async def delete_profile(self, profile_id: str) -> bool:
        """Delete a profile; False if nothing was deleted."""
        deleted = await self.profiles.delete_profile(profile_id)
        if deleted and self.use_remote and await self.local.get_current_user_id() == profile_id:
            await self.local.set_current_user_id(None)
        return deleted

    async def fetch_search(self, query: str) -> ReadResult[list[Profile]]:
        return await self.profiles.search_profiles(query)

    async def search_profiles(self, query: str) -> list[Profile]:
        """Search visible profiles by name, tagline, skill, location or bio."""
        return _unwrap(await self.fetch_search(query), f"Search profiles for {query!r}")

    async def get_available_profiles(self) -> list[Profile]:
        """Get visible profiles open to work."""
        return _unwrap(await self.profiles.get_available_profiles(), "List available profiles")

    async def clear_all_profiles(self) -> None:
        """Clear all device-local profile data (remote rows are untouched)."""
        await self.local.clear_all()

    # Current user

    async def resolve_current_user(self) -> CurrentUser:
        """Work out who the current user is for this device."""
        auth_user = None
        auth_profile = None
        if self.remote is not None:
            auth_user = await self.auth.get_current_auth_user()
            if auth_user is not None:
                auth_profile = await self.remote.get_current_user_profile()

        local_pointer = None
        if auth_user is None:
            local_pointer = await self.local.get_current_user_id()

        return resolve_current_user(self.use_remote, auth_user, auth_profile, local_pointer)

    async def get_current_user_id(self) -> str | None:
        """Get the current profile ID, or None."""
        return (await self.resolve_current_user()).profile_id

    async def set_current_user_id(self, profile_id: str | None) -> None:
        """Set or clear the device-local current profile."""
        await self.local.set_current_user_id(profile_id)

    async def get_current_user(self) -> Profile | None:
        """Get the current user's profile, or None."""
        current = await self.resolve_current_user()
        if isinstance(current, Authenticated):
            return current.profile
        if isinstance(current, LocalPointer):
            return await self.get_profile(current.profile_id)
        return None

    async def get_authenticated_user_profile(self) -> Profile | None:
        """Get the signed-in user's own profile; always None locally."""
        if self.remote is None:
            return None
        return await self.remote.get_current_user_profile()

    # Jobs

    async def fetch_jobs(self) -> ReadResult[list[Job]]:
        return await self.jobs.list_jobs()

    async def get_jobs(self) -> list[Job]:
        """Get active job listings, newest first."""
        return _unwrap(await self.fetch_jobs(), "List jobs")

    async def search_jobs(self, query: str) -> list[Job]:
        """Search active job listings."""
        return _unwrap(await self.jobs.search_jobs(query), f"Search jobs for {query!r}")

    async def create_job(self, data: JobCreate) -> Job:
        """Post a job listing (remote only)."""
        return await self.jobs.create_job(data)

    # Auth

    async def sign_up(self, email: str, password: str, display_name: str | None = None) -> AuthUser:
        return await self.auth.sign_up(email, password, display_name)

    async def sign_in(self, email: str, password: str) -> AuthUser:
        return await self.auth.sign_in(email, password)

    async def sign_out(self) -> None:
        """Sign out and forget the device's current profile.

        Raises BackendNotConfiguredError in local mode before touching the
        pointer; local users clear it with set_current_user_id(None).
        """
        await self.auth.sign_out()
        await self.local.set_current_user_id(None)

    async def reset_password(self, email: str) -> None:
        await self.auth.reset_password(email)

    def on_auth_state_change(self, callback: Callable[[AuthUser | None], None]) -> Callable[[], None]:
        return self.auth.on_auth_state_change(callback)

    async def get_current_auth_user(self) -> AuthUser | None:
        return await self.auth.get_current_auth_user()

    async def check_connection(self) -> dict[str, Any]:
        """Check that the remote tables are reachable.

        Raises:
            BackendNotConfiguredError: If running on local storage.
        """
        if self.client is None:
            raise BackendNotConfiguredError()
        return await check_database_connection(self.client)


def create_store(settings: Settings | None = None, storage: SyncSupportedStorage | None = None) -> Store:
    """Build a store from settings, defaulting to the cached environment settings."""
    return Store(settings or get_settings(), storage=storage)
