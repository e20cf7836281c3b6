"""Unit tests for the unified Store."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from supabase_auth import SyncMemoryStorage

from network20.core.config import Settings
from network20.core.errors import BackendNotConfiguredError
from network20.schemas.auth import Authenticated, AuthUser, LocalPointer
from network20.schemas.common import ReadResult
from network20.schemas.job import JobCreate
from network20.schemas.profile import Profile, ProfileCreate, ProfileUpdate
from network20.services.local_profile_service import PROFILES_KEY
from network20.services.store import Store, create_store

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _profile(profile_id: str, user_id: str | None = None) -> Profile:
    return Profile(id=profile_id, user_id=user_id, display_name="Ada", created_at=NOW, updated_at=NOW)


@pytest.fixture
def local_store(local_settings: Settings, memory_storage: SyncMemoryStorage) -> Store:
    """Store running on local storage."""
    return Store(local_settings, storage=memory_storage)


@pytest.fixture
def remote_store(
    remote_settings: Settings, memory_storage: SyncMemoryStorage, mock_supabase_client: MagicMock
) -> Store:
    """Store running against a mocked Supabase client."""
    return Store(remote_settings, storage=memory_storage, client=mock_supabase_client)


class TestModeSelection:
    """Tests for local/remote dispatch."""

    @pytest.mark.asyncio
    async def test_local_mode_never_builds_client(
        self, local_settings: Settings, memory_storage: SyncMemoryStorage
    ) -> None:
        """Test that local mode makes no Supabase client at all."""
        with patch("network20.services.store.create_supabase_client") as factory:
            store = Store(local_settings, storage=memory_storage)
            created = await store.create_profile(ProfileCreate(display_name="Ada"))
            await store.get_profiles()
            await store.search_profiles("ada")
            await store.get_current_user()

        factory.assert_not_called()
        assert store.client is None
        assert store.is_using_remote() is False
        assert store.profiles is store.local
        assert created.id.startswith("local_")

    def test_remote_mode_builds_client_once(
        self, remote_settings: Settings, memory_storage: SyncMemoryStorage
    ) -> None:
        """Test that remote mode builds a client sharing the local storage."""
        with patch("network20.services.store.create_supabase_client") as factory:
            store = Store(remote_settings, storage=memory_storage)

        factory.assert_called_once_with(remote_settings, memory_storage)
        assert store.is_using_remote() is True
        assert store.profiles is store.remote

    def test_both_modes_in_one_process(
        self,
        local_settings: Settings,
        remote_settings: Settings,
        mock_supabase_client: MagicMock,
    ) -> None:
        """Test that mode is per store, not global."""
        local = Store(local_settings, storage=SyncMemoryStorage())
        remote = Store(remote_settings, storage=SyncMemoryStorage(), client=mock_supabase_client)

        assert local.is_using_remote() is False
        assert remote.is_using_remote() is True

    def test_create_store_uses_given_settings(
        self, local_settings: Settings, memory_storage: SyncMemoryStorage
    ) -> None:
        """Test the factory function."""
        store = create_store(local_settings, storage=memory_storage)

        assert store.settings is local_settings
        assert store.storage is memory_storage


class TestLocalStore:
    """Façade behaviour on local storage."""

    @pytest.mark.asyncio
    async def test_crud_round_trip(self, local_store: Store) -> None:
        """Test create, get, update and delete through the façade."""
        created = await local_store.create_profile(ProfileCreate(display_name="Ada", tagline="A"))

        fetched = await local_store.get_profile(created.id)
        assert fetched is not None
        assert fetched.model_dump() == created.model_dump()

        updated = await local_store.update_profile(created.id, ProfileUpdate(bio="B"))
        assert updated is not None
        assert (updated.tagline, updated.bio) == ("A", "B")

        assert await local_store.delete_profile(created.id) is True
        assert await local_store.delete_profile(created.id) is False
        assert await local_store.get_profile(created.id) is None

    @pytest.mark.asyncio
    async def test_current_user_follows_pointer(self, local_store: Store) -> None:
        """Test the first-profile rule and clearing on delete."""
        created = await local_store.create_profile(ProfileCreate(display_name="Ada"))

        assert await local_store.get_current_user_id() == created.id
        current = await local_store.get_current_user()
        assert current is not None and current.id == created.id

        await local_store.delete_profile(created.id)

        assert await local_store.get_current_user_id() is None
        assert await local_store.get_current_user() is None

    @pytest.mark.asyncio
    async def test_switch_current_user(self, local_store: Store) -> None:
        """Test explicitly switching the current profile."""
        await local_store.create_profile(ProfileCreate(display_name="First"))
        second = await local_store.create_profile(ProfileCreate(display_name="Second"))

        await local_store.set_current_user_id(second.id)

        assert await local_store.resolve_current_user() == LocalPointer(profile_id=second.id)

    @pytest.mark.asyncio
    async def test_failed_read_collapses_but_fetch_reports(
        self, local_store: Store, memory_storage: SyncMemoryStorage
    ) -> None:
        """Test that get_profiles hides a storage failure while fetch_profiles exposes it."""
        memory_storage.set_item(PROFILES_KEY, "[{broken")

        assert await local_store.get_profiles() == []
        result = await local_store.fetch_profiles()
        assert not result.ok

    @pytest.mark.asyncio
    async def test_available_and_search(self, local_store: Store) -> None:
        """Test filtered reads."""
        open_profile = await local_store.create_profile(ProfileCreate(display_name="Open", skills=["React"]))
        await local_store.create_profile(ProfileCreate(display_name="Busy", is_available=False))

        assert [p.id for p in await local_store.get_available_profiles()] == [open_profile.id]
        assert [p.id for p in await local_store.search_profiles("REACT")] == [open_profile.id]

    @pytest.mark.asyncio
    async def test_clear_all_profiles(self, local_store: Store) -> None:
        """Test bulk reset."""
        await local_store.create_profile(ProfileCreate(display_name="Ada"))

        await local_store.clear_all_profiles()

        assert await local_store.get_profiles() == []
        assert await local_store.get_current_user_id() is None

    @pytest.mark.asyncio
    async def test_remote_only_operations(self, local_store: Store) -> None:
        """Test jobs and auth without a backend."""
        assert await local_store.get_jobs() == []
        assert await local_store.search_jobs("design") == []
        assert await local_store.get_authenticated_user_profile() is None

        with pytest.raises(BackendNotConfiguredError):
            await local_store.create_job(
                JobCreate(company_name="Acme", job_title="Designer", contact_email="jobs@acme.test")
            )
        with pytest.raises(BackendNotConfiguredError):
            await local_store.sign_in("ada@example.com", "secret123")
        with pytest.raises(BackendNotConfiguredError):
            await local_store.check_connection()

    @pytest.mark.asyncio
    async def test_local_sign_out_keeps_pointer(self, local_store: Store) -> None:
        """Test that local users clear the pointer explicitly, not via sign_out."""
        created = await local_store.create_profile(ProfileCreate(display_name="Ada"))

        with pytest.raises(BackendNotConfiguredError) as exc_info:
            await local_store.sign_out()

        assert exc_info.value.error_type == "backend_not_configured"
        assert await local_store.get_current_user_id() == created.id

        await local_store.set_current_user_id(None)
        assert await local_store.get_current_user_id() is None


class TestRemoteStore:
    """Façade behaviour against Supabase."""

    @pytest.mark.asyncio
    async def test_authenticated_user_ignores_local_pointer(self, remote_store: Store) -> None:
        """Test that a signed-in user's own profile is current."""
        auth_user = AuthUser(id="u1", email="ada@example.com")
        own = _profile("remote-1", user_id="u1")
        remote_store.auth.get_current_auth_user = AsyncMock(return_value=auth_user)
        remote_store.remote.get_current_user_profile = AsyncMock(return_value=own)
        await remote_store.set_current_user_id("local_123")

        assert await remote_store.resolve_current_user() == Authenticated(auth_user=auth_user, profile=own)
        assert await remote_store.get_current_user_id() == "remote-1"
        assert await remote_store.get_current_user() == own

    @pytest.mark.asyncio
    async def test_authenticated_without_profile(self, remote_store: Store) -> None:
        """Test that a signed-in user with no profile has no current profile."""
        remote_store.auth.get_current_auth_user = AsyncMock(return_value=AuthUser(id="u1"))
        remote_store.remote.get_current_user_profile = AsyncMock(return_value=None)
        await remote_store.set_current_user_id("local_123")

        assert await remote_store.get_current_user_id() is None
        assert await remote_store.get_current_user() is None

    @pytest.mark.asyncio
    async def test_signed_out_falls_back_to_pointer(self, remote_store: Store) -> None:
        """Test that the pointer decides when nobody is signed in."""
        pointed = _profile("remote-2")
        remote_store.auth.get_current_auth_user = AsyncMock(return_value=None)
        remote_store.remote.get_profile = AsyncMock(return_value=ReadResult.success(pointed))
        await remote_store.set_current_user_id("remote-2")

        assert await remote_store.get_current_user_id() == "remote-2"
        assert await remote_store.get_current_user() == pointed
        remote_store.remote.get_profile.assert_awaited_once_with("remote-2")

    @pytest.mark.asyncio
    async def test_create_records_pointer_once(self, remote_store: Store) -> None:
        """Test that a remote create becomes current only if none is set."""
        remote_store.remote.create_profile = AsyncMock(side_effect=[_profile("r1"), _profile("r2")])

        await remote_store.create_profile(ProfileCreate(display_name="Ada"))
        await remote_store.create_profile(ProfileCreate(display_name="Ada"))

        assert await remote_store.local.get_current_user_id() == "r1"

    @pytest.mark.asyncio
    async def test_delete_clears_matching_pointer(self, remote_store: Store) -> None:
        """Test that deleting the pointed-at remote profile clears the pointer."""
        remote_store.remote.delete_profile = AsyncMock(return_value=True)
        await remote_store.set_current_user_id("r1")

        assert await remote_store.delete_profile("r1") is True
        assert await remote_store.local.get_current_user_id() is None

    @pytest.mark.asyncio
    async def test_reads_route_to_remote(
        self, remote_store: Store, mock_supabase_client: MagicMock
    ) -> None:
        """Test that local data is not consulted in remote mode."""
        await remote_store.local.create_profile(ProfileCreate(display_name="Local only"))
        select = mock_supabase_client.table.return_value.select.return_value
        select.eq.return_value.order.return_value.execute.return_value = MagicMock(data=[])

        assert await remote_store.get_profiles() == []
        mock_supabase_client.table.assert_called_with("profiles")

    @pytest.mark.asyncio
    async def test_sign_out_clears_pointer(self, remote_store: Store, mock_supabase_client: MagicMock) -> None:
        """Test that signing out forgets the device's current profile."""
        await remote_store.set_current_user_id("r1")

        await remote_store.sign_out()

        mock_supabase_client.auth.sign_out.assert_called_once()
        assert await remote_store.local.get_current_user_id() is None
