"""Unit tests for Supabase client construction and health check."""

from unittest.mock import MagicMock, patch

import pytest
from supabase_auth import SyncMemoryStorage

from network20.core.config import Settings
from network20.core.errors import BackendNotConfiguredError
from network20.core.supabase import check_database_connection, create_supabase_client


class TestCreateSupabaseClient:
    """Tests for create_supabase_client."""

    def test_requires_configuration(self, local_settings: Settings) -> None:
        """Test that missing URL or key is rejected."""
        with pytest.raises(BackendNotConfiguredError):
            create_supabase_client(local_settings, SyncMemoryStorage())

    def test_persists_session_in_storage(self, remote_settings: Settings) -> None:
        """Test that the client keeps its session in the given storage."""
        storage = SyncMemoryStorage()

        with patch("network20.core.supabase.create_client") as factory:
            create_supabase_client(remote_settings, storage)

        args, kwargs = factory.call_args
        assert args == ("https://test-project.supabase.co", "test-anon-key")
        options = kwargs["options"]
        assert options.storage is storage
        assert options.persist_session is True
        assert options.auto_refresh_token is True


class TestCheckDatabaseConnection:
    """Tests for check_database_connection."""

    @pytest.mark.asyncio
    async def test_healthy(self, mock_supabase_client: MagicMock) -> None:
        """Test that reachable tables report healthy."""
        status = await check_database_connection(mock_supabase_client)

        assert status["healthy"] is True
        assert set(status["tables"]) == {"profiles", "jobs"}

    @pytest.mark.asyncio
    async def test_unhealthy_table(self) -> None:
        """Test that a failing table is reported with its error."""
        client = MagicMock()
        client.table.return_value.select.return_value.limit.return_value.execute.side_effect = [
            MagicMock(data=[]),
            Exception('relation "jobs" does not exist'),
        ]

        status = await check_database_connection(client)

        assert status["healthy"] is False
        assert status["tables"]["profiles"] == {"healthy": True}
        assert "does not exist" in status["tables"]["jobs"]["error"]
