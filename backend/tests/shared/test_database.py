"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock, ANY

from shared.database import (
    create_supabase_client,
    get_supabase_client,
    reset_client_cache,
)
from tests.conftest import make_settings


class TestCreateSupabaseClient:
    @patch("shared.database.create_client")
    def test_uses_service_role_key_and_timeout(self, mock_create):
        """Should create the client with the service role key and a bounded timeout."""
        settings = make_settings(
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="test-key",
            db_timeout_seconds=3,
        )
        mock_create.return_value = MagicMock()

        create_supabase_client(settings)

        mock_create.assert_called_once_with(
            "https://test.supabase.co",
            "test-key",
            options=ANY,
        )
        options = mock_create.call_args.kwargs["options"]
        assert options.postgrest_client_timeout == 3

    def test_raises_without_url(self):
        """Should raise if URL is missing."""
        settings = make_settings(supabase_url="", supabase_service_role_key="test-key")
        with pytest.raises(RuntimeError, match="configuration missing"):
            create_supabase_client(settings)

    def test_raises_without_key(self):
        """Should raise if service role key is missing."""
        settings = make_settings(
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="",
        )
        with pytest.raises(RuntimeError, match="configuration missing"):
            create_supabase_client(settings)


class TestSupabaseClientCache:
    def setup_method(self):
        """Reset cache before each test."""
        reset_client_cache()

    def teardown_method(self):
        reset_client_cache()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_get_supabase_client_caches_client(self, mock_settings, mock_create):
        """Should cache the client and not recreate it."""
        mock_settings.return_value = make_settings(
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="test-key",
        )
        mock_create.return_value = MagicMock()

        client1 = get_supabase_client()
        client2 = get_supabase_client()

        mock_create.assert_called_once()
        assert client1 is client2

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_reset_client_cache(self, mock_settings, mock_create):
        """Should reset the cache and allow new client creation."""
        mock_settings.return_value = make_settings(
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="test-key",
        )
        mock_create.side_effect = [MagicMock(name="client1"), MagicMock(name="client2")]

        client1 = get_supabase_client()
        reset_client_cache()
        client2 = get_supabase_client()

        assert mock_create.call_count == 2
        assert client1 is not client2

    @patch("shared.database.get_settings")
    def test_get_supabase_client_raises_without_config(self, mock_settings):
        """Should raise if configuration is missing."""
        mock_settings.return_value = make_settings(supabase_url="", supabase_service_role_key="")

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_client()
