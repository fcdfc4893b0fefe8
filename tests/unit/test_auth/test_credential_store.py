"""Tests for calendar credential storage."""

from datetime import datetime, timezone

import pytest

from household_sync.auth.credential_store import UserCredential

EXPIRY = datetime(2099, 1, 1, tzinfo=timezone.utc)


class TestSaveCredential:
    """Tests for storing credentials from the OAuth flow."""

    @pytest.mark.asyncio
    async def test_creates_profile(self, credential_store):
        """Saving a credential for a new user creates the profile."""
        profile = await credential_store.save_credential(
            "user-1",
            UserCredential("access", "refresh", EXPIRY),
        )

        assert profile.user_id == "user-1"
        assert profile.calendar_connected is True
        credential = await credential_store.get_credential("user-1")
        assert credential.access_token == "access"
        assert credential.refresh_token == "refresh"
        assert credential.expires_at == EXPIRY

    @pytest.mark.asyncio
    async def test_keeps_refresh_token_when_missing(self, credential_store, connected_user):
        """An empty refresh token never overwrites the stored one."""
        await credential_store.save_credential(
            connected_user,
            UserCredential("new-access", None, EXPIRY),
        )

        credential = await credential_store.get_credential(connected_user)
        assert credential.access_token == "new-access"
        assert credential.refresh_token == "refresh-token"

    @pytest.mark.asyncio
    async def test_replaces_refresh_token_when_given(self, credential_store, connected_user):
        await credential_store.save_credential(
            connected_user,
            UserCredential("new-access", "new-refresh", EXPIRY),
        )

        credential = await credential_store.get_credential(connected_user)
        assert credential.refresh_token == "new-refresh"


class TestUpdateTokens:
    """Tests for refresh write-back."""

    @pytest.mark.asyncio
    async def test_updates_access_token(self, credential_store, connected_user):
        updated = await credential_store.update_tokens(
            connected_user,
            UserCredential("refreshed", "", EXPIRY),
        )

        assert updated is True
        credential = await credential_store.get_credential(connected_user)
        assert credential.access_token == "refreshed"
        assert credential.refresh_token == "refresh-token"

    @pytest.mark.asyncio
    async def test_no_profile(self, credential_store):
        """Should return False for unknown users."""
        updated = await credential_store.update_tokens(
            "nobody",
            UserCredential("refreshed"),
        )
        assert updated is False


class TestClearCredential:
    """Tests for disconnecting."""

    @pytest.mark.asyncio
    async def test_clears_tokens(self, credential_store, connected_user):
        assert await credential_store.clear_credential(connected_user) is True

        assert await credential_store.get_credential(connected_user) is None
        assert await credential_store.is_connected(connected_user) is False
        profile = await credential_store.get_profile(connected_user)
        assert profile.calendar_refresh_token is None

    @pytest.mark.asyncio
    async def test_nothing_to_clear(self, credential_store):
        assert await credential_store.clear_credential("nobody") is False


@pytest.mark.asyncio
async def test_is_connected(credential_store, connected_user):
    assert await credential_store.is_connected(connected_user) is True
    assert await credential_store.is_connected("nobody") is False
