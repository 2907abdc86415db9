"""Tests for account and role resolution."""

from unittest.mock import AsyncMock

import pytest

from arthub.accounts import (
    AccountExistsError,
    AccountNotFoundError,
    AccountService,
    Role,
    RoleNotAllowedError,
)
from arthub.store import InMemoryRealtimeStore, RealtimeStore


@pytest.fixture
def store() -> InMemoryRealtimeStore:
    return InMemoryRealtimeStore(
        {
            "accounts": {"u1": {"email": "one@example.com", "role": "Artist"}},
            "users": {
                "u1": {"email": "stale@example.com", "role": "visitor"},
                "u2": {"email": "two@example.com", "role": "ARTIST"},
                "u5": {"email": "five@example.com", "role": "curator"},
            },
            "admin": {
                "u2": {"email": "two-admin@example.com", "role": "admin"},
                "u3": {"email": "three@example.com", "role": "admin"},
            },
            "visitors": {
                "u4": {"email": "four@example.com"},
                "u5": {"email": "five@example.com"},
            },
        }
    )


@pytest.fixture
def account_service(store: InMemoryRealtimeStore) -> AccountService:
    return AccountService(store)


class TestResolveRole:
    @pytest.mark.asyncio
    async def test_unified_record_wins(self, account_service: AccountService):
        account = await account_service.resolve_account("u1")
        assert account is not None
        assert account.role == Role.ARTIST
        assert account.email == "one@example.com"

    @pytest.mark.asyncio
    async def test_users_table_beats_admin_table(self, account_service: AccountService):
        account = await account_service.resolve_account("u2")
        assert account is not None
        assert account.role == Role.ARTIST
        assert account.source == "users"

    @pytest.mark.asyncio
    async def test_admin_table(self, account_service: AccountService):
        assert await account_service.resolve_role("u3") == Role.ADMIN

    @pytest.mark.asyncio
    async def test_visitors_default_to_visitor_role(self, account_service: AccountService):
        assert await account_service.resolve_role("u4") == Role.VISITOR

    @pytest.mark.asyncio
    async def test_unknown_role_falls_through_to_next_table(
        self, account_service: AccountService
    ):
        assert await account_service.resolve_role("u5") == Role.VISITOR

    @pytest.mark.asyncio
    async def test_unknown_user(self, account_service: AccountService):
        assert await account_service.resolve_account("ghost") is None
        with pytest.raises(AccountNotFoundError):
            await account_service.get_account("ghost")

    @pytest.mark.asyncio
    async def test_legacy_tables_read_only_on_miss(self):
        store = AsyncMock(spec=RealtimeStore)
        store.get.return_value = {"email": "x@example.com", "role": "admin"}

        await AccountService(store).resolve_account("u1")

        store.get.assert_awaited_once_with("accounts/u1")

    @pytest.mark.asyncio
    async def test_resolve_many_deduplicates(self, account_service: AccountService):
        accounts = await account_service.resolve_many(["u3", "u4", "u3", "ghost"])
        assert set(accounts) == {"u3", "u4", "ghost"}
        assert accounts["ghost"] is None


class TestRegister:
    @pytest.mark.asyncio
    async def test_artist_gets_default_profile(
        self, account_service: AccountService, store: InMemoryRealtimeStore
    ):
        account = await account_service.register_account("u9", "nine@example.com", Role.ARTIST)

        assert account.role == Role.ARTIST
        assert await store.get("accounts/u9") == {"email": "nine@example.com", "role": "artist"}
        profile = await store.get("artists/u9")
        assert profile["name"] == "nine"
        assert profile["email"] == "nine@example.com"

    @pytest.mark.asyncio
    async def test_visitor_has_no_artist_profile(
        self, account_service: AccountService, store: InMemoryRealtimeStore
    ):
        await account_service.register_account("u9", "nine@example.com", Role.VISITOR)
        assert await store.get("artists/u9") is None

    @pytest.mark.asyncio
    async def test_existing_artworks_survive_registration(
        self, account_service: AccountService, store: InMemoryRealtimeStore
    ):
        await store.set(
            "artists/u9",
            {"name": "Nine", "artworks": {"w1": {"title": "Dusk"}}},
        )

        await account_service.register_account("u9", "nine@example.com", Role.ARTIST)

        assert await store.get("artists/u9/artworks") == {"w1": {"title": "Dusk"}}
        assert await store.get("artists/u9/name") == "Nine"

    @pytest.mark.asyncio
    async def test_second_registration_conflicts(
        self, account_service: AccountService, store: InMemoryRealtimeStore
    ):
        await account_service.register_account("u9", "nine@example.com", Role.ARTIST)
        await store.set("artists/u9/artworks/w1", {"title": "Dusk"})

        with pytest.raises(AccountExistsError):
            await account_service.register_account("u9", "nine@example.com", Role.VISITOR)

        assert await store.get("accounts/u9/role") == "artist"
        assert await store.get("artists/u9/artworks/w1") == {"title": "Dusk"}

    @pytest.mark.asyncio
    async def test_legacy_user_cannot_register_again(self, account_service: AccountService):
        with pytest.raises(AccountExistsError):
            await account_service.register_account("u4", "four@example.com", Role.ARTIST)

    @pytest.mark.asyncio
    async def test_admin_role_is_not_self_assignable(
        self, account_service: AccountService, store: InMemoryRealtimeStore
    ):
        with pytest.raises(RoleNotAllowedError):
            await account_service.register_account("u9", "nine@example.com", Role.ADMIN)

        assert await store.get("accounts/u9") is None
