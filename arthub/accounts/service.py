"""Account and role resolution service."""

import asyncio
from typing import Any

import structlog

from arthub.store import RealtimeStore, child_path

from .models import (
    ACCOUNTS_PATH,
    ARTISTS_PATH,
    LEGACY_ROLE_TABLES,
    Account,
    Role,
    decode_account,
    default_artist_profile,
)


logger = structlog.get_logger(__name__)


class AccountError(Exception):
    """Base account error."""

    def __init__(self, message: str, code: str = "account_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class AccountNotFoundError(AccountError):
    """No role record exists for the user."""

    def __init__(self, message: str = "Account not found"):
        super().__init__(message, "account_not_found")


class AccountExistsError(AccountError):
    """The user already has a role record."""

    def __init__(self, message: str = "Account already registered"):
        super().__init__(message, "account_exists")


class RoleNotAllowedError(AccountError):
    """The requested role cannot be self-assigned."""

    def __init__(self, message: str = "Role cannot be self-assigned"):
        super().__init__(message, "role_not_allowed")


SELF_REGISTER_ROLES = frozenset({Role.ARTIST, Role.VISITOR})


async def create_if_absent(store: RealtimeStore, path: str, value: Any) -> bool:
    """Write ``value`` at ``path`` unless something is there. Returns True if written."""
    existed = False

    def update_fn(current: Any) -> Any:
        nonlocal existed
        existed = current is not None
        return current if existed else value

    await store.transaction(path, update_fn)
    return not existed


class AccountService:
    """Resolves accounts from the unified table with a legacy fallback."""

    def __init__(self, store: RealtimeStore):
        self.store = store

    async def resolve_account(self, uid: str) -> Account | None:
        """Return the user's account or ``None`` when no table knows them.

        The unified record wins. Otherwise all legacy tables are read
        concurrently and the first match in priority order is used.
        """
        unified = await self.store.get(child_path(ACCOUNTS_PATH, uid))
        account = decode_account(uid, unified, ACCOUNTS_PATH)
        if account is not None:
            return account

        snapshots = await asyncio.gather(
            *(self.store.get(child_path(table, uid)) for table in LEGACY_ROLE_TABLES)
        )
        for table, snapshot in zip(LEGACY_ROLE_TABLES, snapshots, strict=True):
            account = decode_account(uid, snapshot, table)
            if account is not None:
                logger.debug("account_resolved_from_legacy", uid=uid, table=table)
                return account

        return None

    async def resolve_role(self, uid: str) -> Role | None:
        account = await self.resolve_account(uid)
        return account.role if account else None

    async def get_account(self, uid: str) -> Account:
        """Like resolve_account, but raises AccountNotFoundError on a miss."""
        account = await self.resolve_account(uid)
        if account is None:
            raise AccountNotFoundError
        return account

    async def resolve_many(self, uids: list[str]) -> dict[str, Account | None]:
        """Resolve several accounts concurrently."""
        unique = list(dict.fromkeys(uids))
        accounts = await asyncio.gather(*(self.resolve_account(uid) for uid in unique))
        return dict(zip(unique, accounts, strict=True))

    async def register_account(self, uid: str, email: str, role: Role) -> Account:
        """Create the unified record, seeding an artist profile for artists.

        An existing artist profile (and its artworks) is left untouched.

        Raises:
            RoleNotAllowedError: If ``role`` is admin.
            AccountExistsError: If any table already knows the user.
        """
        if role not in SELF_REGISTER_ROLES:
            raise RoleNotAllowedError
        if await self.resolve_account(uid) is not None:
            raise AccountExistsError

        created = await create_if_absent(
            self.store,
            child_path(ACCOUNTS_PATH, uid),
            {"email": email, "role": role.value},
        )
        if not created:
            raise AccountExistsError

        if role == Role.ARTIST:
            seeded = await create_if_absent(
                self.store, child_path(ARTISTS_PATH, uid), default_artist_profile(email)
            )
            if not seeded:
                logger.debug("artist_profile_kept", uid=uid)

        logger.info("account_registered", uid=uid, role=role.value)
        return Account(uid=uid, email=email, role=role)
