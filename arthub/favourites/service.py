"""Favourite artists service."""

from typing import Any

import structlog

from arthub.store import RealtimeStore, child_path

from .models import FAVOURITES_PATH, favourite_artist_ids, favourite_path


logger = structlog.get_logger(__name__)


class FavouriteService:
    """Keeps each user's set of favourite artists."""

    def __init__(self, store: RealtimeStore):
        self.store = store

    async def is_favourite(self, user_id: str, artist_id: str) -> bool:
        return await self.store.get(favourite_path(user_id, artist_id)) is True

    async def set_favourite(self, user_id: str, artist_id: str, favourite: bool) -> bool:
        """Add or remove the artist. Repeating the same call changes nothing."""
        await self.store.set(favourite_path(user_id, artist_id), True if favourite else None)
        logger.info(
            "favourite_changed", user_id=user_id, artist_id=artist_id, favourite=favourite
        )
        return favourite

    async def toggle_favourite(self, user_id: str, artist_id: str) -> bool:
        """Flip the flag inside one transaction and return the new state."""

        def flip(current: Any) -> bool | None:
            return None if current is True else True

        committed = await self.store.transaction(favourite_path(user_id, artist_id), flip)
        favourite = committed is True
        logger.info(
            "favourite_changed", user_id=user_id, artist_id=artist_id, favourite=favourite
        )
        return favourite

    async def list_favourites(self, user_id: str) -> list[str]:
        snapshot = await self.store.get(child_path(FAVOURITES_PATH, user_id))
        return favourite_artist_ids(snapshot)
