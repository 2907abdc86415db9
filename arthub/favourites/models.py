"""Favourites storage layout.

``favourites/{userId}/{artistId}`` holds ``true`` while the artist is a
favourite; un-favouriting removes the key.
"""

from typing import Any

from arthub.store import child_path
from arthub.store.records import iter_children


FAVOURITES_PATH = "favourites"


def favourite_path(user_id: str, artist_id: str) -> str:
    return child_path(FAVOURITES_PATH, user_id, artist_id)


def favourite_artist_ids(snapshot: Any) -> list[str]:
    """Artist ids flagged ``true`` under a user's favourites node, sorted."""
    return sorted(key for key, value in iter_children(snapshot) if value is True)
