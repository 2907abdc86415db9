"""Pydantic schemas for favourites."""

from pydantic import BaseModel


class FavouriteResponse(BaseModel):
    artist_id: str
    favourite: bool


class FavouriteListResponse(BaseModel):
    artist_ids: list[str]
    total: int
