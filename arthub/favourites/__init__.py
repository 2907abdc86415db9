"""Per-user favourite artists."""

from .service import FavouriteService


__all__ = ["FavouriteService"]
