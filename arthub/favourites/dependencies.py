"""FastAPI dependencies for favourites."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from arthub.store import StoreError

from .service import FavouriteService


async def get_favourite_service(request: Request) -> FavouriteService:
    """Get favourite service from app state."""
    app_state = request.app.state
    if not hasattr(app_state, "favourite_service") or not app_state.favourite_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Favourite service not available",
        )
    return app_state.favourite_service


FavouriteServiceDep = Annotated[FavouriteService, Depends(get_favourite_service)]


def handle_favourite_error(error: StoreError) -> HTTPException:
    """Convert store errors to HTTP exceptions."""
    status_map = {
        "invalid_key": status.HTTP_400_BAD_REQUEST,
        "transient_store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
        "conflict_on_increment": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(status_code=status_code, detail=error.message)
