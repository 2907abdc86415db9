"""Favourite artist API endpoints."""

from fastapi import APIRouter

from arthub.auth.dependencies import CurrentUser
from arthub.store import StoreError

from .dependencies import FavouriteServiceDep, handle_favourite_error
from .schemas import FavouriteListResponse, FavouriteResponse


router = APIRouter(prefix="/v1/favourites", tags=["favourites"])


@router.get(
    "",
    response_model=FavouriteListResponse,
    summary="List my favourite artists",
)
async def list_favourites(
    favourite_service: FavouriteServiceDep,
    user: CurrentUser,
) -> FavouriteListResponse:
    try:
        artist_ids = await favourite_service.list_favourites(user.uid)
    except StoreError as e:
        raise handle_favourite_error(e) from e
    return FavouriteListResponse(artist_ids=artist_ids, total=len(artist_ids))


@router.get(
    "/{artist_id}",
    response_model=FavouriteResponse,
    summary="Check whether an artist is a favourite",
)
async def get_favourite(
    artist_id: str,
    favourite_service: FavouriteServiceDep,
    user: CurrentUser,
) -> FavouriteResponse:
    try:
        favourite = await favourite_service.is_favourite(user.uid, artist_id)
    except StoreError as e:
        raise handle_favourite_error(e) from e
    return FavouriteResponse(artist_id=artist_id, favourite=favourite)


@router.put(
    "/{artist_id}",
    response_model=FavouriteResponse,
    summary="Add an artist to my favourites",
)
async def add_favourite(
    artist_id: str,
    favourite_service: FavouriteServiceDep,
    user: CurrentUser,
) -> FavouriteResponse:
    try:
        favourite = await favourite_service.set_favourite(user.uid, artist_id, True)
    except StoreError as e:
        raise handle_favourite_error(e) from e
    return FavouriteResponse(artist_id=artist_id, favourite=favourite)


@router.delete(
    "/{artist_id}",
    response_model=FavouriteResponse,
    summary="Remove an artist from my favourites",
)
async def remove_favourite(
    artist_id: str,
    favourite_service: FavouriteServiceDep,
    user: CurrentUser,
) -> FavouriteResponse:
    try:
        favourite = await favourite_service.set_favourite(user.uid, artist_id, False)
    except StoreError as e:
        raise handle_favourite_error(e) from e
    return FavouriteResponse(artist_id=artist_id, favourite=favourite)


@router.post(
    "/{artist_id}/toggle",
    response_model=FavouriteResponse,
    summary="Toggle an artist in my favourites",
)
async def toggle_favourite(
    artist_id: str,
    favourite_service: FavouriteServiceDep,
    user: CurrentUser,
) -> FavouriteResponse:
    try:
        favourite = await favourite_service.toggle_favourite(user.uid, artist_id)
    except StoreError as e:
        raise handle_favourite_error(e) from e
    return FavouriteResponse(artist_id=artist_id, favourite=favourite)
