"""Account API endpoints."""

import structlog
from fastapi import APIRouter, status

from arthub.auth.dependencies import CurrentUser
from arthub.store import StoreError

from .dependencies import AccountServiceDep, handle_account_error
from .schemas import AccountResponse, RegisterAccountRequest
from .service import AccountError


logger = structlog.get_logger(__name__)


router = APIRouter(prefix="/v1/accounts", tags=["accounts"])


@router.get(
    "/me",
    response_model=AccountResponse,
    summary="Get my account",
)
async def get_my_account(
    account_service: AccountServiceDep,
    user: CurrentUser,
) -> AccountResponse:
    """Resolve the caller's account and role."""
    try:
        account = await account_service.get_account(user.uid)
    except (AccountError, StoreError) as e:
        raise handle_account_error(e) from e
    return AccountResponse.from_account(account)


@router.post(
    "/me",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register my account",
)
async def register_my_account(
    data: RegisterAccountRequest,
    account_service: AccountServiceDep,
    user: CurrentUser,
) -> AccountResponse:
    """Record the caller's role after sign-up.

    Only artist and visitor roles can be chosen, once.
    """
    email = data.email or user.email or ""
    try:
        account = await account_service.register_account(user.uid, email, data.role)
    except (AccountError, StoreError) as e:
        raise handle_account_error(e) from e
    return AccountResponse.from_account(account)
