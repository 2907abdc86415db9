"""FastAPI dependencies for accounts."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from arthub.store import StoreError

from .service import AccountError, AccountService


async def get_account_service(request: Request) -> AccountService:
    """Get account service from app state."""
    app_state = request.app.state
    if not hasattr(app_state, "account_service") or not app_state.account_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Account service not available",
        )
    return app_state.account_service


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]


def handle_account_error(error: AccountError | StoreError) -> HTTPException:
    """Convert account and store errors to HTTP exceptions."""
    status_map = {
        "account_not_found": status.HTTP_404_NOT_FOUND,
        "account_exists": status.HTTP_409_CONFLICT,
        "role_not_allowed": status.HTTP_403_FORBIDDEN,
        "invalid_key": status.HTTP_400_BAD_REQUEST,
        "transient_store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
        "conflict_on_increment": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(status_code=status_code, detail=error.message)
