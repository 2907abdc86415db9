"""FastAPI dependencies for counters."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from arthub.store import StoreError

from .service import CounterError, CounterService


async def get_counter_service(request: Request) -> CounterService:
    """Get counter service from app state."""
    app_state = request.app.state
    if not hasattr(app_state, "counter_service") or not app_state.counter_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Counter service not available",
        )
    return app_state.counter_service


CounterServiceDep = Annotated[CounterService, Depends(get_counter_service)]


def handle_counter_error(error: CounterError | StoreError) -> HTTPException:
    """Convert counter and store errors to HTTP exceptions."""
    status_map = {
        "counter_strategy_mismatch": status.HTTP_409_CONFLICT,
        "invalid_key": status.HTTP_400_BAD_REQUEST,
        "transient_store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
        "conflict_on_increment": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(status_code=status_code, detail=error.message)
