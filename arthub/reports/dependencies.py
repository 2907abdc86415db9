"""FastAPI dependencies for admin reports."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from arthub.store import StoreError

from .service import ReportError, ReportService


async def get_report_service(request: Request) -> ReportService:
    """Get report service from app state."""
    app_state = request.app.state
    if not hasattr(app_state, "report_service") or not app_state.report_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Report service not available",
        )
    return app_state.report_service


ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]


def handle_report_error(error: ReportError | StoreError) -> HTTPException:
    """Convert report and store errors to HTTP exceptions."""
    status_map = {
        "report_not_found": status.HTTP_404_NOT_FOUND,
        "invalid_key": status.HTTP_400_BAD_REQUEST,
        "transient_store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(status_code=status_code, detail=error.message)
