"""Admin report API endpoints."""

from fastapi import APIRouter

from arthub.auth.dependencies import AdminUser
from arthub.store import StoreError

from .dependencies import ReportServiceDep, handle_report_error
from .schemas import EventReportListResponse, EventReportResponse
from .service import ReportError


router = APIRouter(prefix="/v1/reports", tags=["reports"])


@router.get(
    "",
    response_model=EventReportListResponse,
    summary="List event reports (admin)",
)
async def list_reports(
    report_service: ReportServiceDep,
    _admin: AdminUser,
) -> EventReportListResponse:
    try:
        reports = await report_service.list_reports()
    except StoreError as e:
        raise handle_report_error(e) from e

    return EventReportListResponse(
        items=[EventReportResponse.from_report(r) for r in reports],
        total=len(reports),
    )


@router.get(
    "/{event_id}",
    response_model=EventReportResponse,
    summary="Get event report (admin)",
)
async def get_report(
    event_id: str,
    report_service: ReportServiceDep,
    _admin: AdminUser,
) -> EventReportResponse:
    try:
        report = await report_service.get_report(event_id)
    except (ReportError, StoreError) as e:
        raise handle_report_error(e) from e

    return EventReportResponse.from_report(report)
