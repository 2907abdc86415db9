"""Admin report service."""

import structlog

from arthub.store import RealtimeStore, child_path
from arthub.store.records import DecodeError, iter_children

from .models import REPORTS_PATH, EventReport, decode_report


logger = structlog.get_logger(__name__)


class ReportError(Exception):
    """Base report error."""

    def __init__(self, message: str, code: str = "report_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ReportNotFoundError(ReportError):
    """No report exists for the event."""

    def __init__(self, message: str = "Report not found"):
        super().__init__(message, "report_not_found")


class ReportService:
    """Reads event reports for admins."""

    def __init__(self, store: RealtimeStore):
        self.store = store

    async def list_reports(self) -> list[EventReport]:
        """All decodable reports, ordered by event id."""
        snapshot = await self.store.get(REPORTS_PATH)

        reports = []
        for event_id, node in iter_children(snapshot):
            result = decode_report(event_id, node)
            if isinstance(result, DecodeError):
                logger.debug("report_record_dropped", event_id=event_id)
                continue
            reports.append(result.value)

        reports.sort(key=lambda r: r.event_id)
        return reports

    async def get_report(self, event_id: str) -> EventReport:
        node = await self.store.get(child_path(REPORTS_PATH, event_id))
        result = decode_report(event_id, node)
        if isinstance(result, DecodeError):
            raise ReportNotFoundError
        return result.value
