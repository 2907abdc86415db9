"""Admin event reports."""

from .models import EventReport
from .service import ReportError, ReportNotFoundError, ReportService


__all__ = ["EventReport", "ReportError", "ReportNotFoundError", "ReportService"]
