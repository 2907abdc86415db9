"""Pydantic schemas for admin reports."""

from pydantic import BaseModel

from .models import EventReport


class EventReportResponse(BaseModel):
    event_id: str
    title: str
    banner_image_url: str
    interested_count: int
    rsvp_count: int
    most_liked_artist: str
    confirmed_visitors: list[str]

    @classmethod
    def from_report(cls, report: EventReport) -> "EventReportResponse":
        return cls(
            event_id=report.event_id,
            title=report.title,
            banner_image_url=report.banner_image_url,
            interested_count=report.interested_count,
            rsvp_count=report.rsvp_count,
            most_liked_artist=report.most_liked_artist,
            confirmed_visitors=list(report.confirmed_visitors),
        )


class EventReportListResponse(BaseModel):
    items: list[EventReportResponse]
    total: int
