"""Pydantic schemas for counters."""

from pydantic import BaseModel, Field

from .models import CounterStrategy


class IncrementRequest(BaseModel):
    """Request to change a transactional counter."""

    delta: int = Field(1, ge=-1000, le=1000)


class CounterResponse(BaseModel):
    """Current value of a counter."""

    subject_id: str
    name: str
    strategy: CounterStrategy
    value: int
    is_member: bool | None = None


class MembershipResponse(BaseModel):
    """Caller's membership after a join or leave."""

    subject_id: str
    name: str
    active: bool
    count: int
