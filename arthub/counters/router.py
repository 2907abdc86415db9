"""Interaction counter API endpoints."""

import structlog
from fastapi import APIRouter

from arthub.auth.dependencies import CurrentUser
from arthub.store import StoreError

from .dependencies import CounterServiceDep, handle_counter_error
from .models import CounterStrategy, strategy_for
from .schemas import CounterResponse, IncrementRequest, MembershipResponse
from .service import CounterError


logger = structlog.get_logger(__name__)


router = APIRouter(prefix="/v1/counters", tags=["counters"])


@router.get(
    "/{subject_id}/{name}",
    response_model=CounterResponse,
    summary="Get counter",
)
async def get_counter(
    subject_id: str,
    name: str,
    counter_service: CounterServiceDep,
    user: CurrentUser,
) -> CounterResponse:
    """Get a counter value, plus the caller's membership where it applies."""
    strategy = strategy_for(name)
    try:
        value = await counter_service.counter_value(subject_id, name)
        is_member = None
        if strategy == CounterStrategy.MEMBERSHIP:
            is_member = await counter_service.is_member(subject_id, name, user.uid)
    except (CounterError, StoreError) as e:
        raise handle_counter_error(e) from e

    return CounterResponse(
        subject_id=subject_id,
        name=name,
        strategy=strategy,
        value=value,
        is_member=is_member,
    )


@router.post(
    "/{subject_id}/{name}/increment",
    response_model=CounterResponse,
    summary="Increment counter",
)
async def increment_counter(
    subject_id: str,
    name: str,
    data: IncrementRequest,
    counter_service: CounterServiceDep,
    _user: CurrentUser,
) -> CounterResponse:
    """Atomically change a transactional counter by ``delta``."""
    try:
        value = await counter_service.increment_counter(subject_id, name, data.delta)
    except (CounterError, StoreError) as e:
        raise handle_counter_error(e) from e

    return CounterResponse(
        subject_id=subject_id,
        name=name,
        strategy=CounterStrategy.TRANSACTIONAL,
        value=value,
    )


async def _set_membership(
    subject_id: str,
    name: str,
    user_id: str,
    active: bool,
    counter_service: CounterServiceDep,
) -> MembershipResponse:
    try:
        result = await counter_service.set_membership(subject_id, name, user_id, active)
    except (CounterError, StoreError) as e:
        raise handle_counter_error(e) from e

    return MembershipResponse(
        subject_id=subject_id,
        name=name,
        active=result.active,
        count=result.count,
    )


@router.put(
    "/{subject_id}/{name}/members/me",
    response_model=MembershipResponse,
    summary="Join (like, mark interested, RSVP)",
)
async def join(
    subject_id: str,
    name: str,
    counter_service: CounterServiceDep,
    user: CurrentUser,
) -> MembershipResponse:
    return await _set_membership(subject_id, name, user.uid, True, counter_service)


@router.delete(
    "/{subject_id}/{name}/members/me",
    response_model=MembershipResponse,
    summary="Leave",
)
async def leave(
    subject_id: str,
    name: str,
    counter_service: CounterServiceDep,
    user: CurrentUser,
) -> MembershipResponse:
    return await _set_membership(subject_id, name, user.uid, False, counter_service)
