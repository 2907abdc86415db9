"""Likes, interest, RSVP and plain interaction counters."""

from .models import COUNTER_REGISTRY, CounterStrategy, MembershipResult, strategy_for
from .service import CounterError, CounterService, CounterStrategyError


__all__ = [
    "COUNTER_REGISTRY",
    "CounterError",
    "CounterService",
    "CounterStrategy",
    "CounterStrategyError",
    "MembershipResult",
    "strategy_for",
]
