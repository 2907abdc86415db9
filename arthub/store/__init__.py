"""Remote data store access.

Note: the Firebase implementation is not exported here so the SDK is only
imported when it is actually used. Import it from arthub.store.firebase.
"""

from .errors import (
    ConflictOnIncrementError,
    InvalidKeyError,
    StoreError,
    TransientStoreError,
)
from .interfaces import RealtimeStore, Subscription
from .memory import InMemoryRealtimeStore
from .paths import SERVER_TIMESTAMP, child_path, validate_key


__all__ = [
    "SERVER_TIMESTAMP",
    "ConflictOnIncrementError",
    "InMemoryRealtimeStore",
    "InvalidKeyError",
    "RealtimeStore",
    "StoreError",
    "Subscription",
    "TransientStoreError",
    "child_path",
    "validate_key",
]
