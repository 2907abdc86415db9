"""Firebase Realtime Database implementation of the RealtimeStore.

The Admin SDK is blocking, so every call is offloaded with
``asyncio.to_thread``. Listener events arrive on SDK threads; they are folded
into a local mirror of the subtree and handed back to the event loop with
``call_soon_threadsafe``.
"""

import asyncio
import threading
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import structlog
from firebase_admin import db, exceptions

from .errors import ConflictOnIncrementError, TransientStoreError
from .interfaces import RealtimeStore, SnapshotCallback, Subscription, TransactionFn
from .paths import apply_event, get_at, split_path


logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Admin SDK retry budget for transactions (db.Reference.transaction)
SDK_TRANSACTION_RETRIES = 25


class _FirebaseSubscription(Subscription):
    def __init__(self, registration: db.ListenerRegistration) -> None:
        self._registration = registration

    def close(self) -> None:
        self._registration.close()


class FirebaseRealtimeStore(RealtimeStore):
    """Realtime Database store bound to the default Firebase app."""

    def __init__(self, app: Any = None) -> None:
        self._app = app
        self._pending: set[asyncio.Task[None]] = set()

    def _ref(self, path: str) -> db.Reference:
        return db.reference("/" + "/".join(split_path(path)), app=self._app)

    async def _call(self, path: str, fn: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(fn)
        except db.TransactionAbortedError as e:
            logger.warning("transaction_aborted", path=path, error=str(e))
            raise ConflictOnIncrementError(path, SDK_TRANSACTION_RETRIES) from e
        except exceptions.FirebaseError as e:
            logger.warning(
                "store_request_failed",
                path=path,
                code=e.code,
                error=str(e),
            )
            raise TransientStoreError(f"Data store request failed: {e.code}") from e

    async def get(self, path: str) -> Any:
        ref = self._ref(path)
        return await self._call(path, ref.get)

    async def set(self, path: str, value: Any) -> None:
        ref = self._ref(path)
        if value is None:
            await self._call(path, ref.delete)
        else:
            await self._call(path, lambda: ref.set(value))

    async def update(self, path: str, values: Mapping[str, Any]) -> None:
        ref = self._ref(path)
        await self._call(path, lambda: ref.update(dict(values)))

    async def push(self, path: str, value: Any) -> str:
        ref = self._ref(path)
        child = await self._call(path, lambda: ref.push(value))
        return child.key

    async def transaction(self, path: str, update_fn: TransactionFn) -> Any:
        ref = self._ref(path)
        return await self._call(path, lambda: ref.transaction(update_fn))

    def subscribe(self, path: str, callback: SnapshotCallback) -> Subscription:
        loop = asyncio.get_running_loop()
        mirror_lock = threading.Lock()
        state: dict[str, Any] = {"mirror": None}

        def deliver(snapshot: Any) -> None:
            task = loop.create_task(callback(snapshot))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            task.add_done_callback(_log_callback_failure)

        def on_event(event: db.Event) -> None:
            with mirror_lock:
                state["mirror"] = apply_event(
                    state["mirror"],
                    event.event_type,
                    split_path(event.path),
                    event.data,
                )
                snapshot = get_at(state["mirror"], [])
            loop.call_soon_threadsafe(deliver, snapshot)

        registration = self._ref(path).listen(on_event)
        logger.debug("store_subscribed", path=path)
        return _FirebaseSubscription(registration)

    async def drain(self) -> None:
        """Wait until every scheduled subscription callback has run."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def _log_callback_failure(task: "asyncio.Task[None]") -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(
            "subscription_callback_failed",
            error=str(error),
            error_type=type(error).__name__,
        )
