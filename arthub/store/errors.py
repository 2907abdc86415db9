"""Store error taxonomy.

Malformed records are not errors: decoders drop them and log at debug level.
"""


class StoreError(Exception):
    """Base store error."""

    def __init__(self, message: str, code: str = "store_error") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class TransientStoreError(StoreError):
    """Network or availability failure on a read or write.

    Plain reads and writes are not retried; the caller sees this error.
    """

    def __init__(self, message: str = "Data store temporarily unavailable") -> None:
        super().__init__(message, "transient_store_error")


class ConflictOnIncrementError(TransientStoreError):
    """A transaction lost every retry against concurrent writers."""

    def __init__(self, path: str, attempts: int) -> None:
        super().__init__(f"Transaction on {path} aborted after {attempts} attempts")
        self.code = "conflict_on_increment"
        self.path = path
        self.attempts = attempts


class InvalidKeyError(StoreError, ValueError):
    """A caller-supplied path segment is empty or uses a reserved character."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Invalid store key: {key!r}", "invalid_key")
        self.key = key
