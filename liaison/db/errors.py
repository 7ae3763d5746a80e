"""Store error hierarchy shared by every owner record backend.

Backends wrap driver-specific exceptions in one of these so callers
only ever handle StoreError.
"""


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConnectionError(StoreError):
    """Raised when the backend cannot be reached or the command fails.

    Examples:
        - PostgreSQL pool exhausted or server gone
        - Redis timeout
    """

    pass


class NotFoundError(StoreError):
    """Raised when a specific owner record or relationship lookup fails.

    Not raised by atomic_update, which reports a missing key through
    its return value.
    """

    pass


class ConflictError(StoreError):
    """Raised when a write loses against a concurrent writer.

    Examples:
        - Owner record provisioned twice
        - Serialization failure or deadlock in PostgreSQL
        - WATCH invalidated too many times in Redis
    """

    pass


class ValidationError(StoreError):
    """Raised when a stored document cannot be decoded into an OwnerRecord."""

    pass
