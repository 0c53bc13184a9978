"""Domain-specific exceptions — framework-independent."""


class SyncError(Exception):
    """Base class for every failure surfaced by the record synchronization core."""

    retryable: bool = False


class EntityNotFoundError(SyncError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RecordValidationError(SyncError):
    """Raised when a local precondition fails before any network call.

    Nothing has been mutated when this is raised, so no rollback is needed.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NetworkError(SyncError):
    """Raised when the backend could not be reached."""

    retryable = True

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ServerError(SyncError):
    """Raised when the backend answers with a non-2xx status."""

    retryable = True

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class SessionExpiredError(ServerError):
    """Raised on 401 — terminal, the user has to sign in again."""

    retryable = False

    def __init__(self, message: str = "Session expired"):
        super().__init__(401, message)


class ReconciliationConflict(SyncError):
    """Raised when a server response refers to a record that no longer exists locally."""

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"Record '{record_id}' is no longer present locally")
