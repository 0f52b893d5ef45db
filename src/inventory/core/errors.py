"""Error taxonomy shared by repositories, services and the HTTP layer."""


class InventoryError(Exception):
    """Base class for all inventory errors."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(InventoryError):
    """Malformed or missing input, detected before any storage access."""

    status_code = 400


class ConflictError(ValidationError):
    """Input clashes with stored state (duplicate key, child records left)."""

    status_code = 409


class NotFound(InventoryError):
    """Lookup by identifier found no record."""

    status_code = 404

    def __init__(self, kind: str, entity_id: object) -> None:
        super().__init__(f"{kind} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class StorageError(InventoryError):
    """The persistence layer failed. The cause is kept for logging only."""

    status_code = 503


class DeadlineExceeded(InventoryError):
    """The request ran past its time limit; its writes were rolled back."""

    status_code = 504
