"""Domain-specific exceptions — framework-independent.

Every error raised across the content core carries an ``ErrorStatus`` so the
HTTP layer can map it to a response without inspecting message text.
"""

from enum import Enum


class ErrorStatus(str, Enum):
    """Status taxonomy exposed to callers."""

    NOT_FOUND = "not_found"
    DATASTORE_ERROR = "datastore_error"
    CONVERSION_ERROR = "conversion_error"
    BAD_REQUEST = "bad_request"
    NOT_REGISTERED = "not_registered"
    INVALID_BACKEND = "invalid_backend"


class ContentError(Exception):
    """Base class for classified content errors."""

    status: ErrorStatus = ErrorStatus.DATASTORE_ERROR

    def __init__(self, message: str, status: ErrorStatus | None = None):
        if status is not None:
            self.status = status
        self.message = message
        super().__init__(message)


class EntityNotFoundError(ContentError):
    """Raised when a requested entry does not exist or is not visible to the caller."""

    status = ErrorStatus.NOT_FOUND

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DatastoreError(ContentError):
    """Raised when the storage layer fails."""

    status = ErrorStatus.DATASTORE_ERROR


class DuplicateEntityError(DatastoreError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ConversionError(ContentError):
    """Raised when an uploaded image cannot be converted or resized."""

    status = ErrorStatus.CONVERSION_ERROR


class BadRequestError(ContentError):
    """Raised when the caller supplied an unusable request."""

    status = ErrorStatus.BAD_REQUEST


class BackendNotRegisteredError(ContentError):
    """Raised when no backend is registered under the requested key."""

    status = ErrorStatus.NOT_REGISTERED

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"No backend registered for '{key}'")


class InvalidBackendError(ContentError):
    """Raised when a registered backend lacks the required capability."""

    status = ErrorStatus.INVALID_BACKEND

    def __init__(self, key: str, capability: str):
        self.key = key
        self.capability = capability
        super().__init__(f"Backend registered for '{key}' does not implement {capability}")


class UnboundEntryError(ContentError):
    """Raised when mutating an entry that has no printer bound to it."""

    status = ErrorStatus.INVALID_BACKEND

    def __init__(self, title_path: str):
        self.title_path = title_path
        super().__init__(f"Entry '{title_path}' is not bound to a printer backend")


class RegistryFrozenError(RuntimeError):
    """Raised when registering a backend after the registry was frozen."""
