"""Error hierarchy for docreg.

Error layers:
- DocregError: Base class for all docreg errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage I/O (5xx responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class DocregError(Exception):
    """Base class for all docreg errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(DocregError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code or "VALIDATION_ERROR")
        self.field = field


class InvalidNameError(ValidationError):
    """Document name does not decompose into customer, type and date."""

    def __init__(self, message: str) -> None:
        super().__init__(message, field="name", code="INVALID_NAME")


class InvalidContentError(ValidationError):
    """Document body could not be converted to canonical JSON."""

    def __init__(self, message: str) -> None:
        super().__init__(message, field="file", code="INVALID_CONTENT")


class ConflictError(DomainError):
    """Resource already exists."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 5xx)
# =============================================================================


class InfrastructureError(DocregError):
    """Base class for infrastructure/system errors."""


class StorageError(InfrastructureError):
    """Filesystem operation on the object store or an index failed.

    Carries enough context (namespace, key, name) to repair the store offline.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        namespace: str | None = None,
        key: str | None = None,
    ) -> None:
        super().__init__(message, code="STORAGE_ERROR")
        self.name = name
        self.namespace = namespace
        self.key = key


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
