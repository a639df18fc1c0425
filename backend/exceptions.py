"""
Custom exception classes for the application.

This module defines the service-level error kinds surfaced by the order
service. The API layer maps each of them to an HTTP status code.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Raised when order input is malformed"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class NotFoundError(ApplicationError):
    """Raised when no order exists for the given identifier"""

    def __init__(self, resource_id: str, resource: str = "Order"):
        self.resource_id = resource_id
        details = {"resource": resource, "id": resource_id}
        super().__init__(f"{resource} with ID {resource_id} not found", details)


class InvalidTransitionError(ApplicationError):
    """Raised when a status change is not permitted from the current status"""

    def __init__(self, source: str, target: str, message: str | None = None):
        self.source = source
        self.target = target
        details = {"from_status": source, "to_status": target}
        msg = message or f"Cannot transition from {source} to {target}"
        super().__init__(msg, details)


class ConflictError(ApplicationError):
    """Raised when an order changed between being read and being written"""

    def __init__(self, resource_id: str, resource: str = "Order"):
        self.resource_id = resource_id
        details = {"resource": resource, "id": resource_id}
        super().__init__(
            f"{resource} with ID {resource_id} was modified concurrently; reload and retry",
            details,
        )

class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
