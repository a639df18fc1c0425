"""
Domain-level failures raised by entities and aggregates.

These carry no HTTP or persistence knowledge. The service layer translates
them into application errors (see exceptions.py).
"""


class DomainError(Exception):
    """Base class for all domain rule violations"""


class InvalidOrderError(DomainError):
    """Raised when an order or order item is built from malformed input"""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class IllegalStatusTransitionError(DomainError):
    """Raised when an order is asked to move to a status it cannot reach"""

    def __init__(self, source, target):
        self.source = source
        self.target = target
        super().__init__(f"Cannot transition from {source.value} to {target.value}")
