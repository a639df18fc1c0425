"""
Application-wide constants.

This module centralizes all magic strings and numbers used throughout the application
to improve maintainability and reduce duplication.
"""
from config.app_config import AppConfig


class ServerConfig:
    """Server configuration constants"""

    HOST = AppConfig.HOST
    PORT = AppConfig.PORT

    @classmethod
    def url(cls) -> str:
        """Get the full server URL"""
        return f"http://{cls.HOST}:{cls.PORT}"


class ApiConfig:
    """API routing constants"""

    TITLE = "Order Service API"
    VERSION = "1.0.0"
    PREFIX = "/api/v1"
    REQUEST_ID_HEADER = "X-Request-ID"


class MoneyConfig:
    """Monetary column limits (digits before + after the point, digits after)"""

    PRECISION = 10
    SCALE = 2


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409

    # Server Errors
    INTERNAL_SERVER_ERROR = 500

    PHRASES = {
        200: "OK",
        201: "Created",
        400: "Bad Request",
        404: "Not Found",
        405: "Method Not Allowed",
        409: "Conflict",
        422: "Unprocessable Entity",
        500: "Internal Server Error",
    }

    @classmethod
    def phrase(cls, code: int) -> str:
        """Reason phrase for a status code"""
        return cls.PHRASES.get(code, "Error")
