"""
Status message error types.

Every error is recoverable at the operation that raised it; none is fatal.
"""

from typing import Any, Optional


class StatusMessageError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ValidationError(StatusMessageError):
    """Message length out of bounds. Raised before any remote call."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("validation_error", message, details)


class RemoteReadError(StatusMessageError):
    def __init__(self, view: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("remote_read_error", message, details)
        self.view = view


class RemoteWriteError(StatusMessageError):
    def __init__(self, operation: str, message: str, code: str = "remote_write_error",
                 details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)
        self.operation = operation


class WriteInProgressError(RemoteWriteError):
    def __init__(self, operation: str):
        super().__init__(operation, f"Cannot {operation}: another write is still pending", code="write_in_progress")


class StaleResponseError(StatusMessageError):
    """A response arrived after a newer request or a different identity superseded it."""

    def __init__(self, message: str):
        super().__init__("stale_response", message)


class AuthError(StatusMessageError):
    def __init__(self, message: str, code: str = "auth_error"):
        super().__init__(code, message)


class ConnectionError(StatusMessageError):
    def __init__(self, message: str):
        super().__init__("connection_error", message)
