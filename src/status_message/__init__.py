"""
status-message: publish a short status and follow everyone else's.

Client-side synchronization core plus an HTTP client for the status contract.
"""

from status_message.client import StatusClient, AsyncStatusClient
from status_message.contract import StatusContract, RemoteStore, DEFAULT_GAS
from status_message.controller import SyncController
from status_message.errors import (
    StatusMessageError,
    ValidationError,
    RemoteReadError,
    RemoteWriteError,
    WriteInProgressError,
    StaleResponseError,
    AuthError,
    ConnectionError,
)
from status_message.models.events import ControllerEvent, RemoteMethod
from status_message.models.status import MAX_MESSAGE_LENGTH, StatusRecord, FeedEntry, ViewState

__version__ = "0.1.0"
__all__ = [
    "StatusClient",
    "AsyncStatusClient",
    "StatusContract",
    "RemoteStore",
    "SyncController",
    "StatusMessageError",
    "ValidationError",
    "RemoteReadError",
    "RemoteWriteError",
    "WriteInProgressError",
    "StaleResponseError",
    "AuthError",
    "ConnectionError",
    "ControllerEvent",
    "RemoteMethod",
    "StatusRecord",
    "FeedEntry",
    "ViewState",
    "MAX_MESSAGE_LENGTH",
    "DEFAULT_GAS",
]
