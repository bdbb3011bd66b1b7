"""
Write pipeline: validate, submit, confirm, then refresh.

Writes are ledger transactions: they cost gas and cannot be undone, so input
is checked locally first and only one write per session may be outstanding.
Nothing visible changes until the remote store confirms; the refresh that
follows is what puts the new status on screen.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional

from status_message.aggregator import RefreshResult
from status_message.contract import DEFAULT_GAS
from status_message.errors import AuthError, RemoteWriteError, ValidationError, WriteInProgressError
from status_message.models.events import ControllerEvent
from status_message.models.status import MAX_MESSAGE_LENGTH

if TYPE_CHECKING:
    from status_message.controller import SyncController

logger = logging.getLogger(__name__)


def validate_message(message: str) -> str:
    if not isinstance(message, str):
        raise ValidationError("Message must be a string")
    length = len(message)
    if length < 1:
        raise ValidationError("Message must not be empty", {"length": 0, "max_length": MAX_MESSAGE_LENGTH})
    if length > MAX_MESSAGE_LENGTH:
        raise ValidationError(
            f"Message must be {MAX_MESSAGE_LENGTH} characters or less",
            {"length": length, "max_length": MAX_MESSAGE_LENGTH},
        )
    return message


class WriteResult:
    __slots__ = ("operation", "identity", "confirmation", "refresh")

    def __init__(self, operation: str, identity: str, confirmation: Any,
                 refresh: Optional[RefreshResult] = None):
        self.operation = operation
        self.identity = identity
        self.confirmation = confirmation
        self.refresh = refresh

    def __repr__(self) -> str:
        return f"WriteResult(operation={self.operation!r}, identity={self.identity!r})"


class WritePipeline:
    def __init__(self, controller: "SyncController", gas: int = DEFAULT_GAS):
        self._controller = controller
        self._gas = gas
        # Session generation of the outstanding write, if any.
        self._inflight: Optional[int] = None

    @property
    def busy(self) -> bool:
        return self._inflight is not None and self._inflight == self._controller.gate.generation

    async def submit(self, message: str, from_draft: bool = False) -> WriteResult:
        identity = self._require_identity("submit")
        validate_message(message)
        store = self._controller.store
        return await self._write(
            "submit", identity,
            lambda: store.set_status(message, identity, gas=self._gas),
            clear_draft=from_draft,
        )

    async def delete_status(self) -> WriteResult:
        identity = self._require_identity("delete")
        store = self._controller.store
        return await self._write(
            "delete", identity,
            lambda: store.delete_status(gas=self._gas),
            clear_draft=False,
        )

    def _require_identity(self, operation: str) -> str:
        identity = self._controller.gate.identity()
        if identity is None:
            raise AuthError(f"Sign in to {operation} a status")
        return identity

    async def _write(
        self,
        operation: str,
        identity: str,
        call: Callable[[], Awaitable[Any]],
        clear_draft: bool,
    ) -> WriteResult:
        gate = self._controller.gate
        if self.busy:
            raise WriteInProgressError(operation)

        generation = gate.generation
        self._inflight = generation
        try:
            self._controller.replace(submitting=True)
            try:
                confirmation = await call()
            except Exception as e:
                err = RemoteWriteError(operation, f"Could not {operation} status: {e}")
                logger.warning("%s for %s failed: %s", operation, identity, e)
                if gate.is_current(identity, generation):
                    self._controller.replace(
                        submitting=False, notices=self._controller.with_notice("write", str(err)))
                raise err from e

            result = WriteResult(operation, identity, confirmation)
            if not gate.is_current(identity, generation):
                logger.debug("%s for %s confirmed after the session changed; not refreshing", operation, identity)
                return result

            logger.debug("%s confirmed for %s", operation, identity)
            self._controller.emit(ControllerEvent.WRITE_CONFIRMED, result)
            result.refresh = await self._controller.reader.refresh_all(identity)

            if gate.is_current(identity, generation):
                changes: dict[str, Any] = {
                    "submitting": False,
                    "notices": self._controller.with_notice("write", None),
                }
                if clear_draft:
                    changes["draft"] = ""
                self._controller.replace(**changes)
            return result
        finally:
            if self._inflight == generation:
                self._inflight = None
                # Cancelled mid-write: re-enable submission for this session.
                if gate.is_current(identity, generation) and self._controller.state.submitting:
                    self._controller.replace(submitting=False)
