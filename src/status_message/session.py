"""
Session gate. Tracks whether an account is signed in.

Two states, anonymous and authenticated. Sign-in and sign-out are atomic from
the controller's point of view; the wallet handles everything in between.
"""

import logging
from typing import Callable, Optional

from status_message.errors import AuthError
from status_message.models.events import ControllerEvent

logger = logging.getLogger(__name__)

SessionHandler = Callable[[str, Optional[str]], None]


class SessionGate:
    def __init__(self) -> None:
        self._identity: Optional[str] = None
        self._generation = 0
        self._handlers: list[SessionHandler] = []

    def is_authenticated(self) -> bool:
        return self._identity is not None

    def identity(self) -> Optional[str]:
        return self._identity

    @property
    def generation(self) -> int:
        """Bumped on every transition. Responses tagged with an older value are stale."""
        return self._generation

    def is_current(self, identity: Optional[str], generation: int) -> bool:
        return self._identity == identity and self._generation == generation

    def add_event_handler(self, handler: SessionHandler) -> Callable[[], None]:
        """Add a transition handler. Returns a cleanup function."""
        self._handlers.append(handler)

        def remove() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass
        return remove

    def sign_in(self, account_id: str) -> None:
        if not account_id or not account_id.strip():
            raise AuthError("account_id must not be empty")
        if self._identity == account_id:
            return
        if self._identity is not None:
            self.sign_out()
        self._identity = account_id
        self._generation += 1
        logger.debug("Signed in as %s", account_id)
        self._emit(ControllerEvent.AUTHENTICATED, account_id)

    def sign_out(self) -> None:
        if self._identity is None:
            return
        previous = self._identity
        self._identity = None
        self._generation += 1
        logger.debug("Signed out %s", previous)
        self._emit(ControllerEvent.RESET, previous)

    def _emit(self, event: str, identity: Optional[str]) -> None:
        for handler in list(self._handlers):
            handler(event, identity)
