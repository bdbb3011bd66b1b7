"""
Synchronization controller. Owns the view state and wires the session gate,
read aggregator, write pipeline and search together.

All visible state lives in one frozen ViewState. Components never mutate it;
they hand the controller a set of whole-value replacements and the controller
swaps in a new snapshot and notifies subscribers.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from status_message.aggregator import ReadAggregator, RefreshResult
from status_message.contract import DEFAULT_GAS, RemoteStore
from status_message.errors import AuthError
from status_message.models.events import ControllerEvent
from status_message.models.status import MAX_MESSAGE_LENGTH, FeedEntry, ViewState
from status_message.search import SearchSubsystem
from status_message.session import SessionGate
from status_message.writer import WritePipeline, WriteResult

EventHandler = Callable[[str, Any], None]


class SyncController:
    def __init__(self, store: RemoteStore, gas: int = DEFAULT_GAS):
        self._store = store
        self._state = ViewState()
        self._handlers: list[EventHandler] = []
        # Latest notice per source ("current", "feed", "write", "search", ...).
        self._notices: dict[str, str] = {}

        self.gate = SessionGate()
        # Registered before the components so the state carries the new
        # identity by the time the aggregator reacts to AUTHENTICATED.
        self.gate.add_event_handler(self._on_session_event)

        self.reader = ReadAggregator(self)
        self.writer = WritePipeline(self, gas=gas)
        self.searcher = SearchSubsystem(self)

    @property
    def store(self) -> RemoteStore:
        return self._store

    @property
    def state(self) -> ViewState:
        return self._state

    # -- state ownership -------------------------------------------------

    def replace(self, **changes: Any) -> ViewState:
        """Swap in a new snapshot with ``changes`` applied and notify subscribers."""
        self._state = self._state.model_copy(update=changes)
        self.emit(ControllerEvent.STATE_CHANGED, self._state)
        return self._state

    def dismiss_notices(self) -> ViewState:
        self._notices.clear()
        return self.replace(notices=())

    def with_notice(self, source: str, message: Optional[str]) -> tuple[str, ...]:
        """Record (or, with ``message=None``, drop) the notice for ``source``.

        Each source keeps only its latest notice, so a view that keeps failing
        shows one entry rather than one per attempt. Returns the new notices
        tuple for the caller to fold into its own ``replace``.
        """
        self._notices.pop(source, None)
        if message is not None:
            self._notices[source] = message
        return tuple(self._notices.values())

    def set_draft(self, text: str) -> bool:
        """Update the input field. Text past the length cap is refused, like the capped input control."""
        if len(text) > MAX_MESSAGE_LENGTH:
            return False
        self.replace(draft=text)
        return True

    # -- events ----------------------------------------------------------

    def add_event_handler(self, handler: EventHandler) -> Callable[[], None]:
        """Add an event handler. Returns a cleanup function."""
        self._handlers.append(handler)

        def remove() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass
        return remove

    def subscribe(self, callback: Callable[[ViewState], None]) -> Callable[[], None]:
        """Call ``callback`` with every new snapshot."""
        def handler(event: str, payload: Any) -> None:
            if event == ControllerEvent.STATE_CHANGED:
                callback(payload)
        return self.add_event_handler(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        for handler in list(self._handlers):
            handler(event, payload)

    def _on_session_event(self, event: str, identity: Optional[str]) -> None:
        if event == ControllerEvent.AUTHENTICATED:
            self._notices.clear()
            self._state = ViewState(identity=identity, settled=False)
        elif event == ControllerEvent.RESET:
            self._notices.clear()
            self._state = ViewState()
        self.emit(event, identity)
        self.emit(ControllerEvent.STATE_CHANGED, self._state)

    # -- operations --------------------------------------------------------

    async def sign_in(self, account_id: str) -> ViewState:
        """Authenticate and wait for the initial fetch of all three views."""
        self.gate.sign_in(account_id)
        await self.reader.settle()
        return self._state

    def sign_out(self) -> ViewState:
        self.gate.sign_out()
        return self._state

    async def refresh(self) -> RefreshResult:
        identity = self.gate.identity()
        if identity is None:
            raise AuthError("Sign in to load statuses")
        return await self.reader.refresh_all(identity)

    async def submit(self, message: Optional[str] = None) -> WriteResult:
        """Publish ``message``, or the draft when none is given. Only the draft is cleared on success."""
        if message is None:
            return await self.writer.submit(self._state.draft, from_draft=True)
        return await self.writer.submit(message)

    async def delete_status(self) -> WriteResult:
        return await self.writer.delete_status()

    async def search(self, keyword: str) -> tuple[FeedEntry, ...]:
        return await self.searcher.search(keyword)

    def clear_search(self) -> ViewState:
        self.searcher.clear()
        return self._state
