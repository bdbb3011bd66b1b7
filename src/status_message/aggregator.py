"""
Read aggregator. Fetches current status, history and the public feed.

The three reads go out together and are applied as one snapshot replacement,
so the UI never shows a current status that disagrees with the history or
feed from the same write. A view whose read failed keeps its last-known-good
value instead of being blanked.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Optional

from status_message.errors import RemoteReadError, StaleResponseError
from status_message.models.events import ControllerEvent
from status_message.models.status import FeedEntry, StatusRecord

if TYPE_CHECKING:
    from status_message.controller import SyncController

logger = logging.getLogger(__name__)

VIEWS = ("current", "history", "feed")


class RefreshResult:
    __slots__ = ("identity", "current", "history", "feed", "errors", "applied")

    def __init__(self, identity: str):
        self.identity = identity
        self.current: Optional[StatusRecord] = None
        self.history: tuple[StatusRecord, ...] = ()
        self.feed: tuple[FeedEntry, ...] = ()
        self.errors: dict[str, RemoteReadError] = {}
        self.applied = False

    @property
    def ok(self) -> bool:
        return self.applied and not self.errors

    def __repr__(self) -> str:
        return f"RefreshResult(identity={self.identity!r}, applied={self.applied}, errors={list(self.errors)})"


class ReadAggregator:
    def __init__(self, controller: "SyncController"):
        self._controller = controller
        self._lock = asyncio.Lock()
        self._initial: Optional[asyncio.Task[RefreshResult]] = None
        controller.gate.add_event_handler(self._on_session_event)

    def _on_session_event(self, event: str, identity: Optional[str]) -> None:
        if event == ControllerEvent.RESET:
            # Pending fetches finish on their own and the identity guard drops
            # their results. A fresh lock keeps a hung read from blocking the next session.
            self._initial = None
            self._lock = asyncio.Lock()
            return
        if event != ControllerEvent.AUTHENTICATED or identity is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, initial refresh for %s deferred to settle()", identity)
            return
        self._initial = loop.create_task(self.refresh_all(identity))

    async def settle(self) -> Optional[RefreshResult]:
        """Wait for the initial fetch scheduled by sign-in (or run it if none was scheduled)."""
        task = self._initial
        if task is not None:
            result = await task
            if self._initial is task:
                self._initial = None
            return result
        identity = self._controller.gate.identity()
        if identity is not None and not self._controller.state.settled:
            return await self.refresh_all(identity)
        return None

    async def refresh_all(self, identity: str) -> RefreshResult:
        """Re-read all three authenticated views for ``identity`` and apply them atomically.

        Refreshes never overlap: a call made while another is outstanding waits
        for it and then issues its own reads, so a refresh requested after a
        write always observes that write.
        """
        gate = self._controller.gate
        generation = gate.generation
        result = RefreshResult(identity)

        async with self._lock:
            if not gate.is_current(identity, generation):
                logger.debug("Skipping refresh for %s: session changed while queued", identity)
                return result

            self._controller.replace(settled=False)
            store = self._controller.store
            responses = await asyncio.gather(
                store.get_status(identity),
                store.get_status_history(identity),
                store.get_public_feed(),
                return_exceptions=True,
            )

            try:
                self._check_current(identity, generation)
            except StaleResponseError as e:
                logger.debug("Discarding refresh: %s", e)
                return result

            self._apply(result, dict(zip(VIEWS, responses)))

        self._controller.emit(ControllerEvent.REFRESHED, result)
        return result

    def _check_current(self, identity: str, generation: int) -> None:
        if not self._controller.gate.is_current(identity, generation):
            raise StaleResponseError(f"refresh for {identity} arrived after the session changed")

    def _apply(self, result: RefreshResult, responses: dict[str, Any]) -> None:
        state = self._controller.state
        changes: dict[str, Any] = {
            "current": state.current,
            "history": state.history,
            "feed": state.feed,
        }
        notices = state.notices

        for view, value in responses.items():
            if isinstance(value, BaseException):
                if not isinstance(value, Exception):
                    raise value
                err = RemoteReadError(view, f"Could not load {view}: {value}")
                logger.warning("Refresh of %s for %s failed: %s", view, result.identity, value)
                result.errors[view] = err
                notices = self._controller.with_notice(view, str(err))
                continue
            notices = self._controller.with_notice(view, None)
            if view == "current":
                changes[view] = value
            else:
                changes[view] = tuple(value or ())

        result.current = changes["current"]
        result.history = changes["history"]
        result.feed = changes["feed"]
        result.applied = True
        self._controller.replace(settled=True, notices=notices, **changes)
