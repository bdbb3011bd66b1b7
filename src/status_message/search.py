"""
Keyword search over published statuses.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from status_message.errors import RemoteReadError, StaleResponseError
from status_message.models.events import ControllerEvent
from status_message.models.status import FeedEntry

if TYPE_CHECKING:
    from status_message.controller import SyncController

logger = logging.getLogger(__name__)


class SearchSubsystem:
    """One-shot search. Only the most recently issued query may update the results."""

    def __init__(self, controller: "SyncController"):
        self._controller = controller
        self._seq = 0

    @property
    def latest(self) -> int:
        return self._seq

    def clear(self) -> None:
        self._seq += 1
        self._controller.replace(search_results=(), query="", searching=False)

    async def search(self, keyword: str) -> tuple[FeedEntry, ...]:
        if not keyword or not keyword.strip():
            self.clear()
            return ()

        self._seq += 1
        seq = self._seq
        gate = self._controller.gate
        identity, generation = gate.identity(), gate.generation
        self._controller.replace(query=keyword, searching=True)

        try:
            found = await self._controller.store.search_statuses(keyword)
        except Exception as e:
            try:
                self._check_latest(seq, identity, generation)
            except StaleResponseError:
                logger.debug("Ignoring failure of superseded search %r: %s", keyword, e)
                return self._controller.state.search_results
            err = RemoteReadError("search", f"Search for {keyword!r} failed: {e}")
            logger.warning("Search for %r failed: %s", keyword, e)
            self._controller.replace(searching=False, notices=self._controller.with_notice("search", str(err)))
            raise err from e

        try:
            self._check_latest(seq, identity, generation)
        except StaleResponseError as e:
            logger.debug("Discarding search response: %s", e)
            return self._controller.state.search_results

        results = tuple(found)
        self._controller.replace(search_results=results, searching=False,
                                 notices=self._controller.with_notice("search", None))
        self._controller.emit(ControllerEvent.SEARCHED, results)
        return results

    def _check_latest(self, seq: int, identity, generation: int) -> None:
        if seq != self._seq:
            raise StaleResponseError(f"search #{seq} superseded by #{self._seq}")
        if not self._controller.gate.is_current(identity, generation):
            raise StaleResponseError(f"search #{seq} arrived after the session changed")
