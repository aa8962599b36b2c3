from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable

import structlog

from weathercheck.services.controller import ViewStateController

logger = structlog.get_logger()


class ControllerRegistry:
    """
    One `ViewStateController` per browser session, kept in memory only.

    Least recently used sessions are evicted once `max_sessions` is
    exceeded; an evicted controller is closed, which cancels its fetches.
    All access happens on the event loop thread.
    """

    def __init__(self, *, max_sessions: int) -> None:
        self._max_sessions = max(int(max_sessions), 1)
        self._by_session: OrderedDict[str, ViewStateController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._by_session)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._by_session

    def get_or_create(
        self, session_id: str, factory: Callable[[], ViewStateController]
    ) -> ViewStateController:
        controller = self._by_session.get(session_id)
        if controller is not None:
            self._by_session.move_to_end(session_id)
            return controller

        controller = factory()
        self._by_session[session_id] = controller
        while len(self._by_session) > self._max_sessions:
            evicted_id, evicted = self._by_session.popitem(last=False)
            evicted.close()
            logger.info("Evicted session", session_id=evicted_id)
        return controller

    def discard(self, session_id: str) -> None:
        controller = self._by_session.pop(session_id, None)
        if controller is not None:
            controller.close()

    def close(self) -> None:
        for controller in self._by_session.values():
            controller.close()
        self._by_session.clear()
