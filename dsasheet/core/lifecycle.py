from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

ACTIVE = "active"
INACTIVE = "inactive"
BACKGROUND = "background"

_STATES = (ACTIVE, INACTIVE, BACKGROUND)


class ResumeWatcher:
    """Calls ``on_resume`` when the app comes back to the foreground.

    A resume is a transition from inactive or background to active.
    """

    def __init__(self, on_resume: Callable[[], object], initial_state: str = ACTIVE) -> None:
        if initial_state not in _STATES:
            raise ValueError(f"unknown app state: {initial_state!r}")
        self._on_resume = on_resume
        self._state = initial_state

    @property
    def state(self) -> str:
        return self._state

    def update(self, state: str) -> bool:
        """Record the new state. Returns True if this was a resume."""
        if state not in _STATES:
            raise ValueError(f"unknown app state: {state!r}")
        previous = self._state
        self._state = state
        if previous in (INACTIVE, BACKGROUND) and state == ACTIVE:
            logger.debug("App resumed from %s", previous)
            self._on_resume()
            return True
        return False
