"""Tracks the state of a game in progress."""

from __future__ import annotations

import time

from klotski.models.board import Configuration
from klotski.models.events import MoveEvent


class GameState:
    """Holds the current configuration, step counter, history and elapsed time.

    The configuration is replaced wholesale on every move; earlier values
    are kept on an undo stack.
    """

    def __init__(self, configuration: Configuration) -> None:
        self.configuration = configuration
        self.steps: int = 0
        self.history: list[MoveEvent] = []
        self._undo: list[tuple[Configuration, int, int]] = []
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- moves ----------------------------------------------------------------

    def record(self, configuration: Configuration, events: list[MoveEvent]) -> None:
        """Replace the configuration after a move and log its events."""
        if not events:
            return
        self._undo.append((self.configuration, self.steps, len(self.history)))
        self.configuration = configuration
        self.steps += 1
        self.history.extend(events)

    def undo(self) -> bool:
        if not self._undo:
            return False
        self.configuration, self.steps, history_len = self._undo.pop()
        del self.history[history_len:]
        return True

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)
