"""
Feedback Sequencer

Turns a scored guess into the ordered, time-staggered stream of tile reveals
the presentation layer animates. The sequencer only computes the stream; the
consumer decides how to wait between events.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from ..config.game_settings import REVEAL_DELAY_MS, RESOLUTION_MARGIN_MS
from ..models.game import LetterStatus, RevealEvent

logger = logging.getLogger(__name__)


class FeedbackSequence:
    """
    Finite, single-use stream of reveal events for one submitted row.

    Iterating yields the events in position order. Once the last event has
    been handed out, the completion callback fires exactly once. A second
    iteration raises RuntimeError.
    """

    def __init__(self, session_id: int, row: int, events: List[RevealEvent],
                 resolution_delay_ms: int, on_complete: Optional[Callable[[], None]] = None):
        self.session_id = session_id
        self.row = row
        self.resolution_delay_ms = resolution_delay_ms
        self._events = tuple(events)
        self._on_complete = on_complete
        self._started = False
        self._completed = False

    @property
    def events(self):
        """All events of the row, for inspection without consuming the stream."""
        return self._events

    @property
    def started(self) -> bool:
        return self._started

    @property
    def completed(self) -> bool:
        return self._completed

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[RevealEvent]:
        if self._started:
            raise RuntimeError(f"Feedback for row {self.row} has already been started")
        self._started = True
        return self._emit()

    def _emit(self) -> Iterator[RevealEvent]:
        for event in self._events:
            yield event
        self._complete()

    def drain(self) -> List[RevealEvent]:
        """Consume the whole stream at once and return the events."""
        return list(self)

    def _complete(self) -> None:
        if self._completed:
            return
        self._completed = True
        logger.debug("Feedback for session %s row %s complete", self.session_id, self.row)
        if self._on_complete is not None:
            self._on_complete()


class FeedbackSequencer:
    """Builds FeedbackSequence objects with a fixed stagger between tiles."""

    def __init__(self, delay_unit_ms: int = REVEAL_DELAY_MS,
                 resolution_margin_ms: int = RESOLUTION_MARGIN_MS):
        if delay_unit_ms < 0:
            raise ValueError("delay_unit_ms cannot be negative")
        self.delay_unit_ms = delay_unit_ms
        self.resolution_margin_ms = resolution_margin_ms

    def sequence(self,
                 session_id: int,
                 row: int,
                 guess: str,
                 classifications: Sequence[LetterStatus],
                 key_status: Dict[str, LetterStatus],
                 on_complete: Optional[Callable[[], None]] = None) -> FeedbackSequence:
        """
        Build the reveal stream for a row.

        Args:
            session_id: Session the row belongs to
            row: Row index on the board
            guess: The submitted word
            classifications: Evaluator output, one per position
            key_status: Keyboard projection as it was before this guess
            on_complete: Called once the last event has been consumed

        Returns:
            FeedbackSequence with one event per position
        """
        if len(guess) != len(classifications):
            raise ValueError("Every letter of the guess needs exactly one classification")

        # Keys change colour tile by tile, so fold the verdicts in position order
        running = dict(key_status)
        events = []
        for position, (letter, status) in enumerate(zip(guess, classifications)):
            running[letter] = running.get(letter, LetterStatus.UNKNOWN).best(status)
            events.append(RevealEvent(
                session_id=session_id,
                row=row,
                position=position,
                letter=letter,
                status=status,
                key_status=running[letter],
                delay_ms=position * self.delay_unit_ms,
            ))

        resolution_delay_ms = len(events) * self.delay_unit_ms + self.resolution_margin_ms
        return FeedbackSequence(session_id, row, events, resolution_delay_ms, on_complete)
