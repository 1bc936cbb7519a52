"""
Game Service

Contains the session state machine for Develordle and the registry that keeps
one session per game id.
"""

import itertools
import logging
import string
import threading
import uuid
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import KEYBOARD_ROWS, MAX_ROUNDS, REVEAL_DELAY_MS
from ..models.game import (
    GameCondition, GameState, InputEvent, LetterStatus, Resolution, SessionStatus,
    SubmitResult
)
from .evaluator import evaluate_guess
from .feedback_sequencer import FeedbackSequencer
from .input_router import InputRouter
from .vocabulary import Vocabulary, default_vocabulary

logger = logging.getLogger(__name__)

# Shared by every session in the process so ids never repeat
_session_ids = itertools.count(1)


class GameSession:
    """
    One board: the hidden target, six row buffers, the cursor and the keyboard
    projection.

    Buffer edits are silently ignored once the session is no longer ACTIVE.
    A finished session keeps its WON/LOST status, but the player-facing
    resolution (and the revealed answer) only becomes available when the
    feedback of the deciding row has been fully consumed.
    """

    def __init__(self,
                 vocabulary: Optional[Vocabulary] = None,
                 sequencer: Optional[FeedbackSequencer] = None,
                 max_rounds: int = MAX_ROUNDS,
                 game_id: Optional[str] = None):
        self.game_id = game_id or str(uuid.uuid4())
        self.vocabulary = vocabulary or default_vocabulary()
        self.sequencer = sequencer or FeedbackSequencer()
        self.word_length = self.vocabulary.word_length
        self.max_rounds = max_rounds
        self.router = InputRouter(self)
        # Reveal tasks complete feedback on another thread
        self._lock = threading.RLock()
        self.new_session()

    def new_session(self) -> None:
        """Start over with a fresh target. Pending feedback from before becomes stale."""
        with self._lock:
            self._reset()

    def _reset(self) -> None:
        self.session_id = next(_session_ids)
        self._target = self.vocabulary.pick_target()
        self.rows: List[str] = [''] * self.max_rounds
        self.active_row = 0
        self.cursor = 0
        self.status = SessionStatus.ACTIVE
        self.key_status: Dict[str, LetterStatus] = {
            letter: LetterStatus.UNKNOWN for letter in string.ascii_uppercase
        }
        self.guess_results: List[List[Tuple[str, str]]] = []
        self._revealing = False
        # Keyboard as the player last saw it, held back while a row is revealing
        self._shown_key_status: Dict[str, LetterStatus] = dict(self.key_status)
        self._pending_condition: Optional[GameCondition] = None
        self._resolution: Optional[Resolution] = None

        logger.debug("Session %s started for game %s, target word: %s",
                     self.session_id, self.game_id, self._target)

    # Buffer editing

    def append_letter(self, char: str) -> bool:
        if self.status is not SessionStatus.ACTIVE or self.cursor >= self.word_length:
            return False
        self.rows[self.active_row] += char
        self.cursor += 1
        return True

    def delete_letter(self) -> bool:
        if self.status is not SessionStatus.ACTIVE or self.cursor == 0:
            return False
        self.cursor -= 1
        self.rows[self.active_row] = self.rows[self.active_row][:self.cursor]
        return True

    def submit_guess(self) -> SubmitResult:
        """
        Score the active row.

        Returns:
            SubmitResult carrying either the INCOMPLETE_GUESS condition (nothing
            changed) or the feedback sequence for the scored row
        """
        with self._lock:
            return self._score_active_row()

    def _score_active_row(self) -> SubmitResult:
        if self.status is not SessionStatus.ACTIVE:
            return SubmitResult(accepted=False)

        guess = self.rows[self.active_row]
        if len(guess) != self.word_length:
            return SubmitResult(accepted=False, condition=GameCondition.INCOMPLETE_GUESS)

        row = self.active_row
        session_id = self.session_id
        classifications = evaluate_guess(self._target, guess)

        feedback = self.sequencer.sequence(
            session_id, row, guess, classifications, self.key_status,
            on_complete=lambda: self._on_feedback_complete(session_id)
        )
        self._revealing = True
        self._update_key_status(guess, classifications)
        self.guess_results.append([(letter, status.value) for letter, status in zip(guess, classifications)])

        # Win check precedes the out-of-rows check
        if guess == self._target:
            self.status = SessionStatus.WON
            self._pending_condition = GameCondition.WON
        else:
            self.active_row += 1
            self.cursor = 0
            if self.active_row >= self.max_rounds:
                self.status = SessionStatus.LOST
                self._pending_condition = GameCondition.LOST

        logger.debug("Session %s row %s scored %s -> %s",
                     session_id, row, guess, [status.value for status in classifications])
        return SubmitResult(accepted=True, feedback=feedback)

    def route(self, event: InputEvent) -> Optional[SubmitResult]:
        """Dispatch a raw player input through the input router."""
        return self.router.route(event)

    def _update_key_status(self, guess: str, classifications: List[LetterStatus]) -> None:
        """Keys only ever move up in priority order."""
        for letter, status in zip(guess, classifications):
            current = self.key_status.get(letter, LetterStatus.UNKNOWN)
            self.key_status[letter] = current.best(status)

    def _on_feedback_complete(self, session_id: int) -> None:
        with self._lock:
            if session_id != self.session_id:
                logger.debug("Ignoring feedback completion from stale session %s", session_id)
                return
            self._revealing = False
            self._shown_key_status = dict(self.key_status)
            if self._pending_condition is not None and self._resolution is None:
                self._resolution = Resolution(
                    session_id=session_id,
                    condition=self._pending_condition,
                    answer=self._target,
                    message=self._pending_condition.message(self._target),
                )
                logger.info("Session %s resolved: %s", session_id, self._pending_condition.value)

    # Read accessors

    @property
    def feedback_pending(self) -> bool:
        return self._revealing

    @property
    def resolution(self) -> Optional[Resolution]:
        return self._resolution

    @property
    def revealed_target(self) -> Optional[str]:
        """The answer, once the session's result has been published."""
        return self._resolution.answer if self._resolution else None

    @property
    def is_over(self) -> bool:
        return self.status is not SessionStatus.ACTIVE

    def get_state(self) -> GameState:
        """
        Snapshot for rendering.

        While a row is still revealing, its verdicts, the keyboard colours it
        causes and the WON/LOST status it leads to are left out: the player
        learns them from the reveal events, in order.
        """
        with self._lock:
            pending = self.feedback_pending
            guess_results = self.guess_results[:-1] if pending else self.guess_results
            key_status = self._shown_key_status if pending else self.key_status
            shown_status = SessionStatus.ACTIVE if pending else self.status

            return GameState(
                game_id=self.game_id,
                session_id=self.session_id,
                rows=self.rows.copy(),
                active_row=self.active_row,
                cursor=self.cursor,
                status=shown_status.value,
                max_rounds=self.max_rounds,
                word_length=self.word_length,
                guess_results=[row.copy() for row in guess_results],
                letter_status={letter: status.value for letter, status in key_status.items()},
                keyboard=[row.copy() for row in KEYBOARD_ROWS],
                feedback_pending=pending,
                answer=self.revealed_target,
                message=self._resolution.message if self._resolution else None,
            )


class GameService:
    """
    Registry of game sessions.

    This class handles:
    - Game creation with unique game IDs
    - Restarting a game with a fresh session
    - Telling whether deferred events still belong to the current session
    """

    def __init__(self,
                 vocabulary: Optional[Vocabulary] = None,
                 max_rounds: int = MAX_ROUNDS,
                 reveal_delay_ms: int = REVEAL_DELAY_MS):
        self.games: Dict[str, GameSession] = {}
        self.vocabulary = vocabulary or default_vocabulary()
        self.max_rounds = max_rounds
        self.sequencer = FeedbackSequencer(reveal_delay_ms)

    def create_new_game(self) -> str:
        """
        Creates a new game with a randomly selected word.

        Returns:
            str: Unique game ID for this game
        """
        session = GameSession(self.vocabulary, self.sequencer, self.max_rounds)
        self.games[session.game_id] = session
        return session.game_id

    def get_session(self, game_id: str) -> Optional[GameSession]:
        return self.games.get(game_id)

    def new_session(self, game_id: str) -> Optional[GameState]:
        """
        Restarts a game with a new target word.

        Returns:
            The fresh GameState, or None if the game does not exist
        """
        session = self.games.get(game_id)
        if session is None:
            return None
        session.new_session()
        return session.get_state()

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current state of a game (without revealing the answer
        before the result is published).
        """
        session = self.games.get(game_id)
        if session is None:
            return None
        return session.get_state()

    def is_current(self, game_id: str, session_id: int) -> bool:
        """Whether an event stamped with session_id may still be shown for game_id."""
        session = self.games.get(game_id)
        return session is not None and session.session_id == session_id

    def delete_game(self, game_id: str) -> bool:
        """
        Deletes a game.

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            return True
        return False


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(**kwargs) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(**kwargs)
    return _game_service
