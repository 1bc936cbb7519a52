"""
Input Router

Validates raw player input and forwards it to the session. All "ignore input
once the game is over" handling lives here.
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..models.game import InputEvent, InputKind, SessionStatus, SubmitResult

if TYPE_CHECKING:
    from .game_service import GameSession

logger = logging.getLogger(__name__)


class InputRouter:
    """Stateless dispatcher from InputEvent to session operations."""

    def __init__(self, session: "GameSession"):
        self.session = session

    def route(self, event: InputEvent) -> Optional[SubmitResult]:
        """
        Apply one input event.

        Returns:
            SubmitResult for an accepted submission attempt, None otherwise
        """
        session = self.session
        if session.status is not SessionStatus.ACTIVE:
            logger.debug("Session %s is over, discarding %s", session.session_id, event.kind.value)
            return None

        if event.kind is InputKind.LETTER:
            char = event.char
            if not isinstance(char, str) or len(char) != 1 or not (char.isascii() and char.isalpha()):
                logger.debug("Discarding invalid letter input %r", char)
                return None
            session.append_letter(char.upper())
            return None

        if event.kind is InputKind.DELETE:
            session.delete_letter()
            return None

        if event.kind is InputKind.SUBMIT:
            if session.feedback_pending:
                logger.debug("Row %s still revealing, discarding submit", session.active_row - 1)
                return None
            return session.submit_guess()

        return None
