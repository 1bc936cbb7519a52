"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from ..config.game_settings import (
    INCOMPLETE_GUESS_MESSAGE, WIN_MESSAGE, LOSE_MESSAGE
)

if TYPE_CHECKING:
    from ..services.feedback_sequencer import FeedbackSequence


class LetterStatus(Enum):
    """Per-letter verdict of a guess, plus UNKNOWN for untouched keyboard keys."""
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    UNKNOWN = "UNKNOWN"

    @property
    def priority(self) -> int:
        return _STATUS_PRIORITY[self]

    def best(self, other: "LetterStatus") -> "LetterStatus":
        """Return whichever of the two statuses carries more information."""
        return other if other.priority > self.priority else self


_STATUS_PRIORITY = {
    LetterStatus.UNKNOWN: 0,
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


class SessionStatus(Enum):
    """Lifecycle of a session. WON and LOST are terminal."""
    ACTIVE = "ACTIVE"
    WON = "WON"
    LOST = "LOST"


class GameCondition(Enum):
    """Conditions the presentation layer has to show to the player."""
    INCOMPLETE_GUESS = "INCOMPLETE_GUESS"
    WON = "WON"
    LOST = "LOST"

    def message(self, target: Optional[str] = None) -> str:
        if self is GameCondition.INCOMPLETE_GUESS:
            return INCOMPLETE_GUESS_MESSAGE
        if self is GameCondition.WON:
            return WIN_MESSAGE
        return LOSE_MESSAGE.format(target=target)


class InputKind(Enum):
    LETTER = "letter"
    DELETE = "delete"
    SUBMIT = "submit"


# Raw key names used by physical keyboards and the on-screen keyboard
_SUBMIT_KEYS = {'ENTER', 'RETURN'}
_DELETE_KEYS = {'BACKSPACE', 'BACK', 'DELETE'}


@dataclass(frozen=True)
class InputEvent:
    """A single atomic player input."""
    kind: InputKind
    char: Optional[str] = None

    @classmethod
    def letter(cls, char: str) -> "InputEvent":
        return cls(InputKind.LETTER, char)

    @classmethod
    def delete(cls) -> "InputEvent":
        return cls(InputKind.DELETE)

    @classmethod
    def submit(cls) -> "InputEvent":
        return cls(InputKind.SUBMIT)

    @classmethod
    def from_key(cls, key: str) -> Optional["InputEvent"]:
        """
        Translate a raw key name into an input event.

        Args:
            key: Key name as reported by the client ("a", "Enter", "BACK", ...)

        Returns:
            InputEvent, or None when the key has no meaning in the game
        """
        if not isinstance(key, str) or not key:
            return None

        normalized = key.strip().upper()
        if normalized in _SUBMIT_KEYS:
            return cls.submit()
        if normalized in _DELETE_KEYS:
            return cls.delete()
        if len(normalized) == 1:
            return cls.letter(normalized)
        return None


@dataclass(frozen=True)
class RevealEvent:
    """One tile reveal: the verdict for a position and the key colour it leaves behind."""
    session_id: int
    row: int
    position: int
    letter: str
    status: LetterStatus
    key_status: LetterStatus
    delay_ms: int

    def to_dict(self) -> Dict:
        return {
            'session_id': self.session_id,
            'row': self.row,
            'position': self.position,
            'letter': self.letter,
            'status': self.status.value,
            'key_status': self.key_status.value,
            'delay_ms': self.delay_ms,
        }


@dataclass(frozen=True)
class Resolution:
    """Outcome of a finished session, published once its last row is revealed."""
    session_id: int
    condition: GameCondition
    answer: str
    message: str

    def to_dict(self) -> Dict:
        return {
            'session_id': self.session_id,
            'condition': self.condition.value,
            'answer': self.answer,
            'message': self.message,
        }


@dataclass
class SubmitResult:
    """What happened when the player pressed ENTER."""
    accepted: bool
    condition: Optional[GameCondition] = None
    feedback: Optional["FeedbackSequence"] = None

    @property
    def message(self) -> Optional[str]:
        if self.condition is GameCondition.INCOMPLETE_GUESS:
            return self.condition.message()
        return None


@dataclass
class GameState:
    """Snapshot of a session for rendering. Safe to serialize with asdict()."""
    game_id: str
    session_id: int
    rows: List[str]
    active_row: int
    cursor: int
    status: str
    max_rounds: int
    word_length: int
    guess_results: List[List[Tuple[str, str]]]  # Letter status as string for JSON serialization
    letter_status: Dict[str, str]
    keyboard: List[List[str]] = field(default_factory=list)
    feedback_pending: bool = False
    answer: Optional[str] = None  # Only included once the result is published
    message: Optional[str] = None
